"""Loading the agent table from YAML.

The bundled table lives at ``data/agents.yaml`` inside the package.
Settings.agents_file (AGENT_SKILLS_AGENTS_FILE) points at a replacement
table; there is no layering, the chosen file is the whole table.

Every failure here (unreadable file, malformed YAML, wrong top-level type,
schema violations, dangling base path references) surfaces as
MalformedConfigError so that a registry is never built from a partially
valid table.
"""

from __future__ import annotations

import logging as _logging
import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic
import yaml as _yaml

import agent_skills_configurations.config.types as types
import agent_skills_configurations.constants as constants
import agent_skills_configurations.errors as errors

_logger = _logging.getLogger(__name__)


def get_builtin_agents_path() -> _pathlib.Path:
    """
    Get the path to the bundled agent table.

    Returns:
        Path to data/agents.yaml within the installed package.
    """
    return _pathlib.Path(__file__).parent.parent / "data" / constants.BUILTIN_AGENTS_FILENAME


def _load_yaml_file(path: _pathlib.Path) -> dict[str, _typing.Any]:
    """
    Read a YAML file and return its top-level mapping.

    Raises:
        MalformedConfigError: If the file cannot be read, is malformed YAML,
            or is not a mapping at the top level.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise errors.MalformedConfigError(path, f"permission denied: {e}") from e
    except OSError as e:
        raise errors.MalformedConfigError(path, f"cannot read file: {e}") from e

    try:
        parsed = _yaml.safe_load(content)
    except _yaml.YAMLError as e:
        raise errors.MalformedConfigError(path, f"invalid YAML: {e}") from e

    if parsed is None:
        raise errors.MalformedConfigError(path, "agent table is empty")
    if not isinstance(parsed, dict):
        type_name = type(parsed).__name__
        raise errors.MalformedConfigError(
            path,
            f"agent table must be a YAML mapping (dict), got {type_name}",
        )
    return parsed


def build_table(
    data: _typing.Mapping[str, _typing.Any],
    *,
    path: _pathlib.Path | None = None,
    strict_detection: bool = False,
) -> types.AgentTable:
    """
    Validate raw table data into an AgentTable.

    Args:
        data: Parsed table contents (``base_paths`` and ``agents``).
        path: Source file, used only in error messages.
        strict_detection: Reject detection entries of unknown shape
            instead of treating them as never matching.

    Returns:
        The validated, frozen table.

    Raises:
        MalformedConfigError: If validation fails.
    """
    try:
        table = types.AgentTable.model_validate(data)
    except _pydantic.ValidationError as e:
        raise errors.MalformedConfigError(path, str(e)) from e

    for agent in table.agents:
        unrecognized = agent.unrecognized_detect_paths()
        if not unrecognized:
            continue
        if strict_detection:
            raise errors.MalformedConfigError(
                path,
                f"agent {agent.name!r} has unrecognized detect path "
                f"{unrecognized[0].raw}",
            )
        for spec in unrecognized:
            _logger.warning(
                "Agent %s: ignoring unrecognized detect path %s", agent.name, spec.raw
            )

    return table


def load_table(
    path: _pathlib.Path | None = None,
    *,
    strict_detection: bool = False,
) -> types.AgentTable:
    """
    Load and validate an agent table file.

    Args:
        path: Table file to load. Defaults to the bundled table.
        strict_detection: See build_table().

    Raises:
        MalformedConfigError: If the file is unreadable or invalid.
    """
    if path is None:
        path = get_builtin_agents_path()
    _logger.debug("Loading agent table from %s", path)
    data = _load_yaml_file(path)
    return build_table(data, path=path, strict_detection=strict_detection)
