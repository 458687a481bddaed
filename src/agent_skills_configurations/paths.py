"""
Base path and global skills path resolution.

Resolution order for a base path (e.g. ``xdg_config``):
1. env_var is "" or "~": the home directory
2. env_var is set and non-empty: its raw value
3. fallback is "" or "~": the home directory
4. otherwise: home joined with fallback

The global skills path is the first of [primary, *fallbacks] that exists
as a directory under the base path, or the primary when none do.
A leading "~" in an env var value is expanded against the home directory
when the value is used as a base.
"""

from __future__ import annotations

import collections.abc as _abc
import logging as _logging
import os as _os

import agent_skills_configurations.config.types as types
import agent_skills_configurations.constants as constants
import agent_skills_configurations.environment as environment_module

_logger = _logging.getLogger(__name__)


def resolve_base_path(
    key: str,
    base_paths: _abc.Mapping[str, types.BasePathDefinition],
    environment: environment_module.Environment,
) -> str:
    """
    Compute where a base path should be. No existence check.

    Args:
        key: Base path key from the table.
        base_paths: The table's base path definitions.
        environment: Source of env vars and the home directory.

    Returns:
        The base directory.

    Raises:
        KeyError: If ``key`` is not defined. Tables are validated at load
            time, so this indicates a bypassed validation.
    """
    definition = base_paths[key]
    home = environment.home_dir()

    if definition.env_var in constants.HOME_MARKERS:
        return home
    if environment.is_set(definition.env_var):
        value = environment.get_env(definition.env_var)
        assert value is not None
        _logger.debug("Base path %s from $%s: %s", key, definition.env_var, value)
        return value

    if definition.fallback in constants.HOME_MARKERS:
        return home
    return _os.path.join(home, definition.fallback)


def expand_home(path: str, home: str) -> str:
    """Replace a leading ``~`` (alone or followed by ``/``) with ``home``.

    ``~user`` forms are left alone.
    """
    if path == "~":
        return home
    if path.startswith("~/"):
        return _os.path.join(home, path[2:])
    return path


def expand_path(path: str, base_path: str, cwd: str, home: str | None = None) -> str:
    """
    Join ``path`` onto ``base_path`` and normalize.

    An absolute ``path`` ignores the base. A relative ``base_path`` is
    anchored on ``cwd`` so the result is always absolute. When ``home`` is
    given, a leading ``~`` in either part is expanded against it first.
    """
    if home is not None:
        path = expand_home(path, home)
        base_path = expand_home(base_path, home)
    return _os.path.normpath(_os.path.join(cwd, base_path, path))


def resolve_global_skills_path(
    primary: str,
    fallbacks: _abc.Sequence[str],
    base_path: str,
    environment: environment_module.Environment,
) -> str:
    """
    Pick the global skills directory for an agent.

    Candidates are tried in order (primary first, duplicates kept). The
    first one that exists as a directory wins; if none exist the primary
    expansion is returned, so callers always get a deterministic path.
    """
    cwd = environment.current_dir()
    home = environment.home_dir()
    for candidate in (primary, *fallbacks):
        resolved = expand_path(candidate, base_path, cwd, home)
        if environment.is_dir(resolved):
            return resolved

    return expand_path(primary, base_path, cwd, home)
