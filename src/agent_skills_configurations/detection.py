"""
Agent presence detection.

An agent is detected if any entry in its ``detect_paths`` matches:

* HomeRelative: path exists under home (empty path always matches)
* CwdRelative: path exists under the current working directory
* BaseRelative: path exists under a resolved base path (empty path:
  the base is an existing directory)
* Absolute: path exists as given
* Unrecognized: never matches

Detection is a best-effort probe. It never raises for odd entries or
failing filesystem checks.
"""

from __future__ import annotations

import collections.abc as _abc
import os as _os

import agent_skills_configurations.config.types as types
import agent_skills_configurations.environment as environment_module
import agent_skills_configurations.paths as paths


def matches(
    spec: types.DetectSpec,
    base_paths: _abc.Mapping[str, types.BasePathDefinition],
    environment: environment_module.Environment,
) -> bool:
    """Evaluate a single detection spec."""
    if isinstance(spec, types.HomeRelative):
        if not spec.path:
            return True
        return environment.exists(_os.path.join(environment.home_dir(), spec.path))

    if isinstance(spec, types.CwdRelative):
        return environment.exists(_os.path.join(environment.current_dir(), spec.path))

    if isinstance(spec, types.BaseRelative):
        if spec.base not in base_paths:
            return False
        base = paths.expand_home(
            paths.resolve_base_path(spec.base, base_paths, environment),
            environment.home_dir(),
        )
        if not spec.path:
            return environment.is_dir(base)
        return environment.exists(_os.path.join(base, spec.path))

    if isinstance(spec, types.Absolute):
        return environment.exists(spec.path)

    return False


def is_detected(
    definition: types.AgentDefinition,
    base_paths: _abc.Mapping[str, types.BasePathDefinition],
    environment: environment_module.Environment,
) -> bool:
    """True if any of the agent's detect paths matches."""
    return any(
        matches(spec, base_paths, environment) for spec in definition.detect_paths
    )
