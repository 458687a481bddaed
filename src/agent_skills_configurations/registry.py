"""
Agent registry.

The registry holds a validated agent table, resolves Agent records on
demand, and memoizes the two collection queries:

- find(name): always recomputed, reflects the environment at call time
- all(): every agent in table order, cached until reset()
- detected(): the subset of all() whose detect paths match, cached
  independently until reset()

Construct one registry and pass it around::

    registry = load_registry()
    registry.find("cursor").global_skills_dir  # => "/home/me/.cursor/skills"

Call reset() after changing environment variables or creating agent
directories to force re-resolution.
"""

from __future__ import annotations

import logging as _logging
import pathlib as _pathlib
import threading as _threading
import typing as _typing

import agent_skills_configurations.agent as agent_module
import agent_skills_configurations.config.settings as settings_module
import agent_skills_configurations.config.sources as sources
import agent_skills_configurations.config.types as types
import agent_skills_configurations.detection as detection
import agent_skills_configurations.environment as environment_module
import agent_skills_configurations.errors as errors
import agent_skills_configurations.paths as paths

_logger = _logging.getLogger(__name__)

_T = _typing.TypeVar("_T")


class _CacheCell(_typing.Generic[_T]):
    """
    Lazily populated, explicitly clearable value.

    Two states: empty (``_value is None``) and populated. The owner
    serializes access with its own lock.
    """

    __slots__ = ("_value",)

    def __init__(self) -> None:
        self._value: _T | None = None

    @property
    def populated(self) -> bool:
        return self._value is not None

    def get_or_compute(self, compute: _typing.Callable[[], _T]) -> _T:
        if self._value is None:
            self._value = compute()
        return self._value

    def clear(self) -> None:
        self._value = None


class Registry:
    """
    Resolves agents from a static table.

    Thread-safe: cache population and reset() run under one re-entrant
    lock, so callers never observe a partially built collection.
    """

    def __init__(
        self,
        table: types.AgentTable,
        environment: environment_module.Environment | None = None,
    ) -> None:
        """
        Initialize the registry.

        Args:
            table: Validated agent table.
            environment: Environment used for resolution and detection.
                Defaults to the live process environment.
        """
        self._table = table
        self._environment = environment or environment_module.Environment()
        self._lock = _threading.RLock()
        self._all: _CacheCell[tuple[agent_module.Agent, ...]] = _CacheCell()
        self._detected: _CacheCell[tuple[agent_module.Agent, ...]] = _CacheCell()

    @classmethod
    def from_file(
        cls,
        path: _pathlib.Path,
        environment: environment_module.Environment | None = None,
        *,
        strict_detection: bool = False,
    ) -> Registry:
        """
        Build a registry from an agent table file.

        Raises:
            MalformedConfigError: If the table is unreadable or invalid.
        """
        table = sources.load_table(path, strict_detection=strict_detection)
        return cls(table, environment)

    @property
    def table(self) -> types.AgentTable:
        """The underlying agent table."""
        return self._table

    @property
    def environment(self) -> environment_module.Environment:
        """The environment used for resolution."""
        return self._environment

    # Lookup
    def definition(self, name: str) -> types.AgentDefinition:
        """
        Get the static definition for an agent.

        Raises:
            UnknownAgentError: If the name is not in the table.
        """
        entry = self._table.get_agent(name)
        if entry is None:
            raise errors.UnknownAgentError(name)
        return entry

    def find(self, name: str) -> agent_module.Agent:
        """
        Find an agent by name, resolving its paths now.

        Never served from cache.

        Args:
            name: Canonical agent name.

        Returns:
            A freshly resolved Agent.

        Raises:
            UnknownAgentError: If the name is not in the table.
        """
        return self._build_agent(self.definition(name))

    def names(self) -> list[str]:
        """Agent names in table order."""
        return self._table.names()

    def is_detected(self, name: str) -> bool:
        """
        Check one agent's detect paths now, bypassing the detected() cache.

        Raises:
            UnknownAgentError: If the name is not in the table.
        """
        return detection.is_detected(
            self.definition(name), self._table.base_paths, self._environment
        )

    # Cached collections
    def all(self) -> tuple[agent_module.Agent, ...]:
        """
        Return every agent in table order.

        The same tuple is returned on each call until reset().
        """
        with self._lock:
            return self._all.get_or_compute(self._build_all)

    def detected(self) -> tuple[agent_module.Agent, ...]:
        """
        Return agents whose detect paths are present, in table order.

        Derived from all() and cached separately until reset().
        """
        with self._lock:
            return self._detected.get_or_compute(self._build_detected)

    def reset(self) -> None:
        """Clear both cached collections. Safe to call repeatedly."""
        with self._lock:
            self._all.clear()
            self._detected.clear()

    # Serialization
    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to dictionary for JSON serialization."""
        detected_names = {agent.name for agent in self.detected()}
        return {
            "agent_count": len(self._table.agents),
            "agents": [
                {**agent.to_dict(), "detected": agent.name in detected_names}
                for agent in self.all()
            ],
        }

    def _build_agent(self, entry: types.AgentDefinition) -> agent_module.Agent:
        base = paths.resolve_base_path(
            entry.base_path, self._table.base_paths, self._environment
        )
        global_path = paths.resolve_global_skills_path(
            entry.global_skills_path,
            entry.global_skills_path_fallbacks,
            base,
            self._environment,
        )
        return agent_module.Agent(
            name=entry.name,
            display_name=entry.display_name,
            skills_dir=entry.skills_dir,
            global_skills_dir=global_path,
        )

    def _build_all(self) -> tuple[agent_module.Agent, ...]:
        agents = tuple(self._build_agent(entry) for entry in self._table.agents)
        _logger.debug("Resolved %d agents", len(agents))
        return agents

    def _build_detected(self) -> tuple[agent_module.Agent, ...]:
        base_paths = self._table.base_paths
        found = tuple(
            agent
            for entry, agent in zip(self._table.agents, self.all(), strict=True)
            if detection.is_detected(entry, base_paths, self._environment)
        )
        _logger.debug("Detected agents: %s", ", ".join(a.name for a in found) or "none")
        return found


def load_registry(
    settings: settings_module.Settings | None = None,
    environment: environment_module.Environment | None = None,
) -> Registry:
    """
    Build a registry from settings.

    Args:
        settings: Package settings. Defaults to Settings() read from the
            environment (AGENT_SKILLS_*).
        environment: Environment for resolution. Defaults to the live one.

    Raises:
        MalformedConfigError: If the configured table is unreadable or invalid.
    """
    if settings is None:
        settings = settings_module.Settings()
    return Registry(settings.load_table(), environment)
