"""Exception types raised by agent_skills_configurations."""

from __future__ import annotations

import pathlib as _pathlib


class AgentSkillsError(Exception):
    """Base error for agent lookup and table loading failures."""

    pass


class UnknownAgentError(AgentSkillsError, LookupError):
    """Raised when a name is not present in the agent table."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown agent: {name}")


class MalformedConfigError(AgentSkillsError):
    """The agent table cannot be read or fails validation.

    Raised while building a registry; a registry is never constructed
    from a partially valid table.
    """

    def __init__(self, path: _pathlib.Path | None, message: str) -> None:
        self.path = path
        self.message = message
        location = str(path) if path is not None else "<in-memory>"
        super().__init__(f"Error in agent table {location}: {message}")
