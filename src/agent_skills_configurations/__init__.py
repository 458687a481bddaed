"""
agent_skills_configurations - skill directory locations for AI coding agents.

Each agent (Cursor, Claude Code, Codex, ...) keeps skills in two places:

1. A project-relative skills directory (e.g. ``.cursor/skills``)
2. An absolute global skills directory (e.g. ``~/.cursor/skills``),
   resolved from environment variables such as XDG_CONFIG_HOME,
   CLAUDE_CONFIG_DIR and CODEX_HOME with fallbacks under the home directory

Usage::

    import agent_skills_configurations as asc

    registry = asc.load_registry()
    registry.find("claude-code").global_skills_dir
    [agent.name for agent in registry.detected()]
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("agent-skills-configurations")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)

from agent_skills_configurations.agent import Agent  # noqa: E402
from agent_skills_configurations.config import Settings  # noqa: E402
from agent_skills_configurations.environment import Environment  # noqa: E402
from agent_skills_configurations.errors import (  # noqa: E402
    AgentSkillsError,
    MalformedConfigError,
    UnknownAgentError,
)
from agent_skills_configurations.registry import Registry, load_registry  # noqa: E402

__all__ = [
    "__version__",
    "__version_info__",
    "Agent",
    "AgentSkillsError",
    "Environment",
    "MalformedConfigError",
    "Registry",
    "Settings",
    "UnknownAgentError",
    "load_registry",
]
