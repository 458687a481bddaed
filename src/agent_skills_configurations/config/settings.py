"""
Settings configuration using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with AGENT_SKILLS_ prefix
3. Field defaults

Example:
  AGENT_SKILLS_AGENTS_FILE=/etc/agent-skills/agents.yaml
  AGENT_SKILLS_STRICT_DETECTION=true
"""

from __future__ import annotations

import pathlib as _pathlib

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import agent_skills_configurations.config.sources as sources
import agent_skills_configurations.config.types as types
import agent_skills_configurations.constants as constants


class Settings(_pydantic_settings.BaseSettings):
    """
    Package settings.

    These control where the agent table comes from and how strictly it is
    validated. They do not affect path resolution itself, which reads the
    variables named in the table (XDG_CONFIG_HOME, CLAUDE_CONFIG_DIR, ...).
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix=constants.ENV_PREFIX,
        extra="ignore",
    )

    agents_file: _pathlib.Path | None = _pydantic.Field(
        default=None,
        description="Agent table to load instead of the bundled one",
    )

    strict_detection: bool = _pydantic.Field(
        default=False,
        description="Reject detect_paths entries of unknown shape at load time",
    )

    @_pydantic.field_validator("agents_file", mode="before")
    @classmethod
    def _empty_is_unset(cls, value: object) -> object:
        return None if value == "" else value

    def get_agents_path(self) -> _pathlib.Path:
        """Return the table file in effect (override or bundled)."""
        if self.agents_file is not None:
            return self.agents_file.expanduser()
        return sources.get_builtin_agents_path()

    def load_table(self) -> types.AgentTable:
        """Load and validate the agent table these settings point at."""
        return sources.load_table(
            self.get_agents_path(),
            strict_detection=self.strict_detection,
        )
