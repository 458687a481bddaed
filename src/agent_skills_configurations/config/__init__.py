"""
Configuration module for agent_skills_configurations.

Holds the agent table schema, the YAML loader, and package settings
(pydantic-settings, AGENT_SKILLS_ prefix).
"""

from agent_skills_configurations.config.settings import Settings
from agent_skills_configurations.config.sources import (
    build_table,
    get_builtin_agents_path,
    load_table,
)
from agent_skills_configurations.config.types import (
    Absolute,
    AgentDefinition,
    AgentTable,
    BasePathDefinition,
    BaseRelative,
    CwdRelative,
    DetectSpec,
    HomeRelative,
    Unrecognized,
    parse_detect_spec,
)

__all__ = [
    "Settings",
    # Loading
    "build_table",
    "get_builtin_agents_path",
    "load_table",
    # Table types
    "AgentDefinition",
    "AgentTable",
    "BasePathDefinition",
    # Detection specs
    "Absolute",
    "BaseRelative",
    "CwdRelative",
    "DetectSpec",
    "HomeRelative",
    "Unrecognized",
    "parse_detect_spec",
]
