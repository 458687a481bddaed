"""
Shared constants for agent_skills_configurations.

Single source of truth for values used across the resolver, loader,
and settings modules.
"""

ENV_PREFIX = "AGENT_SKILLS_"
"""Prefix for environment variables read by Settings."""

HOME_MARKERS = ("~", "")
"""Base-path env_var / fallback values that mean "the home directory itself"."""

FALLBACK_HOME_DIR = "/tmp"
"""Last-resort home directory when neither the OS nor tempfile can supply one."""

BUILTIN_AGENTS_FILENAME = "agents.yaml"
"""Name of the bundled agent table under the package data directory."""
