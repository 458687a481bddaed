"""
Shared pytest fixtures for agent_skills_configurations tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import pathlib as _pathlib
import typing as _typing

import pytest as _pytest

import agent_skills_configurations.config as config
import agent_skills_configurations.environment as environment
import agent_skills_configurations.registry as registry

# Environment keys that affect resolution and must not leak from the host
ENV_KEYS_TO_CLEAR = [
    "XDG_CONFIG_HOME",
    "CLAUDE_CONFIG_DIR",
    "CODEX_HOME",
    "AGENT_SKILLS_AGENTS_FILE",
    "AGENT_SKILLS_STRICT_DETECTION",
]


@_pytest.fixture(autouse=True)
def clean_env(monkeypatch: _pytest.MonkeyPatch) -> None:
    """Remove host variables that would change path resolution."""
    for key in ENV_KEYS_TO_CLEAR:
        monkeypatch.delenv(key, raising=False)


@_pytest.fixture
def home(tmp_path: _pathlib.Path) -> _pathlib.Path:
    """An empty directory standing in for the user's home."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@_pytest.fixture
def workdir(tmp_path: _pathlib.Path) -> _pathlib.Path:
    """An empty directory standing in for the current working directory."""
    path = tmp_path / "work"
    path.mkdir()
    return path


@_pytest.fixture
def make_env(
    home: _pathlib.Path,
    workdir: _pathlib.Path,
) -> _typing.Callable[..., environment.Environment]:
    """
    Factory for an Environment pinned to the temporary home and workdir.

    Usage:
        def test_something(make_env):
            env = make_env({"XDG_CONFIG_HOME": "/custom/xdg"})
    """

    def _make(environ: dict[str, str] | None = None, **kwargs: _typing.Any) -> environment.Environment:
        kwargs.setdefault("home", str(home))
        kwargs.setdefault("cwd", str(workdir))
        return environment.Environment(environ if environ is not None else {}, **kwargs)

    return _make


@_pytest.fixture
def table_data() -> dict[str, _typing.Any]:
    """A small raw agent table covering every detection shape."""
    return {
        "base_paths": {
            "home": {"env_var": "", "fallback": ""},
            "xdg_config": {"env_var": "XDG_CONFIG_HOME", "fallback": ".config"},
            "claude_home": {"env_var": "CLAUDE_CONFIG_DIR", "fallback": ".claude"},
        },
        "agents": [
            {
                "name": "cursor",
                "display_name": "Cursor",
                "skills_dir": ".cursor/skills",
                "base_path": "home",
                "global_skills_path": ".cursor/skills",
                "detect_paths": [".cursor"],
            },
            {
                "name": "amp",
                "display_name": "Amp",
                "skills_dir": ".agents/skills",
                "base_path": "xdg_config",
                "global_skills_path": "agents/skills",
                "detect_paths": [{"base": "xdg_config", "path": "amp"}],
            },
            {
                "name": "claude-code",
                "display_name": "Claude Code",
                "skills_dir": ".claude/skills",
                "base_path": "claude_home",
                "global_skills_path": "skills",
                "detect_paths": [{"base": "claude_home", "path": ""}],
            },
            {
                "name": "moltbot",
                "display_name": "Moltbot",
                "skills_dir": "skills",
                "base_path": "home",
                "global_skills_path": ".moltbot/skills",
                "global_skills_path_fallbacks": [".clawdbot/skills", ".moltbot/skills"],
                "detect_paths": [{"cwd": ".moltbot"}],
            },
            {
                "name": "always",
                "display_name": "Always There",
                "skills_dir": ".always/skills",
                "base_path": "home",
                "global_skills_path": ".always/skills",
                "detect_paths": [""],
            },
            {
                "name": "never",
                "display_name": "Never There",
                "skills_dir": ".never/skills",
                "base_path": "home",
                "global_skills_path": ".never/skills",
            },
        ],
    }


@_pytest.fixture
def table(table_data: dict[str, _typing.Any]) -> config.AgentTable:
    """The validated sample table."""
    return config.build_table(table_data)


@_pytest.fixture
def make_registry(
    table: config.AgentTable,
    make_env: _typing.Callable[..., environment.Environment],
) -> _typing.Callable[..., registry.Registry]:
    """Factory for a Registry over the sample table with a pinned environment."""

    def _make(environ: dict[str, str] | None = None, **kwargs: _typing.Any) -> registry.Registry:
        return registry.Registry(table, make_env(environ, **kwargs))

    return _make


@_pytest.fixture
def write_table(tmp_path: _pathlib.Path) -> _typing.Callable[[str], _pathlib.Path]:
    """Write YAML text to a table file and return its path."""

    def _write(content: str) -> _pathlib.Path:
        path = tmp_path / "agents.yaml"
        path.write_text(content, encoding="utf-8")
        return path

    return _write
