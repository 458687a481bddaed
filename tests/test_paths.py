"""
Tests for base path and global skills path resolution.
"""

import pathlib as _pathlib
import typing as _typing

import pytest as _pytest

import agent_skills_configurations.config.types as types
import agent_skills_configurations.environment as environment
import agent_skills_configurations.paths as paths

BASE_PATHS = {
    "home": types.BasePathDefinition(key="home", env_var="", fallback=""),
    "tilde": types.BasePathDefinition(key="tilde", env_var="~", fallback=".ignored"),
    "xdg_config": types.BasePathDefinition(
        key="xdg_config", env_var="XDG_CONFIG_HOME", fallback=".config"
    ),
    "plain_home_fallback": types.BasePathDefinition(
        key="plain_home_fallback", env_var="SOME_DIR", fallback="~"
    ),
}


class TestResolveBasePath:
    """Tests for resolve_base_path."""

    def _resolve(self, key: str, environ: dict[str, str]) -> str:
        env = environment.Environment(environ, home="/home/u")
        return paths.resolve_base_path(key, BASE_PATHS, env)

    def test_env_var_set(self) -> None:
        """A set variable is returned verbatim."""
        assert self._resolve("xdg_config", {"XDG_CONFIG_HOME": "/custom/xdg"}) == "/custom/xdg"

    def test_env_var_unset_uses_fallback(self) -> None:
        assert self._resolve("xdg_config", {}) == "/home/u/.config"

    def test_env_var_empty_uses_fallback(self) -> None:
        """Empty value is treated as unset."""
        assert self._resolve("xdg_config", {"XDG_CONFIG_HOME": ""}) == "/home/u/.config"

    def test_empty_env_var_name_is_home(self) -> None:
        assert self._resolve("home", {"": "/never"}) == "/home/u"

    def test_tilde_env_var_name_is_home(self) -> None:
        """env_var "~" always means home, the fallback is never consulted."""
        assert self._resolve("tilde", {}) == "/home/u"

    def test_tilde_fallback_is_home(self) -> None:
        assert self._resolve("plain_home_fallback", {}) == "/home/u"

    def test_value_not_checked_for_existence(self, tmp_path: _pathlib.Path) -> None:
        """The resolver computes a location, it does not require it to exist."""
        missing = str(tmp_path / "does-not-exist")
        assert self._resolve("xdg_config", {"XDG_CONFIG_HOME": missing}) == missing

    def test_unknown_key_fails_fast(self) -> None:
        with _pytest.raises(KeyError):
            self._resolve("nope", {})


class TestExpandPath:
    """Tests for expand_path."""

    def test_join_and_normalize(self) -> None:
        assert paths.expand_path("./a/../skills", "/home/u/", "/cwd") == "/home/u/skills"

    def test_absolute_path_ignores_base(self) -> None:
        assert paths.expand_path("/opt/skills", "/home/u", "/cwd") == "/opt/skills"

    def test_relative_base_anchored_on_cwd(self) -> None:
        assert paths.expand_path("skills", "rel/base", "/cwd") == "/cwd/rel/base/skills"

    def test_tilde_base_expanded_against_home(self) -> None:
        result = paths.expand_path("skills", "~/cfg", "/w", "/home/u")
        assert result == "/home/u/cfg/skills"

    def test_tilde_path_expanded_against_home(self) -> None:
        assert paths.expand_path("~/skills", "/base", "/w", "/home/u") == "/home/u/skills"

    def test_bare_tilde_is_home(self) -> None:
        assert paths.expand_path("skills", "~", "/w", "/home/u") == "/home/u/skills"

    def test_tilde_user_left_alone(self) -> None:
        """Only the current user's home is expanded."""
        assert paths.expand_path("skills", "~bob/x", "/w", "/home/u") == "/w/~bob/x/skills"

    def test_tilde_kept_without_home(self) -> None:
        assert paths.expand_path("skills", "~/cfg", "/w") == "/w/~/cfg/skills"


class TestResolveGlobalSkillsPath:
    """Tests for resolve_global_skills_path."""

    PRIMARY = ".moltbot/skills"
    FALLBACKS = (".clawdbot/skills", ".moltbot/skills")

    def _resolve(self, home: _pathlib.Path, **kwargs: _typing.Any) -> str:
        env = environment.Environment({}, home=str(home), cwd=str(home), **kwargs)
        return paths.resolve_global_skills_path(
            self.PRIMARY, self.FALLBACKS, str(home), env
        )

    def test_only_fallback_exists(self, tmp_path: _pathlib.Path) -> None:
        (tmp_path / ".clawdbot" / "skills").mkdir(parents=True)
        assert self._resolve(tmp_path) == str(tmp_path / ".clawdbot" / "skills")

    def test_primary_preferred_when_both_exist(self, tmp_path: _pathlib.Path) -> None:
        (tmp_path / ".clawdbot" / "skills").mkdir(parents=True)
        (tmp_path / ".moltbot" / "skills").mkdir(parents=True)
        assert self._resolve(tmp_path) == str(tmp_path / ".moltbot" / "skills")

    def test_none_exist_returns_primary(self, tmp_path: _pathlib.Path) -> None:
        assert self._resolve(tmp_path) == str(tmp_path / ".moltbot" / "skills")

    def test_file_is_not_a_candidate(self, tmp_path: _pathlib.Path) -> None:
        """Candidates must be directories; a file with the name is skipped."""
        (tmp_path / ".clawdbot").mkdir()
        (tmp_path / ".clawdbot" / "skills").write_text("not a dir")
        assert self._resolve(tmp_path) == str(tmp_path / ".moltbot" / "skills")

    def test_spec_example_paths(self) -> None:
        """With simulated filesystem: only /home/u/.clawdbot/skills exists."""
        present = {"/home/u/.clawdbot/skills"}
        env = environment.Environment({}, home="/home/u", is_dir=present.__contains__)
        result = paths.resolve_global_skills_path(
            self.PRIMARY, self.FALLBACKS, "/home/u", env
        )
        assert result == "/home/u/.clawdbot/skills"

        env = environment.Environment({}, home="/home/u", is_dir=lambda _p: False)
        result = paths.resolve_global_skills_path(
            self.PRIMARY, self.FALLBACKS, "/home/u", env
        )
        assert result == "/home/u/.moltbot/skills"

    def test_candidates_tried_in_order(self) -> None:
        """Primary first, then fallbacks in order, duplicates included."""
        probed: list[str] = []

        def _record(path: str) -> bool:
            probed.append(path)
            return False

        env = environment.Environment({}, home="/home/u", is_dir=_record)
        paths.resolve_global_skills_path(self.PRIMARY, self.FALLBACKS, "/home/u", env)
        assert probed == [
            "/home/u/.moltbot/skills",
            "/home/u/.clawdbot/skills",
            "/home/u/.moltbot/skills",
        ]

    def test_probe_errors_do_not_propagate(self) -> None:
        def _boom(_path: str) -> bool:
            raise OSError("I/O error")

        env = environment.Environment({}, home="/home/u", is_dir=_boom)
        result = paths.resolve_global_skills_path(
            self.PRIMARY, self.FALLBACKS, "/home/u", env
        )
        assert result == "/home/u/.moltbot/skills"

    def test_tilde_env_value_expanded(self) -> None:
        """XDG_CONFIG_HOME="~/cfg" resolves under home, not under the cwd."""
        env = environment.Environment(
            {"XDG_CONFIG_HOME": "~/cfg"}, home="/home/u", cwd="/w", is_dir=lambda _p: False
        )
        base = paths.resolve_base_path("xdg_config", BASE_PATHS, env)
        assert base == "~/cfg"
        result = paths.resolve_global_skills_path("skills", (), base, env)
        assert result == "/home/u/cfg/skills"
