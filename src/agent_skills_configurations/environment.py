"""
Process environment access for path resolution and detection.

The resolvers never touch ``os`` directly. They go through an
Environment, which reads environment variables, the home directory,
the working directory, and answers existence probes. Every primitive can
be replaced at construction time, which is how tests pin the home
directory or simulate a filesystem.

Empty environment variable values are treated as unset everywhere.
"""

from __future__ import annotations

import collections.abc as _abc
import logging as _logging
import os as _os
import pathlib as _pathlib
import tempfile as _tempfile

import agent_skills_configurations.constants as constants

_logger = _logging.getLogger(__name__)

PathProbe = _abc.Callable[[str], bool]


def _default_home() -> str:
    try:
        home = str(_pathlib.Path.home())
    except (RuntimeError, KeyError, OSError) as e:
        home = ""
        _logger.debug("Could not determine home directory: %s", e)
    if home:
        return home

    try:
        fallback = _tempfile.gettempdir()
    except OSError:
        fallback = constants.FALLBACK_HOME_DIR
    _logger.warning("Home directory unavailable, using %s", fallback)
    return fallback


def _probe(check: PathProbe, path: str) -> bool:
    """Run an existence check, reporting failures as "does not exist"."""
    try:
        return bool(check(path))
    except OSError as e:
        _logger.debug("Existence probe failed for %s: %s", path, e)
        return False


class Environment:
    """
    Injectable view of the process environment and filesystem.

    With no arguments every primitive reads live process state. Pass
    ``environ``, ``home`` or ``cwd`` to pin those values, and ``exists`` /
    ``is_dir`` to replace the filesystem predicates.
    """

    def __init__(
        self,
        environ: _abc.Mapping[str, str] | None = None,
        *,
        home: str | None = None,
        cwd: str | None = None,
        exists: PathProbe | None = None,
        is_dir: PathProbe | None = None,
    ) -> None:
        self._environ = environ
        self._home = home
        self._cwd = cwd
        self._exists = exists or _os.path.exists
        self._is_dir = is_dir or _os.path.isdir

    def get_env(self, name: str) -> str | None:
        """Return the raw value of an environment variable, or None."""
        environ = self._environ if self._environ is not None else _os.environ
        return environ.get(name)

    def is_set(self, name: str | None) -> bool:
        """
        Check whether an environment variable holds a usable value.

        Returns False for an empty or missing name, an unset variable,
        or a variable set to the empty string.
        """
        if not name:
            return False
        return bool(self.get_env(name))

    def home_dir(self) -> str:
        """Return the user's home directory (never empty)."""
        if self._home:
            return self._home
        return _default_home()

    def current_dir(self) -> str:
        """Return the current working directory."""
        if self._cwd:
            return self._cwd
        try:
            return _os.getcwd()
        except OSError as e:
            # cwd removed underneath us
            _logger.debug("Could not read working directory: %s", e)
            return self.home_dir()

    def exists(self, path: str) -> bool:
        """True if ``path`` exists as a file or directory."""
        return _probe(self._exists, path)

    def is_dir(self, path: str) -> bool:
        """True if ``path`` exists and is a directory."""
        return _probe(self._is_dir, path)
