"""
Resolved agent records.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import typing as _typing


@_dataclasses.dataclass(frozen=True, slots=True)
class Agent:
    """
    An agent with its skill directories resolved.

    Immutable value object: two agents are equal when all four fields are
    equal. Instances are built by Registry; they are never updated in
    place, a fresh lookup produces a fresh record.
    """

    name: str
    """Canonical agent name (e.g., 'cursor')."""

    display_name: str
    """Human-readable name (e.g., 'Cursor')."""

    skills_dir: str
    """Project-relative skills directory, copied from the table."""

    global_skills_dir: str
    """Absolute, user-wide skills directory."""

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to dictionary for JSON serialization."""
        return _dataclasses.asdict(self)
