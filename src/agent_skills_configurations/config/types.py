"""Agent table type definitions.

This module defines the Pydantic models for the static agent table:

- BasePathDefinition: env var + fallback that produce an anchor directory
- Detection specs: HomeRelative, CwdRelative, BaseRelative, Absolute,
  and Unrecognized for entries matching none of those shapes
- AgentDefinition: one agent's skill paths and detection rules
- AgentTable: the whole table, validated as a unit

All models are frozen. Ordered collections are stored as tuples so a
loaded table cannot be mutated after validation.

Raw YAML detection entries come in four shapes::

    detect_paths:
      - ".cursor"                        # HomeRelative
      - { cwd: ".agent" }                # CwdRelative
      - { base: xdg_config, path: "amp" } # BaseRelative
      - { absolute: "/etc/codex" }       # Absolute

Anything else becomes Unrecognized and never matches.
"""

from __future__ import annotations

import collections.abc as _abc
import typing as _typing

import pydantic as _pydantic

# =============================================================================
# Base class
# =============================================================================


class TableModel(_pydantic.BaseModel):
    """
    Base class for agent table models.

    Frozen so that loaded definitions can be shared freely between
    registries and threads. Unknown keys are preserved (``extra="allow"``)
    and can be listed with get_extra_fields() to audit a table for typos.
    """

    model_config = _pydantic.ConfigDict(frozen=True, extra="allow")

    def get_extra_fields(self) -> dict[str, _typing.Any]:
        """Return fields that were provided but are not in the schema."""
        return dict(self.model_extra) if self.model_extra else {}


# =============================================================================
# Base paths
# =============================================================================


class BasePathDefinition(TableModel):
    """
    Anchor directory definition.

    YAML section: base_paths.<key>
    """

    key: str = _pydantic.Field(..., min_length=1)
    """Unique key referenced by agents and BaseRelative specs."""

    env_var: str = ""
    """Environment variable to consult. "" or "~" means always use home."""

    fallback: str = ""
    """Home-relative path used when env_var is unset. "" or "~" means home."""

    @_pydantic.field_validator("env_var", "fallback", mode="before")
    @classmethod
    def _none_is_empty(cls, value: _typing.Any) -> _typing.Any:
        return "" if value is None else value


# =============================================================================
# Detection specs
# =============================================================================


class _DetectSpecBase(_pydantic.BaseModel):
    model_config = _pydantic.ConfigDict(frozen=True, extra="forbid")


class HomeRelative(_DetectSpecBase):
    """Path relative to the home directory. Empty path always matches."""

    kind: _typing.Literal["home"] = "home"
    path: str = ""


class CwdRelative(_DetectSpecBase):
    """Path relative to the current working directory."""

    kind: _typing.Literal["cwd"] = "cwd"
    path: str


class BaseRelative(_DetectSpecBase):
    """Path relative to a resolved base path. Empty path checks the base itself."""

    kind: _typing.Literal["base"] = "base"
    base: str
    path: str = ""


class Absolute(_DetectSpecBase):
    """Path checked exactly as given."""

    kind: _typing.Literal["absolute"] = "absolute"
    path: str


class Unrecognized(_DetectSpecBase):
    """An entry that matches none of the known shapes. Never detected."""

    kind: _typing.Literal["unrecognized"] = "unrecognized"
    raw: str = ""
    """repr() of the original entry, kept for log and error messages."""

    @_pydantic.field_validator("raw", mode="before")
    @classmethod
    def _raw_as_repr(cls, value: _typing.Any) -> str:
        return value if isinstance(value, str) else repr(value)


DetectSpec = _typing.Annotated[
    HomeRelative | CwdRelative | BaseRelative | Absolute | Unrecognized,
    _pydantic.Field(discriminator="kind"),
]

_SPECS_BY_KIND: dict[str, type[_DetectSpecBase]] = {
    "home": HomeRelative,
    "cwd": CwdRelative,
    "base": BaseRelative,
    "absolute": Absolute,
    "unrecognized": Unrecognized,
}


def _parse_dumped_spec(raw: _abc.Mapping[str, _typing.Any]) -> _DetectSpecBase:
    """Rebuild a spec from its model_dump() form; anything off becomes Unrecognized."""
    model = _SPECS_BY_KIND.get(raw["kind"]) if isinstance(raw["kind"], str) else None
    if model is None:
        return Unrecognized(raw=dict(raw))
    try:
        return model.model_validate(raw)
    except _pydantic.ValidationError:
        return Unrecognized(raw=dict(raw))


def parse_detect_spec(raw: _typing.Any) -> _typing.Any:
    """
    Convert one raw detect_paths entry into a detection spec.

    Keys are checked in the order absolute, cwd, base+path. Entries
    whose values are not strings, or that carry none of those keys,
    become Unrecognized rather than raising. Already-built spec models pass
    through; mappings in dumped form (with a ``kind`` key) are rebuilt when
    the kind is known and the entry validates, else become Unrecognized.
    """
    if isinstance(raw, _DetectSpecBase):
        return raw
    if isinstance(raw, str):
        return HomeRelative(path=raw)
    if not isinstance(raw, _abc.Mapping):
        return Unrecognized(raw=raw)
    if "kind" in raw:
        return _parse_dumped_spec(raw)

    if "absolute" in raw:
        value = raw["absolute"]
        return Absolute(path=value) if isinstance(value, str) else Unrecognized(raw=dict(raw))
    if "cwd" in raw:
        value = raw["cwd"]
        return CwdRelative(path=value) if isinstance(value, str) else Unrecognized(raw=dict(raw))
    if "base" in raw and "path" in raw:
        base, path = raw["base"], raw["path"]
        if isinstance(base, str) and isinstance(path, str):
            return BaseRelative(base=base, path=path)
    return Unrecognized(raw=dict(raw))


# =============================================================================
# Agents
# =============================================================================


class AgentDefinition(TableModel):
    """
    Static definition of one agent.

    YAML section: agents[*]
    """

    name: str = _pydantic.Field(..., min_length=1)
    """Canonical agent name (unique across the table)."""

    display_name: str
    """Human-readable name."""

    skills_dir: str
    """Project-relative skills directory. Never starts with "/"."""

    base_path: str
    """Key into the table's base_paths."""

    global_skills_path: str
    """Primary global skills path, relative to the resolved base path."""

    global_skills_path_fallbacks: tuple[str, ...] = ()
    """Further candidates tried in order after the primary."""

    detect_paths: tuple[DetectSpec, ...] = ()
    """Detection rules. The agent is detected if any one matches."""

    @_pydantic.field_validator("global_skills_path_fallbacks", mode="before")
    @classmethod
    def _none_is_empty_fallbacks(cls, value: _typing.Any) -> _typing.Any:
        return () if value is None else value

    @_pydantic.field_validator("detect_paths", mode="before")
    @classmethod
    def _parse_detect_paths(cls, value: _typing.Any) -> _typing.Any:
        if value is None:
            return ()
        if isinstance(value, (str, _abc.Mapping)) or not isinstance(value, _abc.Iterable):
            raise ValueError("detect_paths must be a list")
        return tuple(parse_detect_spec(item) for item in value)

    @_pydantic.field_validator("skills_dir")
    @classmethod
    def _skills_dir_is_relative(cls, value: str) -> str:
        if value.startswith("/"):
            raise ValueError(f"skills_dir must be relative, got {value!r}")
        return value

    def unrecognized_detect_paths(self) -> list[Unrecognized]:
        """Return detection entries that matched none of the known shapes."""
        return [spec for spec in self.detect_paths if isinstance(spec, Unrecognized)]


class AgentTable(TableModel):
    """
    The complete static agent table.

    Validated as a unit: duplicate names and references to undefined
    base paths are rejected here, before any registry is built.
    """

    base_paths: dict[str, BasePathDefinition] = _pydantic.Field(default_factory=dict)
    """Base path definitions keyed by BasePathDefinition.key."""

    agents: tuple[AgentDefinition, ...] = ()
    """Agent definitions in table order."""

    @_pydantic.field_validator("base_paths", mode="before")
    @classmethod
    def _inject_base_path_keys(cls, value: _typing.Any) -> _typing.Any:
        if value is None:
            return {}
        if not isinstance(value, _abc.Mapping):
            return value
        result: dict[str, _typing.Any] = {}
        for key, entry in value.items():
            if isinstance(entry, _abc.Mapping) and "key" not in entry:
                entry = {**entry, "key": key}
            result[key] = entry
        return result

    @_pydantic.field_validator("agents", mode="before")
    @classmethod
    def _none_is_empty_agents(cls, value: _typing.Any) -> _typing.Any:
        return () if value is None else value

    @_pydantic.model_validator(mode="after")
    def _check_references(self) -> AgentTable:
        for key, definition in self.base_paths.items():
            if definition.key != key:
                raise ValueError(
                    f"base path {key!r} declares mismatched key {definition.key!r}"
                )

        seen: set[str] = set()
        for agent in self.agents:
            if agent.name in seen:
                raise ValueError(f"duplicate agent name {agent.name!r}")
            seen.add(agent.name)

            if agent.base_path not in self.base_paths:
                raise ValueError(
                    f"agent {agent.name!r} references undefined base path "
                    f"{agent.base_path!r}"
                )
            for spec in agent.detect_paths:
                if isinstance(spec, BaseRelative) and spec.base not in self.base_paths:
                    raise ValueError(
                        f"agent {agent.name!r} detect path references undefined "
                        f"base path {spec.base!r}"
                    )
        return self

    def get_agent(self, name: str) -> AgentDefinition | None:
        """Look up an agent definition by exact name."""
        for agent in self.agents:
            if agent.name == name:
                return agent
        return None

    def names(self) -> list[str]:
        """Agent names in table order."""
        return [agent.name for agent in self.agents]
