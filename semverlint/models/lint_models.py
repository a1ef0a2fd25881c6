"""
Lint Data Models — Catalog entries, version-bump categories, overrides, witnesses.

Every lint in the catalog is a SemverQuery: an opaque query passed verbatim to
the query engine plus the metadata used to classify and explain its results.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Union

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    model_serializer,
    model_validator,
)


def _normalize_name(value: str) -> str:
    return value.lower().replace("_", "").replace("-", "")


class _LenientEnum(str, Enum):
    """Accepts `Major`, `major`, `NotChanged`, `not_changed` and friends."""

    @classmethod
    def _missing_(cls, value: object):
        if isinstance(value, str):
            wanted = _normalize_name(value)
            for member in cls:
                if _normalize_name(member.value) == wanted:
                    return member
        return None

    @property
    def rank(self) -> int:
        return _RANKS[type(self).__name__][self.value]


class RequiredSemverUpdate(_LenientEnum):
    """Minimum version bump that a lint's violation implies."""

    MINOR = "minor"
    MAJOR = "major"


class LintLevel(_LenientEnum):
    """How loudly a lint complains when it fires."""

    ALLOW = "allow"
    WARN = "warn"
    DENY = "deny"


class ActualSemverUpdate(_LenientEnum):
    """Observed magnitude of a change, supplied by the caller."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    NOT_CHANGED = "not_changed"


# Patch and NotChanged share a rank: neither satisfies any requirement.
_RANKS: dict[str, dict[str, int]] = {
    "RequiredSemverUpdate": {"minor": 1, "major": 2},
    "LintLevel": {"allow": 0, "warn": 1, "deny": 2},
    "ActualSemverUpdate": {"not_changed": 0, "patch": 0, "minor": 1, "major": 2},
}


# ── Witness arguments ──


class Inherited(BaseModel):
    """Pull the value named `inherit` from the previous query's output."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    inherit: str


class Constant(BaseModel):
    """A fixed argument value, passed through untouched."""

    model_config = ConfigDict(frozen=True)

    value: Any = None

    @model_serializer
    def _serialize(self) -> Any:
        return self.value


def _is_inherit_shape(raw: Any) -> bool:
    return (
        isinstance(raw, dict)
        and len(raw) == 1
        and isinstance(raw.get("inherit"), str)
    )


def _reject_nested_inherit(raw: Any, path: str) -> None:
    if isinstance(raw, dict):
        children = raw.items()
    elif isinstance(raw, list):
        children = ((str(i), v) for i, v in enumerate(raw))
    else:
        return

    for key, child in children:
        child_path = f"{path}.{key}"
        if _is_inherit_shape(child):
            raise ValueError(
                f"nested inherited value at '{child_path}': only top-level "
                f"witness arguments may inherit"
            )
        _reject_nested_inherit(child, child_path)


def _coerce_inherited_value(raw: Any) -> Any:
    if isinstance(raw, (Inherited, Constant)):
        return raw
    if _is_inherit_shape(raw):
        return Inherited(inherit=raw["inherit"])
    _reject_nested_inherit(raw, "value")
    return Constant(value=raw)


InheritedValue = Annotated[
    Union[Inherited, Constant], BeforeValidator(_coerce_inherited_value)
]


class WitnessQuery(BaseModel):
    """A follow-up query whose arguments may come from the lint's own output."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    query: str
    arguments: dict[str, InheritedValue] = Field(default_factory=dict)


class Witness(BaseModel):
    """
    Templates explaining how downstream code breaks.

    `hint_template` is rendered against each finding. `witness_template`
    renders a compilable example; when `witness_query` is set its single
    result is merged over the finding before rendering.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    hint_template: str
    witness_template: str | None = None
    witness_query: WitnessQuery | None = None


class SemverQuery(BaseModel):
    """A single catalog lint. Immutable once loaded."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(..., description="Unique lint identifier, e.g. 'function_missing'")
    human_readable_name: str
    description: str
    required_update: RequiredSemverUpdate
    lint_level: LintLevel = Field(..., description="Default lint level")
    reference: str | None = None
    reference_link: str | None = None
    query: str = Field(..., description="Query text passed verbatim to the engine")
    arguments: dict[str, Any] = Field(default_factory=dict)
    error_message: str = Field(
        ..., description="Shown at most once, when the lint has any findings"
    )
    per_result_error_template: str | None = None
    witness: Witness | None = None


# ── Overrides ──


class QueryOverride(BaseModel):
    """Configured values that differ from a lint's defaults. None means inherit."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    required_update: RequiredSemverUpdate | None = Field(
        default=None, alias="required-update"
    )
    lint_level: LintLevel | None = Field(default=None, alias="lint-level")

    @model_validator(mode="before")
    @classmethod
    def _level_shorthand(cls, data: Any) -> Any:
        # `function_missing: warn` is short for `{lint-level: warn}`
        if isinstance(data, str):
            return {"lint-level": data}
        return data


OverrideMap = dict[str, QueryOverride]
