"""
Check Report Models — Per-lint results and the overall verdict of a check run.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from semverlint.models.lint_models import (
    ActualSemverUpdate,
    LintLevel,
    RequiredSemverUpdate,
)

# One match of a lint's query: output name -> value.
Finding = dict[str, Any]

LintStatus = Literal["pass", "fail", "error", "timeout"]


class WitnessOutput(BaseModel):
    """Rendered explanation for a single finding."""

    hint: str
    witness: str | None = Field(
        default=None, description="Compilable counter-example, if the lint defines one"
    )


class LintResult(BaseModel):
    """Outcome of evaluating one lint against one snapshot pair."""

    lint_id: str
    status: LintStatus
    lint_level: LintLevel = Field(..., description="Effective lint level after overrides")
    required_update: RequiredSemverUpdate = Field(
        ..., description="Effective required update after overrides"
    )
    findings: list[Finding] = Field(
        default_factory=list, description="Normalized, deterministically ordered"
    )
    error_message: str | None = Field(
        default=None, description="Lint summary, present only when there are findings"
    )
    messages: list[str] = Field(
        default_factory=list, description="Rendered per-result messages"
    )
    witnesses: list[WitnessOutput] = Field(default_factory=list)
    defect: str | None = Field(
        default=None, description="Why the lint could not be evaluated"
    )
    duration_ms: float = 0.0

    @property
    def fired(self) -> bool:
        return self.status == "fail"


class CheckReport(BaseModel):
    """Result of running the whole catalog against one snapshot pair."""

    actual_update: ActualSemverUpdate
    results: list[LintResult] = Field(default_factory=list)
    denied: int = 0
    warned: int = 0
    errored: int = 0
    required_update: RequiredSemverUpdate | None = Field(
        default=None,
        description="Strongest required update among fired, non-allowed lints",
    )
    passed: bool = True
    summary: str = ""
    duration_ms: float = 0.0

    def get(self, lint_id: str) -> LintResult | None:
        for result in self.results:
            if result.lint_id == lint_id:
                return result
        return None


# ── API schemas ──


class LintSummary(BaseModel):
    id: str
    human_readable_name: str
    lint_level: LintLevel
    required_update: RequiredSemverUpdate
    has_witness: bool = False


class ResolveOverridesRequest(BaseModel):
    """Override layers, lowest precedence first."""

    layers: list[dict[str, Any]] = Field(default_factory=list)


class EffectiveSettings(BaseModel):
    id: str
    lint_level: LintLevel
    required_update: RequiredSemverUpdate
    overridden: bool = False


class ResolveOverridesResponse(BaseModel):
    lints: list[EffectiveSettings] = Field(default_factory=list)
    unknown_lints: list[str] = Field(default_factory=list)
