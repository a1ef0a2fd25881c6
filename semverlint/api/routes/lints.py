"""
Lint Catalog Routes — GET /lints, GET /lints/{lint_id}
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from semverlint.api.dependencies import get_lint_catalog
from semverlint.core.catalog import LintCatalog
from semverlint.models.lint_models import SemverQuery
from semverlint.models.report_models import LintSummary

router = APIRouter(prefix="/lints")


@router.get("", response_model=list[LintSummary])
async def list_lints(catalog: LintCatalog = Depends(get_lint_catalog)):
    """All bundled lints with their default settings, in id order."""
    return [
        LintSummary(
            id=lint.id,
            human_readable_name=lint.human_readable_name,
            lint_level=lint.lint_level,
            required_update=lint.required_update,
            has_witness=lint.witness is not None,
        )
        for lint in catalog
    ]


@router.get("/{lint_id}", response_model=SemverQuery)
async def get_lint(lint_id: str, catalog: LintCatalog = Depends(get_lint_catalog)):
    """Full definition of one lint."""
    lint = catalog.lookup(lint_id)
    if lint is None:
        raise HTTPException(status_code=404, detail=f"Unknown lint: {lint_id}")
    return lint
