"""
Override Resolution Route — POST /overrides/resolve

Shows the effective lint level and required update of every lint once the
given override layers are stacked, lowest precedence first.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from semverlint.api.dependencies import get_lint_catalog
from semverlint.core.catalog import LintCatalog
from semverlint.core.overrides import OverrideStack, parse_override_layer
from semverlint.models.report_models import (
    EffectiveSettings,
    ResolveOverridesRequest,
    ResolveOverridesResponse,
)

logger = logging.getLogger("semverlint.api.overrides")
router = APIRouter(prefix="/overrides")


@router.post("/resolve", response_model=ResolveOverridesResponse)
async def resolve_overrides(
    req: ResolveOverridesRequest,
    catalog: LintCatalog = Depends(get_lint_catalog),
):
    stack = OverrideStack()
    unknown: set[str] = set()

    for i, raw in enumerate(req.layers):
        try:
            layer = parse_override_layer(raw, catalog=catalog, source=f"layer {i}")
        except ValidationError as e:
            raise HTTPException(
                status_code=422,
                detail={
                    "layer": i,
                    "errors": e.errors(include_url=False, include_context=False),
                },
            )
        unknown.update(lint_id for lint_id in layer if lint_id not in catalog)
        stack.push(layer)

    return ResolveOverridesResponse(
        lints=[
            EffectiveSettings(
                id=lint.id,
                lint_level=stack.effective_lint_level(lint),
                required_update=stack.effective_required_update(lint),
                overridden=stack.is_overridden(lint),
            )
            for lint in catalog
        ],
        unknown_lints=sorted(unknown),
    )
