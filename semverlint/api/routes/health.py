"""
Health Check Route — GET /health
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from semverlint.api.dependencies import get_lint_catalog
from semverlint.core.catalog import LintCatalog

router = APIRouter()

VERSION = "0.1.0"


@router.get("/health")
async def health(catalog: LintCatalog = Depends(get_lint_catalog)):
    """Health check endpoint."""
    return {
        "status": "ok",
        "version": VERSION,
        "lints": len(catalog),
    }
