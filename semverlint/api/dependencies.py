"""
FastAPI Dependencies — Shared singletons injected via Depends().
"""

from __future__ import annotations

from semverlint.core.catalog import LintCatalog, get_catalog


def get_lint_catalog() -> LintCatalog:
    """Shared lint catalog, loaded once per process."""
    return get_catalog()
