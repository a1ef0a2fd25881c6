"""
Lint catalog and lint-authoring defects.

Neither is a problem with the library being checked: both mean a lint
definition is broken.
"""

from __future__ import annotations


class CatalogError(RuntimeError):
    """The bundled catalog cannot be loaded. Fatal for the process."""


class LintDefectError(RuntimeError):
    """A lint produced data its own definition cannot handle. Fatal for that lint."""

    def __init__(self, lint_id: str, message: str) -> None:
        self.lint_id = lint_id
        self.detail = message
        super().__init__(f"lint '{lint_id}': {message}")


class InheritanceError(ValueError):
    """A witness argument inherits a name the source output does not have."""

    def __init__(self, key: str, source: dict) -> None:
        self.key = key
        self.source = source
        super().__init__(f"inherited output key '{key}' does not exist in {source!r}")
