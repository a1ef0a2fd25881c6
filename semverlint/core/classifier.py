"""
Compatibility Classifier — Does an observed change reach a lint's required update?
"""

from __future__ import annotations

from semverlint.models.lint_models import ActualSemverUpdate, RequiredSemverUpdate


def supports(actual: ActualSemverUpdate, required: RequiredSemverUpdate) -> bool:
    """
    Major satisfies any requirement, minor only a minor one.
    Patch and not-changed satisfy nothing.
    """
    if actual == ActualSemverUpdate.MAJOR:
        return True
    if actual == ActualSemverUpdate.MINOR:
        return required == RequiredSemverUpdate.MINOR
    return False


def strongest(updates: list[RequiredSemverUpdate]) -> RequiredSemverUpdate | None:
    """The largest required update in `updates`, or None if empty."""
    if not updates:
        return None
    return max(updates, key=lambda u: u.rank)
