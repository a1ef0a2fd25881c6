"""
Template rendering for lint messages and witnesses.

Templates are Jinja2 with StrictUndefined: a template naming an output the
query does not produce is a broken lint, not an empty string.
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
from typing import Any

from jinja2 import Environment, StrictUndefined, Template, TemplateError

from semverlint.core.errors import LintDefectError


def unpack_if_singleton(value: Any) -> Any:
    """A one-element list renders as its element."""
    if isinstance(value, (list, tuple)) and len(value) == 1:
        return value[0]
    return value


def multiple_spans(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and len(value) > 1


def make_environment() -> Environment:
    env = Environment(
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        autoescape=False,
    )
    env.filters["unpack_if_singleton"] = unpack_if_singleton
    env.filters["multiple_spans"] = multiple_spans
    return env


_ENV = make_environment()


@lru_cache(maxsize=512)
def _compile(source: str) -> Template:
    return _ENV.from_string(source)


def render_template(source: str, values: Mapping[str, Any]) -> str:
    """Render `source` against `values`. Raises jinja2.TemplateError on failure."""
    return _compile(source).render(**values)


def render_lint_template(
    lint_id: str, kind: str, source: str, values: Mapping[str, Any]
) -> str:
    """Render one of a lint's templates, reporting failures as a lint defect."""
    try:
        return render_template(source, values)
    except TemplateError as e:
        raise LintDefectError(
            lint_id, f"failed to render {kind}: {type(e).__name__}: {e}"
        ) from e
