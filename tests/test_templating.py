"""
Tests for lint template rendering.
"""

import pytest
from jinja2 import UndefinedError

from semverlint.core.errors import LintDefectError
from semverlint.core.templating import (
    multiple_spans,
    render_lint_template,
    render_template,
    unpack_if_singleton,
)


def test_join_path():
    rendered = render_template(
        'function {{ path | join("::") }}, previously in file {{ span_filename }}:{{ span_begin_line }}',
        {"path": ["mycrate", "add"], "span_filename": "src/lib.rs", "span_begin_line": 7},
    )
    assert rendered == "function mycrate::add, previously in file src/lib.rs:7"


def test_unpack_if_singleton():
    assert unpack_if_singleton(["only"]) == "only"
    assert unpack_if_singleton(["a", "b"]) == ["a", "b"]
    assert unpack_if_singleton("plain") == "plain"
    assert render_template("{{ names | unpack_if_singleton }}", {"names": ["x"]}) == "x"


def test_multiple_spans():
    assert multiple_spans([1, 2])
    assert not multiple_spans([1])
    assert not multiple_spans(3)


def test_undefined_names_raise():
    with pytest.raises(UndefinedError):
        render_template("{{ missing }}", {})


def test_render_lint_template_reports_defect():
    with pytest.raises(LintDefectError, match="failed to render per-result message") as exc_info:
        render_lint_template("some_lint", "per-result message", "{{ missing }}", {"name": "x"})
    assert exc_info.value.lint_id == "some_lint"


def test_render_lint_template_syntax_error():
    with pytest.raises(LintDefectError, match="TemplateSyntaxError"):
        render_lint_template("some_lint", "witness hint", "{{ name ", {"name": "x"})
