"""
Test fixtures shared across all semverlint tests.
"""

import copy

import pytest

from semverlint.core.query_engine import ParsedQuery
from semverlint.models.lint_models import LintLevel, RequiredSemverUpdate, SemverQuery


class FakeQueryEngine:
    """In-memory query engine returning canned results keyed by query text."""

    def __init__(self, results=None, outputs=None, broken=()):
        self.results = results or {}
        self.outputs = outputs or {}
        self.broken = set(broken)
        self.runs = []

    def parse(self, query):
        if query in self.broken:
            raise ValueError(f"unexpected token in query {query!r}")
        return ParsedQuery(text=query, outputs=dict(self.outputs.get(query, {})))

    def run(self, parsed, arguments):
        self.runs.append((parsed.text, dict(arguments)))
        return iter(copy.deepcopy(self.results.get(parsed.text, [])))


@pytest.fixture
def fake_engine():
    """Factory for FakeQueryEngine instances."""
    return FakeQueryEngine


@pytest.fixture
def make_query():
    """Factory for catalog lints with sensible defaults for every required field."""

    def _make(
        lint_id,
        lint_level=LintLevel.DENY,
        required_update=RequiredSemverUpdate.MAJOR,
        **fields,
    ):
        values = {
            "id": lint_id,
            "human_readable_name": lint_id.replace("_", " "),
            "description": f"{lint_id} description",
            "required_update": required_update,
            "lint_level": lint_level,
            "query": f"query {lint_id}",
            "error_message": f"{lint_id} was broken",
        }
        values.update(fields)
        return SemverQuery(**values)

    return _make


@pytest.fixture
def span_finding():
    """A well-formed finding located by span."""
    return {
        "name": "add",
        "path": ["mycrate", "math", "add"],
        "span_filename": "src/math.rs",
        "span_begin_line": 12,
    }
