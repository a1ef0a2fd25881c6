"""
Witness Generator — Hints and counter-examples for each finding of a lint.

A witness shows how downstream code would break. The hint is a short,
possibly non-compilable sketch rendered from the finding alone. The full
witness may need more data than the lint query produced, so a lint can
declare a follow-up witness query whose arguments are inherited from the
finding.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from semverlint.core.errors import InheritanceError, LintDefectError
from semverlint.core.query_engine import ParsedQuery, QueryEngine
from semverlint.core.templating import render_lint_template
from semverlint.models.lint_models import Inherited, InheritedValue, SemverQuery, Witness
from semverlint.models.report_models import Finding, WitnessOutput

logger = logging.getLogger("semverlint.witness")


def inherit_arguments_from(
    arguments: Mapping[str, InheritedValue],
    source_map: Mapping[str, Any],
) -> dict[str, Any]:
    """
    Resolve witness query arguments against a previous query's output.

    Inherited values are looked up in `source_map`; constants pass through.
    Raises InheritanceError on the first missing key, returning nothing.
    """
    mapped: dict[str, Any] = {}
    for key, value in arguments.items():
        if isinstance(value, Inherited):
            if value.inherit not in source_map:
                raise InheritanceError(value.inherit, dict(source_map))
            mapped[key] = source_map[value.inherit]
        else:
            mapped[key] = value.value
    return mapped


class WitnessGenerator:
    """Renders witnesses for lints that define one, using one snapshot pair."""

    def __init__(self, engine: QueryEngine) -> None:
        self.engine = engine

    def generate(self, lint: SemverQuery, findings: list[Finding]) -> list[WitnessOutput]:
        """One WitnessOutput per finding, in finding order. Empty if no witness."""
        witness = lint.witness
        if witness is None or not findings:
            return []

        parsed = self._parse_witness_query(lint, witness)
        return [self._generate_one(lint, witness, parsed, f) for f in findings]

    def _parse_witness_query(self, lint: SemverQuery, witness: Witness) -> ParsedQuery | None:
        # Without a template there is nothing to feed the query's output into.
        if witness.witness_query is None or witness.witness_template is None:
            return None
        try:
            return self.engine.parse(witness.witness_query.query)
        except Exception as e:
            raise LintDefectError(lint.id, f"witness query failed to parse: {e}") from e

    def _generate_one(
        self,
        lint: SemverQuery,
        witness: Witness,
        parsed: ParsedQuery | None,
        finding: Finding,
    ) -> WitnessOutput:
        hint = render_lint_template(lint.id, "witness hint", witness.hint_template, finding)

        if witness.witness_template is None:
            return WitnessOutput(hint=hint)

        values: dict[str, Any] = dict(finding)
        if parsed is not None:
            # Witness outputs take precedence over the finding on name collisions.
            values.update(self._run_witness_query(lint, witness, parsed, finding))

        body = render_lint_template(lint.id, "witness", witness.witness_template, values)
        return WitnessOutput(hint=hint, witness=body)

    def _run_witness_query(
        self,
        lint: SemverQuery,
        witness: Witness,
        parsed: ParsedQuery,
        finding: Finding,
    ) -> dict[str, Any]:
        try:
            arguments = inherit_arguments_from(witness.witness_query.arguments, finding)
        except InheritanceError as e:
            raise LintDefectError(lint.id, f"witness query arguments: {e}") from e

        results = list(self.engine.run(parsed, arguments))
        if len(results) != 1:
            raise LintDefectError(
                lint.id,
                f"witness query must produce exactly one result, got {len(results)} "
                f"for arguments {arguments!r}",
            )

        logger.debug(f"[{lint.id}] witness query resolved {sorted(results[0])}")
        return dict(results[0])
