"""
Result Normalizer — Deterministic ordering of one lint's raw query results.

The query engine iterates hash tables internally, so two runs over the same
snapshots can emit results, and the elements of folded list outputs, in
different orders. Reports and witnesses must not churn between runs:

1. Folded span data is reordered by increasing begin line.
2. Findings are sorted by `ordering_key`, or by `(span_filename, span_begin_line)`.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from typing import Any

from semverlint.core.errors import LintDefectError
from semverlint.core.query_engine import ParsedQuery
from semverlint.models.report_models import Finding

FOLD_SORT_SUFFIX = "_begin_line"

_ORDERING_HELP = (
    "A valid lint must either output an explicit `ordering_key`, "
    "or output both `span_filename` and `span_begin_line`."
)


def fold_sort_groups(parsed: ParsedQuery) -> dict[str, list[str]]:
    """
    Map each fold sort key to the outputs it reorders.

    Heuristic for span data inside a fold: a list-typed output whose name ends
    in `_begin_line`, located in a fold directly under the query root. Its
    targets are every output of that same fold component, itself included.
    """
    groups: dict[str, list[str]] = {}
    for name, info in sorted(parsed.outputs.items()):
        if not name.endswith(FOLD_SORT_SUFFIX) or not info.is_list:
            continue
        if len(info.fold_path) != 1:
            continue
        groups[name] = sorted(
            other.name
            for other in parsed.outputs.values()
            if other.fold_path == info.fold_path
        )
    return groups


def reorder_folds(
    lint_id: str, finding: Finding, groups: Mapping[str, list[str]]
) -> Finding:
    """Sort each fold group of `finding` in place by its begin-line key."""
    for fold_key, targets in groups.items():
        keys = finding.get(fold_key)
        if not isinstance(keys, list) or not all(
            isinstance(k, int) and not isinstance(k, bool) for k in keys
        ):
            raise LintDefectError(
                lint_id, f"fold key `{fold_key}` was not a list of integers: {keys!r}"
            )

        order = sorted(range(len(keys)), key=lambda idx: keys[idx])

        for target in targets:
            values = finding.get(target)
            # `@fold @transform(op: "count")` outputs are not lists and need no reordering.
            if not isinstance(values, list):
                continue
            if len(values) != len(keys):
                raise LintDefectError(
                    lint_id,
                    f"fold output `{target}` has {len(values)} elements "
                    f"but fold key `{fold_key}` has {len(keys)}",
                )
            finding[target] = [values[idx] for idx in order]

    return finding


def ordering_key(lint_id: str, finding: Mapping[str, Any]) -> tuple[str, int]:
    """Sort key imposing a total order on one lint's findings."""
    key = finding.get("ordering_key")
    if isinstance(key, str) and key:
        return (key, 0)

    filename = finding.get("span_filename")
    line = finding.get("span_begin_line")

    if filename is None and line is None:
        raise LintDefectError(lint_id, _ORDERING_HELP)
    if line is None:
        raise LintDefectError(
            lint_id,
            "no `span_begin_line` was returned even though `span_filename` was present. "
            + _ORDERING_HELP,
        )
    if filename is None:
        raise LintDefectError(
            lint_id,
            "no `span_filename` was returned even though `span_begin_line` was present. "
            + _ORDERING_HELP,
        )
    if not isinstance(filename, str):
        raise LintDefectError(lint_id, f"`span_filename` was not a string: {filename!r}")
    if not isinstance(line, int) or isinstance(line, bool):
        raise LintDefectError(lint_id, f"`span_begin_line` was not an integer: {line!r}")

    return (filename, line)


def normalize_findings(
    lint_id: str,
    parsed: ParsedQuery,
    raw_results: Iterable[Mapping[str, Any]],
) -> list[Finding]:
    """
    Turn raw engine output into ordered, internally consistent findings.

    Raw result mappings are copied, never modified.
    """
    groups = fold_sort_groups(parsed)

    findings: list[Finding] = []
    for raw in raw_results:
        finding = copy.deepcopy(dict(raw))
        if groups:
            reorder_folds(lint_id, finding, groups)
        findings.append(finding)

    # list.sort is stable, so ties keep engine order
    findings.sort(key=lambda f: ordering_key(lint_id, f))
    return findings
