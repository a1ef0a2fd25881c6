"""
Lint Engine — Runs every catalog lint against one snapshot pair.

Each lint is an independent unit of work evaluated on a thread pool:
query → normalize → classify with effective overrides → render messages and
witnesses. A broken lint is reported as an error and never takes the other
lints down with it. A lint's result is all-or-nothing.
"""

from __future__ import annotations

import logging
import time
from concurrent import futures
from typing import Any

from semverlint.config import settings
from semverlint.core.catalog import LintCatalog
from semverlint.core.classifier import strongest, supports
from semverlint.core.errors import LintDefectError
from semverlint.core.normalizer import normalize_findings
from semverlint.core.overrides import OverrideStack, load_override_stack
from semverlint.core.query_engine import QueryEngine
from semverlint.core.templating import render_lint_template
from semverlint.core.witness import WitnessGenerator
from semverlint.models.lint_models import ActualSemverUpdate, LintLevel, SemverQuery
from semverlint.models.report_models import CheckReport, LintResult

logger = logging.getLogger("semverlint.engine")

# Default for `timeout`: use settings. An explicit None disables the run timeout.
_FROM_SETTINGS: Any = object()


class LintEngine:
    """
    Evaluates a lint catalog against the snapshot pair behind `query_engine`.

    The catalog and override stack are only read, so they are shared by all
    worker threads without locking.
    """

    def __init__(
        self,
        catalog: LintCatalog,
        query_engine: QueryEngine,
        overrides: OverrideStack | None = None,
        max_workers: int | None = None,
        timeout: float | None = _FROM_SETTINGS,
    ) -> None:
        self.catalog = catalog
        self.query_engine = query_engine
        self.overrides = (
            overrides
            if overrides is not None
            else load_override_stack(settings.override_files, catalog)
        )
        self.max_workers = max_workers if max_workers is not None else settings.max_workers
        self.timeout = (
            settings.run_timeout_seconds if timeout is _FROM_SETTINGS else timeout
        )
        self.witness_generator = WitnessGenerator(query_engine)

    def validate(self) -> None:
        """
        Parse every lint and witness query of the catalog before a run.

        Raises CatalogError naming the first lint whose query the engine rejects.
        Without this call a bad query only shows up as that lint's `error` result.
        """
        self.catalog.validate_queries(self.query_engine)

    def run(self, actual_update: ActualSemverUpdate) -> CheckReport:
        """
        Run all lints.

        Args:
            actual_update: Observed magnitude of the change being checked.

        Returns:
            CheckReport with one LintResult per lint, in catalog order.
        """
        start = time.monotonic()
        lints = list(self.catalog)
        results: dict[str, LintResult] = {}

        pool = futures.ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="semverlint"
        )
        try:
            pending = {
                pool.submit(self._run_lint, lint, actual_update): lint for lint in lints
            }
            try:
                for future in futures.as_completed(pending, timeout=self.timeout):
                    result = future.result()
                    results[result.lint_id] = result
            except futures.TimeoutError:
                logger.error(
                    f"Check run exceeded {self.timeout}s; "
                    f"{len(lints) - len(results)} lints did not finish"
                )
                for future, lint in pending.items():
                    if lint.id not in results:
                        future.cancel()
                        results[lint.id] = self._timed_out(lint)
        finally:
            # Do not wait on lints abandoned by the timeout. Their threads keep
            # running and the interpreter joins them at exit.
            pool.shutdown(wait=False, cancel_futures=True)

        elapsed = (time.monotonic() - start) * 1000
        report = self._assemble(actual_update, [results[lint.id] for lint in lints], elapsed)

        logger.info(
            f"Checked {len(lints)} lints in {elapsed:.1f}ms: "
            f"{report.denied} denied, {report.warned} warned, {report.errored} errored"
        )
        return report

    def run_single_lint(
        self, lint_id: str, actual_update: ActualSemverUpdate
    ) -> LintResult:
        """Run a single lint. Lint defects propagate instead of becoming an error result."""
        lint = self.catalog.lookup(lint_id)
        if lint is None:
            raise ValueError(f"Unknown lint: {lint_id}")
        return self._evaluate(lint, actual_update)

    def _run_lint(self, lint: SemverQuery, actual_update: ActualSemverUpdate) -> LintResult:
        try:
            return self._evaluate(lint, actual_update)
        except LintDefectError as e:
            logger.error(f"Lint defect: {e}")
            return self._errored(lint, e.detail)
        except Exception as e:
            # Lint failures should not crash the engine
            logger.exception(f"[{lint.id}] evaluation failed")
            return self._errored(lint, f"{type(e).__name__}: {e}")

    def _evaluate(self, lint: SemverQuery, actual_update: ActualSemverUpdate) -> LintResult:
        start = time.monotonic()
        lint_level = self.overrides.effective_lint_level(lint)
        required_update = self.overrides.effective_required_update(lint)

        try:
            parsed = self.query_engine.parse(lint.query)
        except Exception as e:
            raise LintDefectError(lint.id, f"query failed to parse: {e}") from e

        raw_results = list(self.query_engine.run(parsed, lint.arguments))
        findings = normalize_findings(lint.id, parsed, raw_results)

        fired = bool(findings) and supports(actual_update, required_update)

        messages: list[str] = []
        if findings and lint.per_result_error_template is not None:
            messages = [
                render_lint_template(
                    lint.id, "per-result error", lint.per_result_error_template, f
                )
                for f in findings
            ]

        witnesses = self.witness_generator.generate(lint, findings)

        logger.debug(
            f"[{lint.id}] {len(findings)} findings, level={lint_level.value}, "
            f"required={required_update.value}, fired={fired}"
        )

        return LintResult(
            lint_id=lint.id,
            status="fail" if fired else "pass",
            lint_level=lint_level,
            required_update=required_update,
            findings=findings,
            error_message=lint.error_message if findings else None,
            messages=messages,
            witnesses=witnesses,
            duration_ms=round((time.monotonic() - start) * 1000, 2),
        )

    def _errored(self, lint: SemverQuery, detail: str) -> LintResult:
        return LintResult(
            lint_id=lint.id,
            status="error",
            lint_level=self.overrides.effective_lint_level(lint),
            required_update=self.overrides.effective_required_update(lint),
            defect=detail,
        )

    def _timed_out(self, lint: SemverQuery) -> LintResult:
        return LintResult(
            lint_id=lint.id,
            status="timeout",
            lint_level=self.overrides.effective_lint_level(lint),
            required_update=self.overrides.effective_required_update(lint),
            defect=f"did not finish within {self.timeout}s",
        )

    @staticmethod
    def _assemble(
        actual_update: ActualSemverUpdate, results: list[LintResult], elapsed: float
    ) -> CheckReport:
        fired = [r for r in results if r.fired]
        denied = [r for r in fired if r.lint_level == LintLevel.DENY]
        warned = [r for r in fired if r.lint_level == LintLevel.WARN]
        errored = [r for r in results if r.status in ("error", "timeout")]

        required = strongest(
            [r.required_update for r in fired if r.lint_level != LintLevel.ALLOW]
        )
        passed = not denied and not errored

        summary_parts = []
        if denied:
            summary_parts.append(f"{len(denied)} denied")
        if warned:
            summary_parts.append(f"{len(warned)} warned")
        if errored:
            summary_parts.append(f"{len(errored)} could not be evaluated")

        if passed and not summary_parts:
            summary = f"{len(results)} lints checked, no incompatibilities found."
        else:
            summary = f"{len(results)} lints checked: {', '.join(summary_parts)}."
        if required is not None:
            summary += f" Requires at least a {required.value} version bump."

        return CheckReport(
            actual_update=actual_update,
            results=results,
            denied=len(denied),
            warned=len(warned),
            errored=len(errored),
            required_update=required,
            passed=passed,
            summary=summary,
            duration_ms=round(elapsed, 2),
        )
