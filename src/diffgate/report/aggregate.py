"""Diff-violation aggregation.

Joins what changed (a diff reporter) with what is wrong (a violation
reporter) and derives per-file and total statistics:

    violation lines = reported violation lines ∩ changed lines
    measured lines  = (reported measured lines, or the changed lines when the
                       source does not know) ∩ changed lines
    percent covered = 100 * (|measured lines| - |violation lines|) / |measured lines|
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import structlog

from diffgate.core.paths import to_unix_path
from diffgate.core.violations import BaseViolationReporter, Violation
from diffgate.diff.reporter import BaseDiffReporter

log = structlog.get_logger()


class DiffViolations:
    """Violations and measured lines of one file, restricted to its changed lines."""

    def __init__(
        self,
        violations: Iterable[Violation],
        measured_lines: Iterable[int] | None,
        diff_lines: Iterable[int],
    ) -> None:
        diff = set(diff_lines)
        all_violations = list(violations)

        self.lines: set[int] = {v.line for v in all_violations} & diff
        self.violations: set[Violation] = {v for v in all_violations if v.line in self.lines}
        self.measured_lines: set[int] = (
            diff if measured_lines is None else set(measured_lines) & diff
        )


class BaseReportGenerator:
    """Statistics shared by every report format.

    Violations are fetched lazily on first use and cached for the lifetime of
    the generator.
    """

    def __init__(
        self,
        violations_reporter: BaseViolationReporter,
        diff_reporter: BaseDiffReporter,
        total_percent_float: bool = False,
    ) -> None:
        self._violations = violations_reporter
        self._diff = diff_reporter
        self._total_percent_float = total_percent_float
        self._diff_violations_dict: dict[str, DiffViolations] | None = None

    def coverage_report_name(self) -> str:
        return self._violations.name()

    def diff_report_name(self) -> str:
        return self._diff.name()

    def src_paths(self) -> list[str]:
        """Changed files with at least one measured changed line."""
        return [
            src_path
            for src_path, summary in self._diff_violations().items()
            if summary.measured_lines
        ]

    def percent_covered(self, src_path: str) -> float | None:
        """Share of measured changed lines without violations, None when nothing was measured."""
        summary = self._diff_violations().get(src_path)
        if summary is None or not summary.measured_lines:
            return None
        num_measured = len(summary.measured_lines)
        return 100 * (num_measured - len(summary.lines)) / num_measured

    def covered_lines(self, src_path: str) -> list[int]:
        summary = self._diff_violations().get(src_path)
        if summary is None:
            return []
        return sorted(summary.measured_lines - summary.lines)

    def violation_lines(self, src_path: str) -> list[int]:
        summary = self._diff_violations().get(src_path)
        if summary is None:
            return []
        return sorted(summary.lines)

    def violations(self, src_path: str) -> list[Violation]:
        """Violations on changed lines, ordered by line then message."""
        summary = self._diff_violations().get(src_path)
        if summary is None:
            return []
        return sorted(summary.violations, key=lambda v: (v.line, v.message or ""))

    def total_num_lines(self) -> int:
        return sum(len(summary.measured_lines) for summary in self._diff_violations().values())

    def total_num_violations(self) -> int:
        return sum(len(summary.lines) for summary in self._diff_violations().values())

    def total_percent_covered(self) -> int | float:
        """Total percentage: truncated to an int, or rounded to 2 places in float mode.

        No measured changed lines means nothing is uncovered: 100.
        """
        total_lines = self.total_num_lines()
        if total_lines == 0:
            return 100.0 if self._total_percent_float else 100

        num_covered = total_lines - self.total_num_violations()
        if self._total_percent_float:
            return round(100 * num_covered / total_lines, 2)
        return 100 * num_covered // total_lines

    def num_changed_lines(self) -> int:
        return sum(
            len(self._diff.lines_changed(src_path)) for src_path in self._diff.src_paths_changed()
        )

    def _diff_violations(self) -> dict[str, DiffViolations]:
        if self._diff_violations_dict is None:
            src_paths_changed = self._diff.src_paths_changed()
            try:
                batch = self._violations.violations_batch(src_paths_changed)
            except Exception as e:  # noqa: BLE001
                # Fall back to one query per file
                log.debug("violations_batch_failed", error=str(e))
                batch = {
                    src_path: self._violations.violations(src_path)
                    for src_path in src_paths_changed
                }

            self._diff_violations_dict = {
                to_unix_path(src_path): DiffViolations(
                    batch.get(src_path, []),
                    self._violations.measured_lines(src_path),
                    self._diff.lines_changed(src_path),
                )
                for src_path in src_paths_changed
            }
            log.debug(
                "diff_violations_computed",
                files=len(self._diff_violations_dict),
                violations=self.total_num_violations(),
            )
        return self._diff_violations_dict

    def report_dict(self) -> dict[str, Any]:
        """Every statistic as plain data, the shape written by the JSON report."""
        return {
            "report_name": self.coverage_report_name(),
            "diff_name": self.diff_report_name(),
            "src_stats": {
                src_path: self._src_path_stats(src_path) for src_path in self.src_paths()
            },
            "total_num_lines": self.total_num_lines(),
            "total_num_violations": self.total_num_violations(),
            "total_percent_covered": self.total_percent_covered(),
            "num_changed_lines": self.num_changed_lines(),
        }

    def _src_path_stats(self, src_path: str) -> dict[str, Any]:
        return {
            "percent_covered": self.percent_covered(src_path),
            "violation_lines": self.violation_lines(src_path),
            "covered_lines": self.covered_lines(src_path),
            "violations": [[v.line, v.message] for v in self.violations(src_path)],
        }
