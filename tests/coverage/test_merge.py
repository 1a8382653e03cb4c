"""Tests for combining coverage nodes within and across reports."""

from __future__ import annotations

from diffgate.core.violations import Violation
from diffgate.coverage import FileCoverage, LineHit, expand_line_hits, merge_file_coverage


class TestExpandLineHits:
    """Gap filling for tools that report only the first line of a statement."""

    def test_empty(self) -> None:
        assert expand_line_hits([]) == []

    def test_gaps_inherit_previous_count(self) -> None:
        hits = [LineHit(1, 0), LineHit(4, 3)]

        assert expand_line_hits(hits) == [
            LineHit(1, 0),
            LineHit(2, 0),
            LineHit(3, 0),
            LineHit(4, 3),
        ]

    def test_unordered_input(self) -> None:
        hits = [LineHit(3, 1), LineHit(1, 2)]

        assert expand_line_hits(hits) == [LineHit(1, 2), LineHit(2, 2), LineHit(3, 1)]

    def test_duplicate_line_keeps_zero_hit_node(self) -> None:
        hits = [LineHit(2, 5), LineHit(2, 0), LineHit(2, 1)]

        assert expand_line_hits(hits) == [LineHit(2, 0)]


class TestMergeFileCoverage:
    """Intersection of violations, union of measured lines."""

    def test_single_report(self) -> None:
        file_cov = FileCoverage("a.py", [LineHit(1, 1), LineHit(2, 0)])

        assert merge_file_coverage([file_cov]) == ([Violation(2)], [1, 2])

    def test_intersects_violations(self) -> None:
        first = FileCoverage("a.py", [LineHit(1, 0), LineHit(2, 0)])
        second = FileCoverage("a.py", [LineHit(1, 3), LineHit(2, 0), LineHit(3, 0)])

        violations, measured = merge_file_coverage([first, second])

        assert violations == [Violation(2)]
        assert measured == [1, 2, 3]

    def test_reports_without_file_are_ignored(self) -> None:
        file_cov = FileCoverage("a.py", [LineHit(5, 0)])

        assert merge_file_coverage([None, file_cov, None]) == ([Violation(5)], [5])

    def test_no_report_mentions_file(self) -> None:
        assert merge_file_coverage([None, None]) == ([], [])


class TestFileCoverage:
    """Derived properties of one file's coverage."""

    def test_duplicate_nodes(self) -> None:
        file_cov = FileCoverage("a.py", [LineHit(2, 0), LineHit(1, 1), LineHit(2, 4)])

        assert file_cov.measured_lines == [1, 2]
        assert file_cov.uncovered_lines == [2]

    def test_without_lines(self) -> None:
        assert FileCoverage("a.py").measured_lines == []
