"""Tests for reading coverage report files and finding them automatically."""

from __future__ import annotations

from pathlib import Path

import pytest

from diffgate.core.errors import ErrorCode, ReportParseError, UnsupportedFormatError
from diffgate.core.paths import GitPathResolver
from diffgate.core.violations import Violation
from diffgate.coverage import (
    LcovCoverageReporter,
    XmlCoverageReporter,
    detect_report_format,
    find_coverage_reports,
    load_coverage_reporter,
)
from diffgate.coverage.discovery import parse_bundler_config

COBERTURA = """<coverage>
  <packages><package><classes>
    <class filename="app.py"><lines><line number="1" hits="0"/></lines></class>
  </classes></package></packages>
</coverage>
"""

LCOV = "SF:app.py\nDA:1,0\nend_of_record\n"


class TestDetectReportFormat:
    """Classification by suffix, then by content."""

    @pytest.mark.parametrize(
        ("name", "text", "expected"),
        [
            ("coverage.xml", "", "xml"),
            ("report.txt", "  <?xml version='1.0'?><coverage/>", "xml"),
            ("lcov.info", "", "lcov"),
            ("out.lcov", "", "lcov"),
            ("tracefile", "TN:\nSF:a.ts\n", "lcov"),
        ],
    )
    def test_detects(self, name: str, text: str, expected: str) -> None:
        assert detect_report_format(Path(name), text) == expected

    def test_unknown_format(self) -> None:
        with pytest.raises(UnsupportedFormatError) as exc_info:
            detect_report_format(Path("coverage.json"), '{"files": {}}')

        assert exc_info.value.code == ErrorCode.REPORT_UNSUPPORTED_FORMAT


class TestLoadCoverageReporter:
    """Building the right reporter from report files."""

    def test_xml_reports(self, repo: Path, resolver: GitPathResolver) -> None:
        (repo / "coverage.xml").write_text(COBERTURA)

        reporter = load_coverage_reporter(["coverage.xml"], resolver=resolver)

        assert isinstance(reporter, XmlCoverageReporter)
        assert reporter.violations("app.py") == [Violation(1)]

    def test_lcov_reports(self, repo: Path, resolver: GitPathResolver) -> None:
        (repo / "lcov.info").write_text(LCOV)

        reporter = load_coverage_reporter([repo / "lcov.info"], resolver=resolver)

        assert isinstance(reporter, LcovCoverageReporter)
        assert reporter.violations("app.py") == [Violation(1)]

    def test_mixed_formats_rejected(self, repo: Path, resolver: GitPathResolver) -> None:
        (repo / "coverage.xml").write_text(COBERTURA)
        (repo / "lcov.info").write_text(LCOV)

        with pytest.raises(UnsupportedFormatError):
            load_coverage_reporter(["coverage.xml", "lcov.info"], resolver=resolver)

    def test_missing_file(self, repo: Path, resolver: GitPathResolver) -> None:  # noqa: ARG002
        with pytest.raises(ReportParseError) as exc_info:
            load_coverage_reporter(["nope.xml"], resolver=resolver)

        assert exc_info.value.code == ErrorCode.REPORT_NOT_FOUND


class TestFindCoverageReports:
    """Auto-discovery of well-known report locations."""

    def test_nothing_found(self, tmp_path: Path) -> None:
        assert find_coverage_reports(tmp_path) == []

    def test_finds_xml_reports_in_order(self, tmp_path: Path) -> None:
        (tmp_path / "coverage").mkdir()
        (tmp_path / "coverage" / "clover.xml").write_text("<coverage clover='1'/>")
        (tmp_path / "coverage.xml").write_text(COBERTURA)

        assert find_coverage_reports(tmp_path) == [
            tmp_path / "coverage.xml",
            tmp_path / "coverage" / "clover.xml",
        ]

    def test_first_kind_wins(self, tmp_path: Path) -> None:
        """LCOV found before any XML report drops the XML reports."""
        (tmp_path / "coverage").mkdir()
        (tmp_path / "coverage" / "lcov.info").write_text(LCOV)
        (tmp_path / "clover.xml").write_text("<coverage clover='1'/>")

        assert find_coverage_reports(tmp_path) == [tmp_path / "coverage" / "lcov.info"]

    def test_defaults_to_cwd(self, repo: Path) -> None:
        (repo / "lcov.info").write_text(LCOV)

        found = find_coverage_reports()

        assert [path.resolve() for path in found] == [(repo / "lcov.info").resolve()]


VITEST_CONFIG = """\
import { defineConfig } from 'vitest/config'

export default defineConfig({
  test: {
    coverage: {
      provider: 'v8',
      reporter: ['text', 'lcov', "clover"],
      reportsDirectory: './reports/unit',
    },
  },
})
"""


class TestParseBundlerConfig:
    """Reporter and directory extraction from Vite/Vitest configs."""

    def test_reporter_list_and_directory(self) -> None:
        assert parse_bundler_config(VITEST_CONFIG) == (
            ["text", "lcov", "clover"],
            "./reports/unit",
        )

    def test_single_reporter(self) -> None:
        assert parse_bundler_config("coverage: { reporter: 'cobertura' }") == (["cobertura"], None)

    def test_nothing_configured(self) -> None:
        assert parse_bundler_config("export default {}") == ([], None)


class TestFindReportsFromBundlerConfig:
    """Vite/Vitest configs name the reports before the well-known paths are tried."""

    def test_custom_reports_directory(self, tmp_path: Path) -> None:
        (tmp_path / "vitest.config.ts").write_text(VITEST_CONFIG)
        reports = tmp_path / "reports" / "unit"
        reports.mkdir(parents=True)
        (reports / "lcov.info").write_text(LCOV)
        (reports / "clover.xml").write_text("<coverage clover='1'/>")
        (tmp_path / "coverage.xml").write_text(COBERTURA)

        assert find_coverage_reports(tmp_path) == [reports / "lcov.info"]

    def test_default_reports_directory(self, tmp_path: Path) -> None:
        (tmp_path / "vite.config.js").write_text("test: { coverage: { reporter: ['cobertura'] } }")
        (tmp_path / "coverage").mkdir()
        (tmp_path / "coverage" / "cobertura.xml").write_text(COBERTURA)

        assert find_coverage_reports(tmp_path) == [tmp_path / "coverage" / "cobertura.xml"]

    def test_vitest_config_checked_before_vite(self, tmp_path: Path) -> None:
        (tmp_path / "vitest.config.js").write_text(
            "coverage: { reporter: 'clover', reportsDirectory: 'out' }"
        )
        (tmp_path / "vite.config.ts").write_text("coverage: { reporter: 'lcov' }")
        (tmp_path / "out").mkdir()
        (tmp_path / "out" / "clover.xml").write_text("<coverage clover='1'/>")
        (tmp_path / "coverage").mkdir()
        (tmp_path / "coverage" / "lcov.info").write_text(LCOV)

        assert find_coverage_reports(tmp_path) == [tmp_path / "out" / "clover.xml"]

    def test_falls_back_to_well_known_paths(self, tmp_path: Path) -> None:
        """A config whose reports were never written does not hide other reports."""
        (tmp_path / "vitest.config.ts").write_text(VITEST_CONFIG)
        (tmp_path / "coverage.xml").write_text(COBERTURA)

        assert find_coverage_reports(tmp_path) == [tmp_path / "coverage.xml"]
