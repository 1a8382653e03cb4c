"""Coverage violation reporters.

Both reporters answer, per git-relative source path, which lines are
uncovered (violations) and which lines were instrumented at all.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import structlog

from diffgate.core.errors import ReportParseError, UnsupportedFormatError
from diffgate.core.paths import GitPathResolver, to_unix_path
from diffgate.core.violations import BaseViolationReporter, Violation
from diffgate.coverage.merge import expand_line_hits, merge_file_coverage
from diffgate.coverage.models import FileCoverage
from diffgate.coverage.parsers import (
    CoverageDocument,
    detect_report_format,
    load_document,
    parse_lcov,
    parse_xml_document,
)

log = structlog.get_logger()


class XmlCoverageReporter(BaseViolationReporter):
    """Cobertura, Clover and JaCoCo reports, any mix of them."""

    def __init__(
        self,
        xml_texts: Sequence[str],
        src_roots: Sequence[str] | None = None,
        expand_coverage_report: bool = False,
        resolver: GitPathResolver | None = None,
        sources: Sequence[str] | None = None,
    ) -> None:
        super().__init__("XML")
        self._resolver = resolver or GitPathResolver()
        self._expand = expand_coverage_report
        self._documents: list[CoverageDocument] = []
        self._info_cache: dict[str, tuple[list[Violation], list[int]]] = {}

        names = list(sources) if sources else [f"report #{i + 1}" for i in range(len(xml_texts))]
        for name, text in zip(names, xml_texts, strict=False):
            try:
                root = parse_xml_document(text, name)
            except ReportParseError as e:
                log.warning("coverage_report_parse_failed", source=name, error=e.message)
                continue
            document = load_document(root, self._resolver, src_roots)
            log.debug("coverage_report_loaded", source=name, format=document.format_id)
            self._documents.append(document)

    def clear_cache(self) -> None:
        self._info_cache.clear()

    def _file_coverage(self, document: CoverageDocument, src_path: str) -> FileCoverage | None:
        file_cov = document.file_coverage(src_path)
        if file_cov is not None and self._expand:
            file_cov = FileCoverage(path=file_cov.path, lines=expand_line_hits(file_cov.lines))
        return file_cov

    def _cache_file(self, src_path: str) -> tuple[list[Violation], list[int]]:
        src_path = to_unix_path(src_path)
        if src_path not in self._info_cache:
            self._info_cache[src_path] = merge_file_coverage(
                self._file_coverage(document, src_path) for document in self._documents
            )
        return self._info_cache[src_path]

    def violations(self, src_path: str) -> list[Violation]:
        return self._cache_file(src_path)[0]

    def measured_lines(self, src_path: str) -> list[int] | None:
        return self._cache_file(src_path)[1]


class LcovCoverageReporter(BaseViolationReporter):
    """LCOV tracefiles; counts for the same file are summed across reports."""

    def __init__(
        self,
        lcov_texts: Sequence[str],
        resolver: GitPathResolver | None = None,
    ) -> None:
        super().__init__("LCOV")
        self._resolver = resolver or GitPathResolver()
        self._report: dict[str, dict[int, int]] = {}
        for text in lcov_texts:
            parse_lcov(text, self._resolver, into=self._report)
        self._info_cache: dict[str, tuple[list[Violation], list[int]]] = {}

    def clear_cache(self) -> None:
        self._info_cache.clear()

    def _cache_file(self, src_path: str) -> tuple[list[Violation], list[int]]:
        src_path = to_unix_path(src_path)
        if src_path not in self._info_cache:
            counts = self._report.get(src_path, {})
            violations = [
                Violation(line=line) for line, hits in sorted(counts.items()) if hits == 0
            ]
            self._info_cache[src_path] = (violations, sorted(counts))
        return self._info_cache[src_path]

    def violations(self, src_path: str) -> list[Violation]:
        return self._cache_file(src_path)[0]

    def measured_lines(self, src_path: str) -> list[int] | None:
        return self._cache_file(src_path)[1]


def _read_report(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise ReportParseError.not_found(str(path), str(e)) from e


def load_coverage_reporter(
    paths: Sequence[str | Path],
    *,
    src_roots: Sequence[str] | None = None,
    expand_coverage_report: bool = False,
    resolver: GitPathResolver | None = None,
) -> BaseViolationReporter:
    """Read coverage reports and build the matching reporter.

    Raises:
        ReportParseError: A report file cannot be read.
        UnsupportedFormatError: A report is neither XML nor LCOV, or the two
            kinds are mixed.
    """
    xml_reports: list[tuple[str, str]] = []
    lcov_reports: list[str] = []

    for raw in paths:
        path = Path(raw)
        text = _read_report(path)
        if detect_report_format(path, text) == "xml":
            xml_reports.append((str(path), text))
        else:
            lcov_reports.append(text)

    if xml_reports and lcov_reports:
        raise UnsupportedFormatError.mixed()

    if lcov_reports:
        return LcovCoverageReporter(lcov_reports, resolver=resolver)

    return XmlCoverageReporter(
        [text for _, text in xml_reports],
        src_roots=src_roots,
        expand_coverage_report=expand_coverage_report,
        resolver=resolver,
        sources=[name for name, _ in xml_reports],
    )
