"""Coverage extractors: XML (Cobertura, Clover, JaCoCo) and LCOV reports."""

from diffgate.coverage.discovery import find_coverage_reports
from diffgate.coverage.merge import expand_line_hits, merge_file_coverage
from diffgate.coverage.models import FileCoverage, LineHit
from diffgate.coverage.parsers import detect_report_format
from diffgate.coverage.reporter import (
    LcovCoverageReporter,
    XmlCoverageReporter,
    load_coverage_reporter,
)

__all__ = [
    "FileCoverage",
    "LcovCoverageReporter",
    "LineHit",
    "XmlCoverageReporter",
    "detect_report_format",
    "expand_line_hits",
    "find_coverage_reports",
    "load_coverage_reporter",
    "merge_file_coverage",
]
