"""Coverage report formats and format detection.

This module provides:
- load_document: pick the XML variant of a parsed report by its root element
- detect_report_format: tell XML reports from LCOV tracefiles
"""

import xml.etree.ElementTree as ET
from collections.abc import Sequence
from pathlib import Path

from diffgate.core.errors import UnsupportedFormatError
from diffgate.core.paths import GitPathResolver

from .base import CoverageDocument, parse_xml_document
from .clover import CloverDocument
from .cobertura import CoberturaDocument
from .jacoco import JacocoDocument
from .lcov import parse_lcov

__all__ = [
    "CloverDocument",
    "CoberturaDocument",
    "CoverageDocument",
    "JacocoDocument",
    "detect_report_format",
    "load_document",
    "parse_lcov",
    "parse_xml_document",
]

_LCOV_SUFFIXES = (".info", ".lcov")
_LCOV_RECORDS = ("SF:", "TN:")


def load_document(
    root: ET.Element,
    resolver: GitPathResolver,
    src_roots: Sequence[str] | None = None,
) -> CoverageDocument:
    """Wrap a report root in the variant that knows how to query it.

    Detection strategy:
    1. <coverage clover="..."> is Clover
    2. a root with a name attribute (<report name="...">) is JaCoCo
    3. anything else is treated as Cobertura
    """
    if root.get("clover") is not None:
        return CloverDocument(root, resolver)
    if root.get("name") is not None:
        return JacocoDocument(root, resolver, src_roots)
    return CoberturaDocument(root, resolver)


def detect_report_format(path: Path, text: str) -> str:
    """Classify a coverage report as "xml" or "lcov".

    Raises:
        UnsupportedFormatError: Neither XML nor LCOV.
    """
    stripped = text.lstrip()
    if path.suffix.lower() == ".xml" or stripped.startswith("<"):
        return "xml"
    if path.suffix.lower() in _LCOV_SUFFIXES:
        return "lcov"
    if any(line.lstrip().startswith(_LCOV_RECORDS) for line in stripped.splitlines()):
        return "lcov"
    raise UnsupportedFormatError.unknown(str(path))
