"""Coverage document protocol and shared XML helpers."""

from __future__ import annotations

import os
import sys
import xml.etree.ElementTree as ET
from typing import Protocol

from diffgate.core.errors import ReportParseError
from diffgate.core.paths import to_unix_path
from diffgate.coverage.models import FileCoverage, LineHit


class CoverageDocument(Protocol):
    """One parsed XML coverage report.

    Each format owns its own rules for matching a queried source path to the
    elements of the report.
    """

    @property
    def format_id(self) -> str:
        """Format identifier (e.g., 'cobertura', 'jacoco')."""
        ...

    def file_coverage(self, src_path: str) -> FileCoverage | None:
        """Line nodes for a git-relative source path.

        Returns:
            FileCoverage, or None when the report does not mention the file.
        """
        ...


def normalize_report_path(path: str) -> str:
    """Forward-slash form, lower-cased where the filesystem ignores case."""
    unix_path = to_unix_path(path)
    if sys.platform == "win32" or os.name == "nt":
        return unix_path.lower()
    return unix_path


def parse_xml_document(text: str, source: str) -> ET.Element:
    """Parse report text into its root element with namespaces stripped.

    Raises:
        ReportParseError: The text is not well-formed XML.
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise ReportParseError.invalid_xml(source, str(e)) from e

    for elem in root.iter():
        if isinstance(elem.tag, str) and "}" in elem.tag:
            elem.tag = elem.tag.split("}", 1)[1]
    return root


def line_hits(nodes: list[ET.Element], number_attr: str, hits_attr: str) -> list[LineHit]:
    """Convert <line> elements into LineHit nodes, skipping unparseable ones."""
    hits: list[LineHit] = []
    for node in nodes:
        try:
            line = int(node.get(number_attr, "0"))
            count = int(node.get(hits_attr, "0"))
        except ValueError:
            continue
        hits.append(LineHit(line=line, hits=count))
    return hits
