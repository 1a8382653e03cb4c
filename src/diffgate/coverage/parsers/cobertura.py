"""Cobertura XML coverage documents.

Cobertura XML is written by coverage.py, coverlet, gocover-cobertura and
istanbul's cobertura reporter.

Structure:
<coverage line-rate="0.85" ...>
  <sources>
    <source>/home/ci/project</source>
  </sources>
  <packages>
    <package name="...">
      <classes>
        <class name="..." filename="src/app.py" line-rate="...">
          <lines>
            <line number="1" hits="1"/>
            <line number="2" hits="0" branch="true" condition-coverage="50% (1/2)"/>
          </lines>
        </class>
      </classes>
    </package>
  </packages>
</coverage>

A class matches a queried file when its filename, either as written or joined
onto one of the <source> roots, equals the file's absolute or cwd-relative
path.
"""

from __future__ import annotations

import os
import xml.etree.ElementTree as ET

from diffgate.core.paths import GitPathResolver
from diffgate.coverage.models import FileCoverage

from .base import line_hits, normalize_report_path


class CoberturaDocument:
    """Cobertura report with a lazily built filename -> classes index."""

    def __init__(self, root: ET.Element, resolver: GitPathResolver) -> None:
        self._root = root
        self._resolver = resolver
        self._classes: dict[str, list[ET.Element]] | None = None

    @property
    def format_id(self) -> str:
        return "cobertura"

    def _class_index(self) -> dict[str, list[ET.Element]]:
        if self._classes is None:
            sources = [
                node.text.strip()
                for node in self._root.findall(".//sources/source")
                if node.text and node.text.strip()
            ]
            index: dict[str, list[ET.Element]] = {}
            for cls in self._root.findall(".//class"):
                filename = cls.get("filename")
                if not filename:
                    continue
                index.setdefault(normalize_report_path(filename), []).append(cls)
                for source in sources:
                    joined = normalize_report_path(os.path.join(source, filename))
                    index.setdefault(joined, []).append(cls)
            self._classes = index
        return self._classes

    def file_coverage(self, src_path: str) -> FileCoverage | None:
        index = self._class_index()
        abs_path = normalize_report_path(self._resolver.absolute_path(src_path))
        rel_path = normalize_report_path(self._resolver.relative_path(src_path))

        classes = index.get(abs_path) or index.get(rel_path)
        if not classes:
            return None

        nodes: list[ET.Element] = []
        for cls in classes:
            nodes.extend(cls.findall("./lines/line"))
        return FileCoverage(path=src_path, lines=line_hits(nodes, "number", "hits"))
