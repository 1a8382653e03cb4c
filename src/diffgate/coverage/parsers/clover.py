"""Clover XML coverage documents.

Clover is written by PHPUnit (--coverage-clover), kover, OpenClover and
istanbul's clover reporter.

Structure:
<coverage generated="..." clover="...">
  <project timestamp="...">
    <package name="com.example">
      <file name="Foo.php" path="/path/to/Foo.php">
        <line num="1" type="stmt" count="1"/>
        <line num="5" type="cond" count="0" truecount="1" falsecount="0"/>
        <line num="10" type="method" name="bar" count="3"/>
      </file>
    </package>
  </project>
</coverage>

Only stmt and cond lines are measured; method lines duplicate the first
statement of a method.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from diffgate.core.paths import GitPathResolver, to_unix_path
from diffgate.coverage.models import FileCoverage

from .base import line_hits


class CloverDocument:
    """Clover report; files match on their path relative to the invocation root."""

    def __init__(self, root: ET.Element, resolver: GitPathResolver) -> None:
        self._root = root
        self._resolver = resolver

    @property
    def format_id(self) -> str:
        return "clover"

    def file_coverage(self, src_path: str) -> FileCoverage | None:
        wanted = to_unix_path(src_path)
        files = [
            file_elem
            for file_elem in self._root.findall(".//file")
            if file_elem.get("path")
            and to_unix_path(self._resolver.relative_path(file_elem.get("path", ""))) == wanted
        ]
        if not files:
            return None

        nodes: list[ET.Element] = []
        for file_elem in files:
            nodes.extend(file_elem.findall('./line[@type="stmt"]'))
            nodes.extend(file_elem.findall('./line[@type="cond"]'))
        return FileCoverage(path=src_path, lines=line_hits(nodes, "num", "count"))
