"""JaCoCo XML coverage documents.

JaCoCo is the standard Java coverage tool, used via Maven and Gradle.

Structure:
<report name="...">
  <package name="com/example">
    <class name="com/example/Foo" sourcefilename="Foo.java">...</class>
    <sourcefile name="Foo.java">
      <line nr="1" mi="0" ci="1" mb="0" cb="0"/>
      <line nr="2" mi="1" ci="0" mb="1" cb="1"/>
    </sourcefile>
  </package>
</report>

Source files only carry a package-relative name, so a file matches when
<src_root>/<package>/<name> equals the queried path for one of the configured
source roots. A line is covered when it has covered instructions (ci > 0).
"""

from __future__ import annotations

import os
import xml.etree.ElementTree as ET
from collections.abc import Sequence

from diffgate.core.paths import GitPathResolver, to_unix_path
from diffgate.coverage.models import FileCoverage

from .base import line_hits


class JacocoDocument:
    """JaCoCo report resolved against a list of source roots."""

    def __init__(
        self,
        root: ET.Element,
        resolver: GitPathResolver,
        src_roots: Sequence[str] | None = None,
    ) -> None:
        self._root = root
        self._resolver = resolver
        self._src_roots = list(src_roots) if src_roots else [""]

    @property
    def format_id(self) -> str:
        return "jacoco"

    def _matches(self, package_name: str, file_name: str, src_path: str) -> bool:
        if not src_path.endswith(to_unix_path(file_name)):
            return False

        wanted = src_path.lower()
        for src_root in self._src_roots:
            candidate = os.path.join(src_root, package_name, file_name)
            if to_unix_path(self._resolver.relative_path(candidate)).lower() == wanted:
                return True
        return False

    def file_coverage(self, src_path: str) -> FileCoverage | None:
        wanted = to_unix_path(src_path)
        files: list[ET.Element] = []
        for package in self._root.findall(".//package"):
            package_name = package.get("name", "")
            for sourcefile in package.findall("sourcefile"):
                if self._matches(package_name, sourcefile.get("name", ""), wanted):
                    files.append(sourcefile)
        if not files:
            return None

        nodes: list[ET.Element] = []
        for sourcefile in files:
            nodes.extend(sourcefile.findall("line"))
        return FileCoverage(path=src_path, lines=line_hits(nodes, "nr", "ci"))
