"""XML report parsers for the Java quality drivers."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from diffgate.core.paths import to_unix_path
from diffgate.core.violations import Violation


def _int_attr(elem: ET.Element, name: str) -> int:
    try:
        return int(elem.get(name, "0"))
    except ValueError:
        return 0


def parse_checkstyle(root: ET.Element, violations_dict: dict[str, list[Violation]]) -> None:
    """Parse checkstyle XML.

    <checkstyle><file name="..."><error line="3" message="..."/></file></checkstyle>
    """
    for file_elem in root.iter("file"):
        name = file_elem.get("name")
        if not name:
            continue
        for error in file_elem.findall("error"):
            line = _int_attr(error, "line")
            if line > 0:
                violations_dict.setdefault(to_unix_path(name), []).append(
                    Violation(line=line, message=error.get("message", ""))
                )


def parse_findbugs(root: ET.Element, violations_dict: dict[str, list[Violation]]) -> None:
    """Parse FindBugs/SpotBugs XML.

    <BugCollection>
      <BugInstance>
        <SourceLine sourcepath="com/example/Foo.java" start="12" .../>
        <LongMessage>...</LongMessage>
      </BugInstance>
    </BugCollection>

    sourcepath is package-relative and used as is.
    """
    for bug in root.iter("BugInstance"):
        source_line = bug.find("SourceLine")
        if source_line is None:
            continue
        sourcepath = source_line.get("sourcepath")
        start = _int_attr(source_line, "start")
        if not sourcepath or start <= 0:
            continue
        message_node = bug.find("LongMessage")
        message = (message_node.text or "") if message_node is not None else ""
        violations_dict.setdefault(to_unix_path(sourcepath), []).append(
            Violation(line=start, message=message)
        )
