"""Combining coverage for one file across several reports.

Reports are assumed to describe the same code from different test runs:

- a line is a violation only if every report that mentions the file leaves it
  uncovered (intersection)
- a line is measured if any report instruments it (union)

Reports that do not mention the file do not take part.
"""

from collections.abc import Iterable

from diffgate.core.violations import Violation
from diffgate.coverage.models import FileCoverage, LineHit


def expand_line_hits(hits: list[LineHit]) -> list[LineHit]:
    """Fill gaps between reported lines with the previous line's hit count.

    Some tools only report the first line of a multi-line statement. Lines
    between the first and last reported line that have no node inherit the
    count of the closest reported line above them.

    Example: [1: 0, 4: 3] -> [1: 0, 2: 0, 3: 0, 4: 3]
    """
    if not hits:
        return []

    by_line: dict[int, LineHit] = {}
    for hit in hits:
        previous = by_line.get(hit.line)
        # Keep the zero-hit node so the line stays uncovered
        if previous is None or hit.hits == 0:
            by_line[hit.line] = hit

    expanded: list[LineHit] = []
    last_hits = 0
    for line in range(min(by_line), max(by_line) + 1):
        node = by_line.get(line)
        if node is not None:
            last_hits = node.hits
            expanded.append(node)
        else:
            expanded.append(LineHit(line=line, hits=last_hits))
    return expanded


def merge_file_coverage(files: Iterable[FileCoverage | None]) -> tuple[list[Violation], list[int]]:
    """Merge one file's coverage from several reports.

    Args:
        files: Per-report coverage of the same file; None where a report does
            not mention it.

    Returns:
        (violations sorted by line, sorted measured line numbers).
    """
    uncovered: set[int] | None = None
    measured: set[int] = set()

    for file_cov in files:
        if file_cov is None:
            continue
        current = set(file_cov.uncovered_lines)
        uncovered = current if uncovered is None else uncovered & current
        measured.update(file_cov.measured_lines)

    violations = [Violation(line=line) for line in sorted(uncovered or ())]
    return violations, sorted(measured)
