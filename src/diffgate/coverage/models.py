"""Coverage data model.

File-centric: every format converts to a list of (line, hits) nodes per file.
Nodes are kept as reported, duplicates included, because a line counts as
uncovered in a report as soon as any of its nodes has zero hits.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class LineHit:
    """One reported line. Line numbers are 1-based."""

    line: int
    hits: int


@dataclass(slots=True)
class FileCoverage:
    """Coverage data for a single file from a single report."""

    path: str
    lines: list[LineHit] = field(default_factory=list)

    @property
    def measured_lines(self) -> list[int]:
        """Sorted instrumented line numbers, regardless of hit count."""
        return sorted({hit.line for hit in self.lines})

    @property
    def uncovered_lines(self) -> list[int]:
        """Sorted line numbers with a zero-hit node."""
        return sorted({hit.line for hit in self.lines if hit.hits == 0})
