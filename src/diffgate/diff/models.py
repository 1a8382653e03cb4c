"""Diff data model.

Line numbers are 1-based and refer to the new side of the diff. Line sets are
stored however is convenient but always leave this package sorted and unique.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field


def unique_sorted(lines: Iterable[int]) -> list[int]:
    """Sorted, de-duplicated copy of a collection of line numbers."""
    return sorted(set(lines))


@dataclass(slots=True)
class FileDiff:
    """Lines added and deleted in one file by one diff source."""

    added_lines: list[int] = field(default_factory=list)
    deleted_lines: list[int] = field(default_factory=list)
