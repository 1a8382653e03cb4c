"""Violation model and the reporter contract shared by coverage and quality inputs."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Violation:
    """A reported defect at one line: an uncovered line or a lint finding.

    Equality is structural, so two messages at the same line are two violations.
    """

    line: int
    message: str | None = None


class BaseViolationReporter(ABC):
    """Source of per-file violations.

    measured_lines returning None means the source has no notion of which
    lines it looked at; every changed line then counts as measured.
    """

    def __init__(self, name: str) -> None:
        self._name = name

    def name(self) -> str:
        return self._name

    @abstractmethod
    def violations(self, src_path: str) -> list[Violation]:
        """Violations reported for a file (any line, not only changed ones)."""

    def violations_batch(self, src_paths: Iterable[str]) -> dict[str, list[Violation]]:
        return {src_path: self.violations(src_path) for src_path in src_paths}

    def measured_lines(self, src_path: str) -> list[int] | None:  # noqa: ARG002
        return None

    def clear_cache(self) -> None:
        """Drop per-file results so inputs are re-read on the next query."""
