"""Fixtures for report tests: in-memory diff and violation sources."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from diffgate.core.violations import BaseViolationReporter, Violation
from diffgate.diff.reporter import BaseDiffReporter


class StaticDiffReporter(BaseDiffReporter):
    """Diff reporter over a fixed path -> added lines mapping."""

    def __init__(self, changes: dict[str, list[int]]) -> None:
        super().__init__("origin/main...HEAD")
        self._changes = changes

    def src_paths_changed(self) -> list[str]:
        return sorted(self._changes)

    def lines_changed(self, src_path: str) -> list[int]:
        return self._changes.get(src_path, [])


class StaticViolationReporter(BaseViolationReporter):
    """Violation reporter over fixed mappings; measured=None acts like a linter."""

    def __init__(
        self,
        violations: dict[str, list[Violation]],
        measured: dict[str, list[int]] | None,
        name: str,
    ) -> None:
        super().__init__(name)
        self._violations = violations
        self._measured = measured

    def violations(self, src_path: str) -> list[Violation]:
        return self._violations.get(src_path, [])

    def measured_lines(self, src_path: str) -> list[int] | None:
        if self._measured is None:
            return None
        return self._measured.get(src_path, [])


ReporterFactory = Callable[..., tuple[StaticViolationReporter, StaticDiffReporter]]


@pytest.fixture
def reporters() -> ReporterFactory:
    """Build (violations reporter, diff reporter) pairs from plain mappings."""

    def build(
        changes: dict[str, list[int]],
        violations: dict[str, list[Violation]],
        measured: dict[str, list[int]] | None = None,
        name: str = "XML",
    ) -> tuple[StaticViolationReporter, StaticDiffReporter]:
        return StaticViolationReporter(violations, measured, name), StaticDiffReporter(changes)

    return build
