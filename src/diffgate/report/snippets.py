"""Source excerpts around violation lines.

snippet_ranges groups violation lines into windows padded with
NUM_CONTEXT_LINES of context. Violations closer together than
MAX_GAP_IN_SNIPPET non-violation lines share one window.

Example (50-line file, violations at 10 and 20):
    snippet_ranges(50, [10, 20]) -> [(6, 14), (16, 24)]
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass, field

import structlog

from diffgate.core.paths import GitPathResolver

log = structlog.get_logger()

NUM_CONTEXT_LINES = 4
MAX_GAP_IN_SNIPPET = 4

# File extension -> fenced code block language hint
MARKDOWN_CODE_HINTS: dict[str, str] = {
    ".py": "python",
    ".pyi": "python",
    ".ts": "typescript",
    ".tsx": "tsx",
    ".js": "javascript",
    ".jsx": "jsx",
    ".java": "java",
    ".kt": "kotlin",
    ".c": "c",
    ".h": "c",
    ".cpp": "cpp",
    ".hpp": "cpp",
    ".cs": "csharp",
    ".go": "go",
    ".rs": "rust",
    ".php": "php",
    ".rb": "ruby",
    ".sh": "bash",
    ".bash": "bash",
    ".html": "html",
    ".xml": "xml",
    ".css": "css",
    ".json": "json",
    ".md": "markdown",
}


def snippet_ranges(total_lines: int, violation_lines: Iterable[int]) -> list[tuple[int, int]]:
    """Compute (start, end) windows, 1-based and inclusive, ascending and disjoint.

    A window opens NUM_CONTEXT_LINES above the first violation it holds and
    closes NUM_CONTEXT_LINES below its last one, once more than
    MAX_GAP_IN_SNIPPET lines pass without a violation. A window still open at
    the end of the file ends on the last line.
    """
    violations = set(violation_lines)
    ranges: list[tuple[int, int]] = []
    start: int | None = None
    last_violation = 0
    previous_end = 0

    for line_num in range(1, total_lines + 1):
        if line_num in violations:
            if start is None:
                # Never reach back into the previous window
                start = max(1, line_num - NUM_CONTEXT_LINES, previous_end + 1)
            last_violation = line_num
        elif start is not None and line_num - last_violation > MAX_GAP_IN_SNIPPET:
            previous_end = min(total_lines, last_violation + NUM_CONTEXT_LINES)
            ranges.append((start, previous_end))
            start = None

    if start is not None:
        ranges.append((start, total_lines))
    return ranges


def language_hint(filename: str) -> str:
    """Markdown code fence hint for a file, "" when unknown."""
    return MARKDOWN_CODE_HINTS.get(os.path.splitext(filename)[1].lower(), "")


@dataclass
class Snippet:
    """Consecutive source lines starting at start_line."""

    lines: list[str]
    src_path: str
    start_line: int
    violation_lines: set[int] = field(default_factory=set)

    def __post_init__(self) -> None:
        if self.start_line < 1:
            raise ValueError(f"Snippet start line must be >= 1, got {self.start_line}")

    @property
    def end_line(self) -> int:
        return self.start_line + len(self.lines) - 1

    def _numbered_lines(self) -> list[str]:
        width = len(str(self.end_line))
        rendered = []
        for offset, text in enumerate(self.lines):
            line_num = self.start_line + offset
            notice = "!" if line_num in self.violation_lines else " "
            rendered.append(f"{notice} {line_num:>{width}} {text}")
        return rendered

    def terminal(self) -> str:
        """Plain numbered lines; violation lines are marked with "!"."""
        return "\n".join(self._numbered_lines())

    def markdown(self) -> str:
        """Numbered lines in a fenced code block under a "Lines a-b" header."""
        body = "\n".join(self._numbered_lines())
        hint = language_hint(self.src_path)
        return f"Lines {self.start_line}-{self.end_line}\n\n```{hint}\n{body}\n```\n"


def _read_source(src_path: str, resolver: GitPathResolver) -> str | None:
    for candidate in (resolver.relative_path(src_path), src_path):
        try:
            with open(candidate, encoding="utf-8", errors="replace") as f:
                return f.read()
        except OSError:
            continue
    return None


def load_snippets(
    src_path: str,
    violation_lines: Iterable[int],
    resolver: GitPathResolver | None = None,
) -> list[Snippet]:
    """Read a git-relative source file and cut it into snippets.

    Returns:
        Snippets in file order; empty when the file cannot be read.
    """
    violations = set(violation_lines)
    contents = _read_source(src_path, resolver or GitPathResolver())
    if contents is None:
        log.warning("snippet_source_unreadable", path=src_path)
        return []

    src_lines = contents.splitlines()
    return [
        Snippet(
            lines=src_lines[start - 1 : end],
            src_path=src_path,
            start_line=start,
            violation_lines=violations,
        )
        for start, end in snippet_ranges(len(src_lines), violations)
    ]
