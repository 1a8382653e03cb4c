"""Unified diff parsing and changed-line reporting."""

from diffgate.diff.models import FileDiff, unique_sorted
from diffgate.diff.parser import merge_diffs, parse_diff
from diffgate.diff.reporter import BaseDiffReporter, GitDiffReporter, count_file_lines

__all__ = [
    "BaseDiffReporter",
    "FileDiff",
    "GitDiffReporter",
    "count_file_lines",
    "merge_diffs",
    "parse_diff",
    "unique_sorted",
]
