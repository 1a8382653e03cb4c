"""Diff reporters: which files changed, and which of their lines are new."""

from __future__ import annotations

import fnmatch
import os
from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

import structlog

from diffgate.core.paths import to_unix_path
from diffgate.diff.models import FileDiff
from diffgate.diff.parser import merge_diffs, parse_diff
from diffgate.git.diff_tool import GitDiffTool

log = structlog.get_logger()


def _fnmatch_any(name: str, patterns: Sequence[str] | None, default: bool = True) -> bool:
    if not patterns:
        return default
    return any(fnmatch.fnmatch(name, pattern) for pattern in patterns)


def count_file_lines(path: str | Path) -> int:
    """Number of lines in a text file, 0 when it cannot be read."""
    try:
        content = Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError:
        return 0
    return len(content.splitlines())


class BaseDiffReporter(ABC):
    """Answers which source paths changed and which lines in them."""

    def __init__(
        self,
        name: str,
        exclude: Sequence[str] | None = None,
        include: Sequence[str] | None = None,
    ) -> None:
        self._name = name
        self._exclude = list(exclude) if exclude else None
        self._include = list(include) if include else None

    def name(self) -> str:
        return self._name

    @abstractmethod
    def src_paths_changed(self) -> list[str]:
        """Changed paths, normalized to forward slashes."""

    @abstractmethod
    def lines_changed(self, src_path: str) -> list[int]:
        """Sorted added line numbers for a changed path."""

    def is_path_excluded(self, path: str) -> bool:
        """Apply include globs (must match one) then exclude globs.

        Exclude patterns are tried against the basename and the absolute path.
        """
        if self._include and not _fnmatch_any(path, self._include, default=False):
            return True

        if not self._exclude:
            return False

        if _fnmatch_any(os.path.basename(path), self._exclude):
            return True
        return _fnmatch_any(to_unix_path(os.path.abspath(path)), self._exclude)


class GitDiffReporter(BaseDiffReporter):
    """Combines the committed, staged and unstaged diffs of a git checkout."""

    def __init__(
        self,
        compare_branch: str = "origin/main",
        git_diff: GitDiffTool | None = None,
        ignore_staged: bool = False,
        ignore_unstaged: bool = False,
        include_untracked: bool = False,
        supported_extensions: Sequence[str] | None = None,
        exclude: Sequence[str] | None = None,
        include: Sequence[str] | None = None,
    ) -> None:
        options: list[str] = []
        if not ignore_staged:
            options.append("staged")
        if not ignore_unstaged:
            options.append("unstaged")
        if include_untracked:
            options.append("untracked")

        range_notation = git_diff.range_notation if git_diff is not None else "..."
        name = f"{compare_branch}{range_notation}HEAD"
        if options:
            if len(options) > 1:
                name += f", {', '.join(options[:-1])} and {options[-1]} changes"
            else:
                name += f" and {options[0]} changes"

        super().__init__(name, exclude, include)

        self._compare_branch = compare_branch
        self._git_diff_tool = git_diff
        self._ignore_staged = ignore_staged
        self._ignore_unstaged = ignore_unstaged
        self._include_untracked = include_untracked
        self._supported_extensions = (
            [ext.lower().lstrip(".") for ext in supported_extensions]
            if supported_extensions
            else None
        )
        self._diff_dict: dict[str, list[int]] | None = None

    def clear_cache(self) -> None:
        """Forget the parsed diff; the next query re-runs git."""
        self._diff_dict = None

    def src_paths_changed(self) -> list[str]:
        diff_dict = self._git_diff()
        return sorted(diff_dict, key=str.lower)

    def lines_changed(self, src_path: str) -> list[int]:
        return self._git_diff().get(to_unix_path(src_path), [])

    def _included_diff_results(self) -> list[str]:
        if self._git_diff_tool is None:
            return []

        included = [self._git_diff_tool.diff_committed(self._compare_branch)]
        if not self._ignore_staged:
            included.append(self._git_diff_tool.diff_staged())
        if not self._ignore_unstaged:
            included.append(self._git_diff_tool.diff_unstaged())
        return included

    def _git_diff(self) -> dict[str, list[int]]:
        if self._diff_dict is None:
            parsed: list[dict[str, FileDiff]] = []
            for diff_text in self._included_diff_results():
                source = parse_diff(diff_text)
                log.debug("diff_source_parsed", files=len(source))
                parsed.append(source)

            diff_dict = merge_diffs(parsed, accept=self._validate_path)

            if self._include_untracked and self._git_diff_tool is not None:
                for raw_path in self._git_diff_tool.untracked():
                    path = to_unix_path(raw_path)
                    if not self._validate_path(path):
                        continue
                    diff_dict[path] = list(range(1, count_file_lines(path) + 1))

            self._diff_dict = diff_dict
        return self._diff_dict

    def _validate_path(self, src_path: str) -> bool:
        if self.is_path_excluded(src_path):
            return False
        if self._supported_extensions is None:
            return True
        ext = os.path.splitext(src_path)[1].lstrip(".").lower()
        return ext in self._supported_extensions
