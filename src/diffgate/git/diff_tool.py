"""Producers of raw unified-diff text.

GitDiffTool shells out to git; GitDiffFileTool replays a saved diff. Both hand
the text to diffgate.diff.parser unchanged. Whitespace suppression is a git
flag here, never a parser concern, so hunk line numbers stay git's.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import structlog

from diffgate.core.commands import CommandError, execute
from diffgate.core.paths import unescape_filename
from diffgate.git.errors import DiffFileNotFoundError, GitError, RefNotFoundError

log = structlog.get_logger()

RangeNotation = Literal["...", ".."]


class GitDiffTool:
    """Runs git diff for committed, staged and unstaged changes."""

    def __init__(
        self, range_notation: RangeNotation = "...", ignore_whitespace: bool = False
    ) -> None:
        self.range_notation = range_notation
        self._untracked_cache: list[str] | None = None
        self._git_args = ["git", "-c", "diff.mnemonicprefix=no", "-c", "diff.noprefix=no"]
        self._diff_args = ["diff", "--no-color", "--no-ext-diff", "-U0"]
        if ignore_whitespace:
            self._diff_args += ["--ignore-all-space", "--ignore-blank-lines"]

    def _run(self, *extra: str) -> str:
        command = [*self._git_args, *self._diff_args, *extra]
        try:
            return execute(command)[0]
        except CommandError as e:
            raise GitError(str(e).strip() or f"git command failed: {' '.join(command)}") from e

    def diff_committed(self, compare_branch: str = "origin/main") -> str:
        """Diff between the compare branch and HEAD."""
        diff_range = f"{compare_branch}{self.range_notation}HEAD"
        command = [*self._git_args, *self._diff_args, diff_range]
        try:
            return execute(command)[0]
        except CommandError as e:
            if "unknown revision" in str(e):
                raise RefNotFoundError(compare_branch) from e
            raise GitError(str(e).strip() or f"git command failed: {' '.join(command)}") from e

    def diff_unstaged(self) -> str:
        return self._run()

    def diff_staged(self) -> str:
        return self._run("--cached")

    def untracked(self) -> list[str]:
        """Untracked, non-ignored files, cached for the lifetime of the tool."""
        if self._untracked_cache is not None:
            return self._untracked_cache

        try:
            output = execute(["git", "ls-files", "--exclude-standard", "--others"])[0]
        except CommandError as e:
            raise GitError(str(e).strip() or "git ls-files failed") from e

        self._untracked_cache = [
            unescape_filename(line)
            for line in output.replace("\r\n", "\n").split("\n")
            if line
        ]
        log.debug("untracked_files", count=len(self._untracked_cache))
        return self._untracked_cache


class GitDiffFileTool(GitDiffTool):
    """Serves a pre-computed diff file as the committed diff; nothing else."""

    def __init__(self, diff_file_path: str | Path) -> None:
        super().__init__("...", False)
        self.diff_file_path = Path(diff_file_path)

    def diff_committed(self, compare_branch: str = "origin/main") -> str:  # noqa: ARG002
        try:
            return self.diff_file_path.read_text(encoding="utf-8")
        except OSError as e:
            raise DiffFileNotFoundError(str(self.diff_file_path)) from e

    def diff_unstaged(self) -> str:
        return ""

    def diff_staged(self) -> str:
        return ""

    def untracked(self) -> list[str]:
        return []
