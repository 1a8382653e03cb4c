"""Git access: raw diff text and untracked files."""

from diffgate.git.diff_tool import GitDiffFileTool, GitDiffTool
from diffgate.git.errors import DiffFileNotFoundError, GitError, RefNotFoundError

__all__ = [
    "DiffFileNotFoundError",
    "GitDiffFileTool",
    "GitDiffTool",
    "GitError",
    "RefNotFoundError",
]
