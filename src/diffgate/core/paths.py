"""Path normalization shared by diff, coverage and quality inputs.

Every path used as a map key goes through to_unix_path and, where it comes
from git, through GitPathResolver.relative_path so that git-root-relative
diff paths and tool-reported paths can be joined.
"""

from __future__ import annotations

import os
import posixpath
from pathlib import Path

from diffgate.core.commands import CommandError, execute

_ESCAPES = {
    "\\": "\\",
    '"': '"',
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}


def to_unix_path(path: str) -> str:
    """Normalize a path and force forward slashes."""
    if not path:
        return path
    return os.path.normpath(path).replace("\\", "/")


def unescape_filename(filename: str) -> str:
    """Undo git's C-style quoting of unusual file names.

    Examples:
        '"a\\tb.py"' -> 'a<TAB>b.py'
        'plain.py' -> 'plain.py'
    """
    if not (len(filename) >= 2 and filename.startswith('"') and filename.endswith('"')):
        return filename

    unquoted = filename[1:-1]
    out: list[str] = []
    i = 0
    while i < len(unquoted):
        char = unquoted[i]
        if char == "\\" and i + 1 < len(unquoted):
            nxt = unquoted[i + 1]
            out.append(_ESCAPES.get(nxt, nxt))
            i += 2
        else:
            out.append(char)
            i += 1
    return "".join(out)


def _git_toplevel(cwd: Path) -> Path | None:
    try:
        stdout, _ = execute(["git", "rev-parse", "--show-toplevel"], cwd=cwd)
    except CommandError:
        return None
    out = stdout.strip().splitlines()
    return Path(out[0]) if out else None


class GitPathResolver:
    """Converts between git-root-relative and cwd-relative paths.

    Constructed once per run. A resolver without a root (outside a git
    checkout) returns paths unchanged.
    """

    def __init__(self, cwd: Path | None = None, root: Path | None = None) -> None:
        self.cwd = (cwd or Path.cwd()).resolve()
        self.root = root.resolve() if root is not None else None

    @classmethod
    def discover(cls, cwd: Path | None = None) -> GitPathResolver:
        """Build a resolver rooted at the enclosing git checkout, if any."""
        base = (cwd or Path.cwd()).resolve()
        return cls(cwd=base, root=_git_toplevel(base))

    def relative_path(self, git_path: str) -> str:
        """Make a git-root-relative path relative to the working directory.

        root=/project, cwd=/project/sub: "sub/file.py" -> "file.py"
        """
        if self.root is None:
            return git_path
        target = git_path if os.path.isabs(git_path) else os.path.join(self.root, git_path)
        return to_unix_path(os.path.relpath(target, self.cwd))

    def absolute_path(self, src_path: str) -> str:
        """Absolute form of a git-root-relative path."""
        if self.root is None:
            return to_unix_path(str(Path(src_path).resolve()))
        return to_unix_path(posixpath.join(self.root.as_posix(), src_path))
