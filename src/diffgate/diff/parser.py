"""Unified diff parser.

Turns the text of `git diff` into, per file, the line numbers added and
deleted. Expected input shape (git, -U0)::

    diff --git a/src/app.py b/src/app.py
    index 3b18e51..a9c2d4f 100644
    --- a/src/app.py
    +++ b/src/app.py
    @@ -10,0 +11,2 @@ def main():
    +    setup()
    +    run()

Both line counters of a hunk start at the new-side number (`+11` above).
Deletions are therefore recorded in the same numbering as additions, which is
what lets a later diff source retract lines an earlier source added.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable

from diffgate.core.errors import DiffParseError
from diffgate.core.paths import to_unix_path, unescape_filename
from diffgate.diff.models import FileDiff, unique_sorted

_LINE_SPLIT_RE = re.compile(r"\r\n|\r|\n")
_SRC_FILE_RE = re.compile(r'^diff --git "?a/.*"? "?b/([^"\n]*)"?')
_MERGE_CONFLICT_RE = re.compile(r"^diff --cc ([^\n]*)")
_HUNK_LINE_RE = re.compile(r"\+([0-9]*)")


def _parse_source_line(line: str) -> str:
    """Extract the new-side path from a file header."""
    if "--git" in line:
        regex = _SRC_FILE_RE
    elif "--cc" in line:
        regex = _MERGE_CONFLICT_RE
    else:
        raise DiffParseError.unrecognized_header(line)

    match = regex.match(line)
    if not match or not match.group(1):
        raise DiffParseError.bad_source_path(line)

    path = match.group(1)
    if line.startswith('diff --git "') or line.endswith('"'):
        # Quoted header: the regex dropped the quotes, escapes remain
        path = unescape_filename(f'"{path}"')
    return path


def _parse_hunk_line(line: str) -> int:
    """Start line of the new side from "@@ -a,b +c,d @@"."""
    components = line.split("@@")
    if len(components) >= 2:
        match = _HUNK_LINE_RE.search(components[1])
        if match and match.group(1):
            return int(match.group(1))
    raise DiffParseError.bad_hunk(line)


def _parse_source_sections(diff_text: str) -> dict[str, list[str]]:
    """Group hunk lines by the file header they follow."""
    sections: dict[str, list[str]] = {}
    src_path: str | None = None
    found_hunk = False

    for raw_line in _LINE_SPLIT_RE.split(diff_text):
        line = raw_line.rstrip()

        if line.startswith(("diff --git", "diff --cc")):
            src_path = _parse_source_line(line)
            sections.setdefault(src_path, [])
            found_hunk = False
        elif found_hunk or line.startswith("@@"):
            found_hunk = True
            if src_path is None:
                raise DiffParseError.orphan_hunk(line)
            sections[src_path].append(line)
        elif line.startswith("diff --"):
            raise DiffParseError.unrecognized_header(line)

    return sections


def _parse_lines(diff_lines: list[str]) -> FileDiff:
    result = FileDiff()
    current_new: int | None = None
    current_old: int | None = None

    for line in diff_lines:
        if line.startswith("@@"):
            current_new = current_old = _parse_hunk_line(line)
        elif line.startswith("+"):
            if current_new is not None:
                result.added_lines.append(current_new)
                current_new += 1
        elif line.startswith("-"):
            if current_old is not None:
                result.deleted_lines.append(current_old)
                current_old += 1
        else:
            if current_new is not None:
                current_new += 1
            if current_old is not None:
                current_old += 1

    return result


def parse_diff(diff_text: str) -> dict[str, FileDiff]:
    """Parse one unified diff into added/deleted line numbers per file.

    Args:
        diff_text: Output of `git diff` (any context size).

    Returns:
        Mapping of the path as printed by git to its FileDiff.

    Raises:
        DiffParseError: Unrecognized file header, hunk without a file header,
            or a hunk header without a new-side start line.
    """
    return {path: _parse_lines(lines) for path, lines in _parse_source_sections(diff_text).items()}


def merge_diffs(
    diffs: Iterable[dict[str, FileDiff]],
    *,
    accept: Callable[[str], bool] | None = None,
) -> dict[str, list[int]]:
    """Merge parsed diff sources left to right.

    For each file, a later source's deleted lines are removed from the added
    lines accumulated so far, then its added lines are appended. Paths are
    normalized to forward slashes; `accept` may veto a path.

    Returns:
        Mapping of normalized path to sorted, unique added line numbers.
    """
    merged: dict[str, list[int]] = {}
    for diff in diffs:
        for raw_path, file_diff in diff.items():
            path = to_unix_path(raw_path)
            if accept is not None and not accept(path):
                continue
            deleted = set(file_diff.deleted_lines)
            existing = [line for line in merged.get(path, []) if line not in deleted]
            merged[path] = existing + file_diff.added_lines

    return {path: unique_sorted(lines) for path, lines in merged.items()}
