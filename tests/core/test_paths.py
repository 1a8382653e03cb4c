"""Tests for core/paths.py path normalization."""

from pathlib import Path
from unittest.mock import patch

import pytest

from diffgate.core.commands import CommandError
from diffgate.core.paths import GitPathResolver, to_unix_path, unescape_filename

EXECUTE = "diffgate.core.paths.execute"


class TestToUnixPath:
    """Tests for to_unix_path."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("src/app.py", "src/app.py"),
            ("./src/app.py", "src/app.py"),
            ("src//pkg/../app.py", "src/app.py"),
            ("", ""),
        ],
    )
    def test_normalizes(self, raw: str, expected: str) -> None:
        assert to_unix_path(raw) == expected


class TestUnescapeFilename:
    """Tests for git's C-style quoted file names."""

    def test_plain_name_unchanged(self) -> None:
        assert unescape_filename("plain.py") == "plain.py"

    def test_quoted_tab(self) -> None:
        assert unescape_filename('"a\\tb.py"') == "a\tb.py"

    def test_quoted_quote_and_backslash(self) -> None:
        assert unescape_filename('"say \\"hi\\" \\\\ bye.py"') == 'say "hi" \\ bye.py'

    def test_quoted_without_escapes(self) -> None:
        assert unescape_filename('"with space.py"') == "with space.py"


class TestGitPathResolver:
    """Tests for GitPathResolver."""

    def test_relative_path_from_subdirectory(self, tmp_path: Path) -> None:
        """Git-root-relative paths become relative to a nested cwd."""
        sub = tmp_path / "sub"
        sub.mkdir()
        resolver = GitPathResolver(cwd=sub, root=tmp_path)

        assert resolver.relative_path("sub/file.py") == "file.py"
        assert resolver.relative_path("other/file.py") == "../other/file.py"

    def test_relative_path_of_absolute_path(self, tmp_path: Path) -> None:
        resolver = GitPathResolver(cwd=tmp_path, root=tmp_path)
        assert resolver.relative_path(str(tmp_path / "pkg" / "mod.py")) == "pkg/mod.py"

    def test_without_root_returns_path_unchanged(self, tmp_path: Path) -> None:
        resolver = GitPathResolver(cwd=tmp_path, root=None)
        assert resolver.relative_path("a/b.py") == "a/b.py"

    def test_absolute_path(self, tmp_path: Path) -> None:
        resolver = GitPathResolver(cwd=tmp_path, root=tmp_path)
        assert resolver.absolute_path("src/app.py") == f"{tmp_path.resolve().as_posix()}/src/app.py"

    def test_discover_uses_git_toplevel(self, tmp_path: Path) -> None:
        with patch(EXECUTE, return_value=(f"{tmp_path}\n", "")) as execute:
            resolver = GitPathResolver.discover(tmp_path)

        execute.assert_called_once_with(
            ["git", "rev-parse", "--show-toplevel"], cwd=tmp_path.resolve()
        )
        assert resolver.root == tmp_path.resolve()

    def test_discover_outside_git(self, tmp_path: Path) -> None:
        error = CommandError("not a git repository", command=["git"], exit_code=128)
        with patch(EXECUTE, side_effect=error):
            resolver = GitPathResolver.discover(tmp_path)
        assert resolver.root is None
