"""Options shared by the cover and quality commands."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import click
from click.core import ParameterSource

F = TypeVar("F", bound=Callable[..., Any])

_DIFF_OPTIONS = [
    click.option(
        "--config-file",
        type=click.Path(dir_okay=False, path_type=Path),
        help="TOML or YAML file with a [tool.diff_cover] / [tool.diff_quality] section.",
    ),
    click.option("--compare-branch", help="Branch to compare against (default: origin/main)."),
    click.option(
        "--diff-range-notation",
        type=click.Choice(["...", ".."]),
        help="'...' diffs against the merge base, '..' against the branch tip.",
    ),
    click.option(
        "--fail-under", type=float, help="Exit 1 when the total is below this percentage."
    ),
    click.option("--ignore-staged", is_flag=True, help="Ignore staged changes."),
    click.option("--ignore-unstaged", is_flag=True, help="Ignore unstaged changes."),
    click.option("--include-untracked", is_flag=True, help="Treat untracked files as fully added."),
    click.option(
        "--ignore-whitespace",
        is_flag=True,
        help="Ignore whitespace-only and blank-line changes.",
    ),
    click.option("--exclude", multiple=True, help="Glob of files to leave out (repeatable)."),
    click.option("--include", multiple=True, help="Glob files must match (repeatable)."),
    click.option(
        "--diff-file",
        type=click.Path(dir_okay=False),
        help="Read the committed diff from this file instead of running git.",
    ),
    click.option(
        "--total-percent-float",
        is_flag=True,
        help="Show the total as a float with two decimals.",
    ),
    click.option(
        "--json-report", type=click.Path(dir_okay=False), help="Write a JSON report here."
    ),
    click.option(
        "--markdown-report",
        type=click.Path(dir_okay=False),
        help="Write a Markdown report here.",
    ),
    click.option("-q", "--quiet", is_flag=True, help="Only print errors."),
]


def diff_options(func: F) -> F:
    """Attach the shared diff options to a command."""
    for option in reversed(_DIFF_OPTIONS):
        func = option(func)
    return func


def given_options(ctx: click.Context, **params: Any) -> dict[str, Any]:
    """Keep only the options the user actually passed.

    Defaults must not shadow values coming from the environment or the config
    file, so anything click filled in itself is dropped. Empty repeatable
    options are dropped too.
    """
    given: dict[str, Any] = {}
    for name, value in params.items():
        if ctx.get_parameter_source(name) in (ParameterSource.DEFAULT, None):
            continue
        if isinstance(value, tuple):
            if not value:
                continue
            value = list(value)
        given[name] = value
    return given
