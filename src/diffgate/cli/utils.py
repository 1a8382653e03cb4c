"""Plumbing shared by the cover and quality commands."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TypeVar

import click
import structlog
from rich.markup import escape

from diffgate.config import CoverConfig, QualityConfig
from diffgate.core.commands import CommandError
from diffgate.core.console import get_report_console, status
from diffgate.core.errors import DiffGateError
from diffgate.core.formatting import format_percent
from diffgate.core.logging import configure_logging, get_log_file_path
from diffgate.diff.reporter import GitDiffReporter
from diffgate.git import GitDiffFileTool, GitDiffTool, GitError
from diffgate.report.aggregate import BaseReportGenerator
from diffgate.report.generator import (
    JsonReportGenerator,
    MarkdownReportGenerator,
    SnippetReportGenerator,
)

log = structlog.get_logger()

T = TypeVar("T")


def setup_logging(ctx: click.Context, config: CoverConfig | QualityConfig) -> None:
    """Apply the configured logging unless --verbose already forced DEBUG."""
    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    if verbose:
        return
    if config.quiet:
        configure_logging(level="ERROR")
    else:
        configure_logging(config=config.logging)


def fail_on_error(func: Callable[[], T]) -> T:
    """Run a command body, turning expected failures into a clean exit 1."""
    try:
        return func()
    except (DiffGateError, GitError, CommandError) as e:
        log.debug("command_failed", error=str(e), error_type=type(e).__name__)
        log_path = get_log_file_path()
        if log_path is not None:
            status(escape(f"Details in {log_path}"))
        raise click.ClickException(str(e)) from e


def build_diff_reporter(
    config: CoverConfig | QualityConfig,
    supported_extensions: Sequence[str] | None = None,
) -> GitDiffReporter:
    """Diff reporter over git, or over --diff-file when given."""
    if config.diff_file:
        git_diff: GitDiffTool = GitDiffFileTool(config.diff_file)
    else:
        git_diff = GitDiffTool(config.diff_range_notation, config.ignore_whitespace)

    return GitDiffReporter(
        compare_branch=config.compare_branch,
        git_diff=git_diff,
        ignore_staged=config.ignore_staged,
        ignore_unstaged=config.ignore_unstaged,
        include_untracked=config.include_untracked,
        supported_extensions=supported_extensions,
        exclude=config.exclude,
        include=config.include,
    )


def write_report(
    generator: JsonReportGenerator | MarkdownReportGenerator,
    destination: str,
) -> None:
    """Write a JSON or Markdown report; "-" means stdout."""
    if destination == "-":
        generator.generate_report(click.get_text_stream("stdout"))
        return
    path = Path(destination)
    if path.parent != Path("."):
        path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        generator.generate_report(f)
    log.info("report_written", path=str(path), format=type(generator).__name__)


def emit_reports(
    config: CoverConfig | QualityConfig,
    console_generator: SnippetReportGenerator,
    json_generator: JsonReportGenerator,
    markdown_generator: MarkdownReportGenerator,
) -> None:
    if config.json_report:
        write_report(json_generator, config.json_report)
    if config.markdown_report:
        write_report(markdown_generator, config.markdown_report)
    if not config.quiet:
        console_generator.render(get_report_console())


def check_fail_under(
    ctx: click.Context,
    generator: BaseReportGenerator,
    fail_under: float,
    what: str,
) -> None:
    """Exit 1 when the total percentage is below the threshold."""
    total = generator.total_percent_covered()
    if total >= fail_under:
        return
    message = f"Failure. {what} is below {format_percent(fail_under)} ({format_percent(total)})."
    status(escape(message), style="error")
    ctx.exit(1)
