"""diffgate cover - coverage of the lines changed in a diff."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click
import structlog
from rich.markup import escape

from diffgate.cli.options import diff_options, given_options
from diffgate.cli.utils import (
    build_diff_reporter,
    check_fail_under,
    emit_reports,
    fail_on_error,
    setup_logging,
)
from diffgate.config import CoverConfig, Tool, load_config
from diffgate.core.console import status
from diffgate.core.errors import ReportParseError
from diffgate.core.paths import GitPathResolver
from diffgate.coverage import find_coverage_reports, load_coverage_reporter
from diffgate.report.generator import (
    JsonReportGenerator,
    MarkdownReportGenerator,
    StringReportGenerator,
)

log = structlog.get_logger()


def _coverage_files(config: CoverConfig, root: Path) -> list[str]:
    if config.coverage_files:
        return config.coverage_files

    found = find_coverage_reports(root)
    if not found:
        raise ReportParseError.not_found(
            "<auto>", "no coverage report given and none found in the usual locations"
        )
    status(escape(f"Auto-detected coverage reports: {', '.join(str(p) for p in found)}"))
    return [str(p) for p in found]


def run_cover(ctx: click.Context, config: CoverConfig) -> None:
    resolver = GitPathResolver.discover()
    coverage_files = _coverage_files(config, resolver.cwd)
    log.debug("cover_start", coverage_files=coverage_files, compare_branch=config.compare_branch)

    violations_reporter = load_coverage_reporter(
        coverage_files,
        src_roots=config.src_roots,
        expand_coverage_report=config.expand_coverage_report,
        resolver=resolver,
    )
    diff_reporter = build_diff_reporter(config)

    console_generator = StringReportGenerator(
        violations_reporter,
        diff_reporter,
        show_uncovered=config.show_uncovered,
        total_percent_float=config.total_percent_float,
        resolver=resolver,
    )
    emit_reports(
        config,
        console_generator,
        JsonReportGenerator(violations_reporter, diff_reporter, config.total_percent_float),
        MarkdownReportGenerator(
            violations_reporter, diff_reporter, config.total_percent_float, resolver=resolver
        ),
    )
    check_fail_under(ctx, console_generator, config.fail_under, "Coverage")


@click.command()
@click.argument("coverage_files", nargs=-1, type=click.Path(dir_okay=False))
@diff_options
@click.option("--show-uncovered", is_flag=True, help="Print the source around uncovered lines.")
@click.option(
    "--src-roots",
    multiple=True,
    help="Source root JaCoCo package paths are resolved against (repeatable).",
)
@click.option(
    "--expand-coverage-report",
    is_flag=True,
    help="Fill unreported lines with the hit count of the previous reported line.",
)
@click.pass_context
def cover_command(
    ctx: click.Context,
    coverage_files: tuple[str, ...],
    config_file: Path | None,
    **options: Any,
) -> None:
    """Report coverage of the lines changed relative to a branch.

    COVERAGE_FILES are Cobertura, Clover or JaCoCo XML reports, or LCOV
    tracefiles. Without any, well-known report locations are searched.
    """
    overrides = given_options(ctx, **options)
    if coverage_files:
        overrides["coverage_files"] = list(coverage_files)

    def body() -> None:
        config = load_config(Tool.DIFF_COVER, config_file, **overrides)
        setup_logging(ctx, config)
        run_cover(ctx, config)  # type: ignore[arg-type]

    fail_on_error(body)
