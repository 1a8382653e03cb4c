"""diffgate quality - linter violations on the lines changed in a diff."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click
import structlog

from diffgate.cli.options import diff_options, given_options
from diffgate.cli.utils import (
    build_diff_reporter,
    check_fail_under,
    emit_reports,
    fail_on_error,
    setup_logging,
)
from diffgate.config import QualityConfig, Tool, load_config
from diffgate.core.errors import ReportParseError
from diffgate.core.paths import GitPathResolver
from diffgate.quality import QualityReporter, registry
from diffgate.report.generator import (
    JsonReportGenerator,
    MarkdownQualityReportGenerator,
    StringQualityReportGenerator,
)

log = structlog.get_logger()


def _read_reports(paths: list[str]) -> list[str]:
    texts = []
    for path in paths:
        try:
            texts.append(Path(path).read_text(encoding="utf-8", errors="replace"))
        except OSError as e:
            raise ReportParseError.not_found(path, str(e)) from e
    return texts


def run_quality(ctx: click.Context, config: QualityConfig) -> None:
    resolver = GitPathResolver.discover()

    driver = registry.create(config.violations)
    if config.report_root_path:
        driver.add_driver_args(report_root_path=config.report_root_path)

    reports = _read_reports(config.reports) if config.reports else None
    log.debug(
        "quality_start", driver=driver.name, reports=len(reports or ()), live=reports is None
    )

    violations_reporter = QualityReporter(driver, reports, config.options, resolver=resolver)
    diff_reporter = build_diff_reporter(config, driver.supported_extensions)

    console_generator = StringQualityReportGenerator(
        violations_reporter, diff_reporter, config.total_percent_float
    )
    emit_reports(
        config,
        console_generator,
        JsonReportGenerator(violations_reporter, diff_reporter, config.total_percent_float),
        MarkdownQualityReportGenerator(
            violations_reporter, diff_reporter, config.total_percent_float, resolver=resolver
        ),
    )
    check_fail_under(ctx, console_generator, config.fail_under, "Quality")


@click.command()
@click.argument("input_reports", nargs=-1, type=click.Path(dir_okay=False))
@diff_options
@click.option(
    "--violations",
    help=f"Quality driver: {', '.join(registry.names())} (default: eslint).",
)
@click.option("--options", help="Extra arguments for the linter, quoted as one string.")
@click.option(
    "--report-root-path",
    help="Directory the linter report paths are relative to (eslint).",
)
@click.pass_context
def quality_command(
    ctx: click.Context,
    input_reports: tuple[str, ...],
    config_file: Path | None,
    **options: Any,
) -> None:
    """Report linter violations on the lines changed relative to a branch.

    INPUT_REPORTS are pre-generated linter outputs. Without any, the linter
    is run on every changed file.
    """
    overrides = given_options(ctx, **options)
    if input_reports:
        overrides["reports"] = list(input_reports)

    def body() -> None:
        config = load_config(Tool.DIFF_QUALITY, config_file, **overrides)
        setup_logging(ctx, config)
        run_quality(ctx, config)  # type: ignore[arg-type]

    fail_on_error(body)
