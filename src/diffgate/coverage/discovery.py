"""Locating coverage reports when none are given on the command line.

Discovery runs in two steps:
1. Vite/Vitest config files: the ``reporter`` and ``reportsDirectory``
   options of the coverage block name the reports to look for.
2. A fixed list of well-known report paths.
"""

import re
from pathlib import Path

import structlog

log = structlog.get_logger()

# Checked in order; the first one naming a reporter wins
BUNDLER_CONFIGS: tuple[str, ...] = (
    "vitest.config.ts",
    "vitest.config.js",
    "vite.config.ts",
    "vite.config.js",
)

DEFAULT_REPORTS_DIRECTORY = "coverage"

# Reporter name -> file it writes into the reports directory
REPORTER_FILES: dict[str, str] = {
    "lcov": "lcov.info",
    "cobertura": "cobertura.xml",
    "clover": "clover.xml",
    "jacoco": "jacoco.xml",
}

# Checked in order
WELL_KNOWN_REPORTS: tuple[str, ...] = (
    "coverage.xml",
    "cobertura.xml",
    "coverage/cobertura-coverage.xml",
    "coverage/lcov.info",
    "lcov.info",
    "coverage/clover.xml",
    "clover.xml",
    "build/reports/jacoco/test/jacocoTestReport.xml",
    "target/site/jacoco/jacoco.xml",
)

_REPORTER_RE = re.compile(r"""reporter:\s*(\[[^\]]*\]|['"][^'"]*['"])""")
_REPORTS_DIRECTORY_RE = re.compile(r"""reportsDirectory:\s*['"]([^'"]*)['"]""")
_QUOTES = "'\""


def parse_bundler_config(text: str) -> tuple[list[str], str | None]:
    """Extract coverage reporters and the reports directory from a config file.

    Only literal values are understood: ``reporter: 'lcov'``,
    ``reporter: ['lcov', "clover"]`` and ``reportsDirectory: './out'``.

    Returns:
        (reporter names, reports directory or None when not set)
    """
    reporters: list[str] = []
    match = _REPORTER_RE.search(text)
    if match:
        value = match.group(1)
        if value.startswith("["):
            items = (item.strip().strip(_QUOTES) for item in value[1:-1].split(","))
            reporters = [item for item in items if item]
        else:
            reporters = [value.strip(_QUOTES)]

    directory = _REPORTS_DIRECTORY_RE.search(text)
    return reporters, directory.group(1) if directory and directory.group(1) else None


def _reports_from_bundler_config(base: Path) -> list[Path]:
    reporters: list[str] = []
    reports_directory = DEFAULT_REPORTS_DIRECTORY

    for name in BUNDLER_CONFIGS:
        config_path = base / name
        if not config_path.is_file():
            continue
        try:
            text = config_path.read_text(encoding="utf-8")
        except OSError as e:
            log.warning("bundler_config_unreadable", path=str(config_path), error=str(e))
            continue

        reporters, directory = parse_bundler_config(text)
        if directory:
            reports_directory = directory
        if reporters:
            log.debug(
                "bundler_config_found",
                path=str(config_path),
                reporters=reporters,
                reports_directory=reports_directory,
            )
            break

    return [
        base / reports_directory / REPORTER_FILES[reporter]
        for reporter in reporters
        if reporter in REPORTER_FILES
        and (base / reports_directory / REPORTER_FILES[reporter]).is_file()
    ]


def _same_kind(found: list[Path]) -> list[Path]:
    first_is_lcov = found[0].suffix == ".info"
    return [path for path in found if (path.suffix == ".info") == first_is_lcov]


def find_coverage_reports(root: Path | None = None) -> list[Path]:
    """Return the coverage reports that exist under root.

    Reports named by a Vite/Vitest config take precedence over the
    well-known paths. LCOV and XML reports cannot be combined, so when both
    kinds exist only the kind found first is returned.
    """
    base = root or Path.cwd()

    found = _reports_from_bundler_config(base)
    if not found:
        found = [base / name for name in WELL_KNOWN_REPORTS if (base / name).is_file()]
    if not found:
        log.debug("coverage_reports_not_found", root=str(base))
        return []

    reports = _same_kind(found)
    log.debug("coverage_reports_found", reports=[str(p) for p in reports])
    return reports
