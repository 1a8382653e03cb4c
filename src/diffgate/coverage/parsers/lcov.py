"""LCOV format parser.

LCOV format is a plain text format with records like:
- TN:<test name>
- SF:<source file path>
- DA:<line>,<hit count>[,<checksum>]
- BRDA:<line>,<block>,<branch>,<taken>
- LF:<lines found>
- LH:<lines hit>
- end_of_record

Only SF and DA records matter for line coverage; the rest are ignored.
A file listed in several records or several reports has its counts summed.

Used by: istanbul/nyc, vitest, c8, pytest-cov (--cov-report=lcov), cargo-llvm-cov
"""

from diffgate.core.paths import GitPathResolver, to_unix_path


def parse_lcov(
    content: str,
    resolver: GitPathResolver,
    into: dict[str, dict[int, int]] | None = None,
) -> dict[str, dict[int, int]]:
    """Accumulate LCOV line counts into a path -> {line: hits} mapping.

    Args:
        content: Text of one LCOV tracefile.
        resolver: Converts SF paths to the cwd-relative form used as keys.
        into: Existing mapping to add to (for multiple reports).

    Returns:
        The updated mapping. "-" hit counts count as 0; malformed DA records
        are skipped.
    """
    report = into if into is not None else {}
    source_file: str | None = None

    for raw in content.splitlines():
        line = raw.strip()
        if not line:
            continue

        directive, _, value = line.partition(":")
        if directive == "SF":
            source_file = to_unix_path(resolver.relative_path(value))
            report.setdefault(source_file, {})
        elif directive == "DA" and source_file is not None and value:
            parts = value.split(",")
            if len(parts) < 2:
                continue
            try:
                line_no = int(parts[0])
                executions = 0 if parts[1].strip() == "-" else int(parts[1])
            except ValueError:
                continue
            counts = report[source_file]
            counts[line_no] = counts.get(line_no, 0) + executions
        elif directive == "end_of_record":
            source_file = None

    return report
