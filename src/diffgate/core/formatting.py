"""Summary formatting utilities for consistent terminal output.

Design principles:
- Line lists collapse into ranges ("1-3,5") so long violation lists stay readable
- Grammatically correct (1 line vs 2 lines)
"""

from __future__ import annotations

from collections.abc import Iterable


def combine_adjacent_lines(line_numbers: Iterable[int]) -> list[str]:
    """Group consecutive line numbers into range strings.

    Examples:
        [1, 2, 3, 5] -> ["1-3", "5"]
        [] -> []
    """
    ordered = sorted(set(line_numbers))
    if not ordered:
        return []

    combined: list[str] = []
    start = end = ordered[0]
    for line in ordered[1:]:
        if line == end + 1:
            end = line
            continue
        combined.append(f"{start}-{end}" if end != start else str(start))
        start = end = line
    combined.append(f"{start}-{end}" if end != start else str(start))
    return combined


def compress_ranges(line_numbers: Iterable[int]) -> str:
    """Comma-joined form of combine_adjacent_lines ("1-3,5,7-9")."""
    return ",".join(combine_adjacent_lines(line_numbers))


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """Return grammatically correct singular/plural form.

    Args:
        count: The number of items
        singular: Singular form (e.g., "line")
        plural: Plural form (default: singular + "s")

    Returns:
        Formatted string like "1 line" or "3 lines"
    """
    if plural is None:
        plural = singular + "s"
    word = singular if count == 1 else plural
    return f"{count} {word}"


def format_percent(value: float | int | None) -> str:
    """Render a percentage the way reports show it.

    Integers print bare, floats keep at most two decimals, None is "N/A".
    """
    if value is None:
        return "N/A"
    if isinstance(value, int):
        return f"{value}%"
    return f"{round(value, 2):g}%"
