"""Tests for core/formatting.py."""

import pytest

from diffgate.core.formatting import (
    combine_adjacent_lines,
    compress_ranges,
    format_percent,
    pluralize,
)


class TestCombineAdjacentLines:
    """Tests for combine_adjacent_lines."""

    def test_empty_list(self) -> None:
        assert combine_adjacent_lines([]) == []

    def test_single_line(self) -> None:
        assert combine_adjacent_lines([5]) == ["5"]

    def test_mixed_ranges_and_singles(self) -> None:
        assert combine_adjacent_lines([1, 2, 3, 5, 7, 8, 9]) == ["1-3", "5", "7-9"]

    def test_unsorted_input_with_duplicates(self) -> None:
        assert combine_adjacent_lines([3, 1, 2, 2]) == ["1-3"]


class TestCompressRanges:
    """Tests for compress_ranges."""

    def test_empty_list(self) -> None:
        assert compress_ranges([]) == ""

    def test_two_non_consecutive_lines(self) -> None:
        assert compress_ranges([1, 5]) == "1,5"

    def test_long_gap(self) -> None:
        assert compress_ranges([1, 2, 100, 101, 102]) == "1-2,100-102"


class TestPluralize:
    """Tests for pluralize."""

    def test_singular(self) -> None:
        assert pluralize(1, "line") == "1 line"

    def test_plural(self) -> None:
        assert pluralize(0, "line") == "0 lines"
        assert pluralize(3, "line") == "3 lines"


class TestFormatPercent:
    """Tests for format_percent."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (80, "80%"),
            (100, "100%"),
            (66.666, "66.67%"),
            (100.0, "100%"),
            (None, "N/A"),
        ],
    )
    def test_formats(self, value: float | int | None, expected: str) -> None:
        assert format_percent(value) == expected
