"""Aggregation of diff and violations, report generators and source snippets."""

from diffgate.report.aggregate import BaseReportGenerator, DiffViolations
from diffgate.report.generator import (
    JsonReportGenerator,
    MarkdownQualityReportGenerator,
    MarkdownReportGenerator,
    StringQualityReportGenerator,
    StringReportGenerator,
)
from diffgate.report.snippets import Snippet, load_snippets, snippet_ranges

__all__ = [
    "BaseReportGenerator",
    "DiffViolations",
    "JsonReportGenerator",
    "MarkdownQualityReportGenerator",
    "MarkdownReportGenerator",
    "Snippet",
    "StringQualityReportGenerator",
    "StringReportGenerator",
    "load_snippets",
    "snippet_ranges",
]
