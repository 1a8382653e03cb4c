"""Report generators: JSON, console (rich) and Markdown renderings of the statistics."""

from __future__ import annotations

import json
from typing import TextIO

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.text import Text

from diffgate.core.formatting import compress_ranges, format_percent, pluralize
from diffgate.core.paths import GitPathResolver
from diffgate.core.violations import BaseViolationReporter
from diffgate.diff.reporter import BaseDiffReporter
from diffgate.report.aggregate import BaseReportGenerator
from diffgate.report.snippets import Snippet, load_snippets


def _file_percent(value: float | None) -> str:
    return "N/A" if value is None else f"{value:.1f}%"


class JsonReportGenerator(BaseReportGenerator):
    """report_dict() as a single JSON document."""

    def generate_report(self, output: TextIO) -> None:
        output.write(json.dumps(self.report_dict()))


class SnippetReportGenerator(BaseReportGenerator):
    """Base for human-readable reports that can show the offending source."""

    def __init__(
        self,
        violations_reporter: BaseViolationReporter,
        diff_reporter: BaseDiffReporter,
        total_percent_float: bool = False,
        include_snippets: bool = False,
        resolver: GitPathResolver | None = None,
    ) -> None:
        super().__init__(violations_reporter, diff_reporter, total_percent_float)
        self.include_snippets = include_snippets
        self._resolver = resolver

    def snippets(self, src_path: str) -> list[Snippet]:
        if not self.include_snippets:
            return []
        return load_snippets(src_path, self.violation_lines(src_path), self._resolver)

    def render(self, console: Console) -> None:
        raise NotImplementedError

    def generate_report(self, output: TextIO) -> None:
        console = Console(file=output, highlight=False, soft_wrap=True, color_system=None)
        self.render(console)


class StringReportGenerator(SnippetReportGenerator):
    """Console coverage report; show_uncovered adds source snippets."""

    def __init__(
        self,
        violations_reporter: BaseViolationReporter,
        diff_reporter: BaseDiffReporter,
        show_uncovered: bool = False,
        total_percent_float: bool = False,
        resolver: GitPathResolver | None = None,
    ) -> None:
        super().__init__(
            violations_reporter,
            diff_reporter,
            total_percent_float,
            include_snippets=show_uncovered,
            resolver=resolver,
        )

    def render(self, console: Console) -> None:
        console.print(Rule(style="dim"))
        console.print(Text("Diff Coverage", style="bold"))
        console.print(f"Diff: {escape(self.diff_report_name())}")
        console.print(Rule(style="dim"))

        src_paths = self.src_paths()
        if not src_paths:
            console.print("No lines with coverage information in this diff.")
            console.print(Rule(style="dim"))
            return

        for src_path in src_paths:
            line = Text(f"{src_path} ({_file_percent(self.percent_covered(src_path))})")
            missing = self.violation_lines(src_path)
            if missing:
                line.append(": Missing lines ")
                line.append(compress_ranges(missing), style="red")
            console.print(line)
            for snippet in self.snippets(src_path):
                console.print(Text(snippet.terminal(), style="dim"))
                console.print()

        console.print(Rule(style="dim"))
        console.print(f"Total:   {pluralize(self.total_num_lines(), 'line')}")
        console.print(f"Missing: {pluralize(self.total_num_violations(), 'line')}")
        console.print(f"Coverage: {format_percent(self.total_percent_covered())}")
        console.print(Rule(style="dim"))


class StringQualityReportGenerator(SnippetReportGenerator):
    """Console quality report listing each violation message."""

    def render(self, console: Console) -> None:
        console.print(Rule(style="dim"))
        console.print(Text("Diff Quality", style="bold"))
        console.print(f"Quality Report: {escape(self.coverage_report_name())}")
        console.print(f"Diff: {escape(self.diff_report_name())}")
        console.print(Rule(style="dim"))

        src_paths = self.src_paths()
        if not src_paths:
            console.print("No lines with quality information in this diff.")
            console.print(Rule(style="dim"))
            return

        for src_path in src_paths:
            violations = self.violations(src_path)
            if not violations:
                console.print(Text(f"{src_path} (100%)"))
                continue
            console.print(Text(f"{src_path} ({_file_percent(self.percent_covered(src_path))}):"))
            for violation in violations:
                line = Text(f"{src_path}:{violation.line}: ", style="red")
                line.append(violation.message or "")
                console.print(line)

        console.print(Rule(style="dim"))
        console.print(f"Total:   {pluralize(self.total_num_lines(), 'line')}")
        console.print(f"Violations: {pluralize(self.total_num_violations(), 'line')}")
        console.print(f"% Quality: {format_percent(self.total_percent_covered())}")
        console.print(Rule(style="dim"))


class MarkdownReportGenerator(SnippetReportGenerator):
    """Markdown coverage report with snippets of the uncovered lines."""

    title = "Diff Coverage"
    missing_label = "Missing"
    percent_label = "Coverage"
    empty_message = "No lines with coverage information in this diff."

    def __init__(
        self,
        violations_reporter: BaseViolationReporter,
        diff_reporter: BaseDiffReporter,
        total_percent_float: bool = False,
        resolver: GitPathResolver | None = None,
    ) -> None:
        super().__init__(
            violations_reporter,
            diff_reporter,
            total_percent_float,
            include_snippets=True,
            resolver=resolver,
        )

    def _header(self) -> list[str]:
        return [f"# {self.title}", f"## Diff: {self.diff_report_name()}", ""]

    def _file_entry(self, src_path: str) -> list[str]:
        missing = self.violation_lines(src_path)
        entry = f"- {src_path} ({_file_percent(self.percent_covered(src_path))})"
        if missing:
            entry += f": Missing lines {compress_ranges(missing)}"
        return [entry]

    def markdown(self) -> str:
        parts = self._header()
        src_paths = self.src_paths()
        if not src_paths:
            parts.append(self.empty_message)
            return "\n".join(parts) + "\n"

        for src_path in src_paths:
            parts.extend(self._file_entry(src_path))

        parts += [
            "",
            "## Summary",
            "",
            f"- **Total**: {pluralize(self.total_num_lines(), 'line')}",
            f"- **{self.missing_label}**: {pluralize(self.total_num_violations(), 'line')}",
            f"- **{self.percent_label}**: {format_percent(self.total_percent_covered())}",
            "",
        ]

        for src_path in src_paths:
            snippets = self.snippets(src_path)
            if not snippets:
                continue
            parts += [f"## {src_path}", ""]
            for snippet in snippets:
                parts += [snippet.markdown(), "---", ""]

        return "\n".join(parts).rstrip("\n") + "\n"

    def generate_report(self, output: TextIO) -> None:
        output.write(self.markdown())


class MarkdownQualityReportGenerator(MarkdownReportGenerator):
    """Markdown quality report; each file lists its violation messages."""

    title = "Diff Quality"
    missing_label = "Violations"
    percent_label = "Quality"
    empty_message = "No lines with quality information in this diff."

    def _header(self) -> list[str]:
        return [
            f"# {self.title}",
            f"## Quality Report: {self.coverage_report_name()}",
            f"## Diff: {self.diff_report_name()}",
            "",
        ]

    def _file_entry(self, src_path: str) -> list[str]:
        violations = self.violations(src_path)
        if not violations:
            return [f"- {src_path} (100%)"]
        entries = [f"- {src_path} ({_file_percent(self.percent_covered(src_path))}):"]
        entries += [f"    - {src_path}:{v.line}: {v.message or ''}" for v in violations]
        return entries
