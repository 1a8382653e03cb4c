"""Quality drivers: how to run a linter and how to read what it prints."""

from __future__ import annotations

import os
import re
import shutil
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Sequence
from typing import Any

import structlog

from diffgate.core.errors import DriverError
from diffgate.core.paths import to_unix_path
from diffgate.core.violations import Violation

log = structlog.get_logger()

ViolationsDict = dict[str, list[Violation]]


class QualityDriver(ABC):
    """A linter diffgate knows how to invoke and parse.

    Attributes:
        name: Registry name, e.g. "pylint".
        supported_extensions: Lower-case file extensions without the dot.
        command: Argument list; the file to check is appended.
        exit_codes: Exit statuses that still mean "ran successfully".
        output_stderr: Read violations from stderr instead of stdout.
    """

    def __init__(
        self,
        name: str,
        supported_extensions: Sequence[str],
        command: Sequence[str],
        exit_codes: Sequence[int] = (0,),
        output_stderr: bool = False,
    ) -> None:
        self.name = name
        self.supported_extensions = [ext.lower() for ext in supported_extensions]
        self.command = list(command)
        self.exit_codes = list(exit_codes)
        self.output_stderr = output_stderr

    @abstractmethod
    def parse_reports(self, reports: Iterable[str]) -> ViolationsDict:
        """Violations per forward-slashed path, in report order."""

    def installed(self) -> bool:
        """Whether the linter executable is on PATH."""
        return bool(self.command) and shutil.which(self.command[0]) is not None

    def add_driver_args(self, **kwargs: Any) -> None:
        """Accept driver-specific options; the base driver takes none.

        Raises:
            DriverError: Any argument was given.
        """
        if kwargs:
            raise DriverError.unsupported_args(self.name, sorted(kwargs))

    def supports(self, src_path: str) -> bool:
        ext = os.path.splitext(src_path)[1].lstrip(".").lower()
        return ext in self.supported_extensions


class RegexBasedDriver(QualityDriver):
    """Linter whose output has one violation per match of a fixed pattern.

    The pattern's first three groups are the file, the line number and the
    message. A pattern compiled with re.MULTILINE is applied to the whole
    report; otherwise it is matched line by line.
    """

    def __init__(
        self,
        name: str,
        supported_extensions: Sequence[str],
        command: Sequence[str],
        expression: str | re.Pattern[str],
        exit_codes: Sequence[int] = (0,),
        output_stderr: bool = False,
    ) -> None:
        super().__init__(name, supported_extensions, command, exit_codes, output_stderr)
        self.expression = re.compile(expression) if isinstance(expression, str) else expression

    def _matches(self, report: str) -> Iterable[re.Match[str]]:
        if self.expression.flags & re.MULTILINE:
            yield from self.expression.finditer(report)
            return
        for line in report.splitlines():
            match = self.expression.match(line)
            if match:
                yield match

    def parse_reports(self, reports: Iterable[str]) -> ViolationsDict:
        violations_dict: ViolationsDict = {}
        for report in reports:
            for match in self._matches(report):
                if match.re.groups < 3:
                    continue
                src, line, message = match.group(1, 2, 3)
                try:
                    line_no = int(line)
                except (TypeError, ValueError):
                    continue
                violations_dict.setdefault(to_unix_path(src), []).append(
                    Violation(line=line_no, message=(message or "").strip())
                )
        return violations_dict


class EslintDriver(RegexBasedDriver):
    """eslint --format=compact; paths can be re-rooted with report_root_path."""

    def __init__(self) -> None:
        super().__init__(
            name="eslint",
            supported_extensions=["js", "ts", "tsx", "jsx"],
            command=["eslint", "--format=compact"],
            expression=r"^([^:]+): line (\d+), col \d+, (.*)$",
            exit_codes=[0, 1],
        )
        self.report_root_path: str | None = None

    def add_driver_args(self, **kwargs: Any) -> None:
        report_root_path = kwargs.pop("report_root_path", None)
        if report_root_path:
            self.report_root_path = report_root_path
        super().add_driver_args(**kwargs)

    def parse_reports(self, reports: Iterable[str]) -> ViolationsDict:
        violations_dict = super().parse_reports(reports)
        if not self.report_root_path:
            return violations_dict
        return {
            to_unix_path(os.path.relpath(path, self.report_root_path)): violations
            for path, violations in violations_dict.items()
        }


class XmlQualityDriver(QualityDriver):
    """Linter whose report is an XML document.

    parse_xml adds the violations of one parsed document to the mapping.
    Reports that are not well-formed XML are logged and skipped.
    """

    def __init__(
        self,
        name: str,
        supported_extensions: Sequence[str],
        command: Sequence[str],
        parse_xml: Callable[[ET.Element, ViolationsDict], None],
        exit_codes: Sequence[int] = (0,),
        output_stderr: bool = False,
    ) -> None:
        super().__init__(name, supported_extensions, command, exit_codes, output_stderr)
        self._parse_xml = parse_xml

    def parse_reports(self, reports: Iterable[str]) -> ViolationsDict:
        violations_dict: ViolationsDict = {}
        for report in reports:
            try:
                root = ET.fromstring(report)
            except ET.ParseError as e:
                log.warning("quality_report_parse_failed", driver=self.name, error=str(e))
                continue
            self._parse_xml(root, violations_dict)
        return violations_dict

    def installed(self) -> bool:
        # Only pre-generated reports are read
        return True
