"""Quality reporter: linter violations per changed file."""

from __future__ import annotations

import os
from collections.abc import Callable, Sequence

import structlog

from diffgate.core.commands import execute
from diffgate.core.errors import DriverNotInstalledError
from diffgate.core.paths import GitPathResolver, to_unix_path
from diffgate.core.violations import BaseViolationReporter, Violation
from diffgate.quality.drivers import QualityDriver, ViolationsDict

log = structlog.get_logger()

Runner = Callable[[Sequence[str], Sequence[int]], tuple[str, str]]


class QualityReporter(BaseViolationReporter):
    """Violations from pre-generated linter reports, or from running the linter.

    With reports, every report is parsed once and files are looked up in the
    result. Without, the linter is run once per queried file.
    """

    def __init__(
        self,
        driver: QualityDriver,
        reports: Sequence[str] | None = None,
        options: str | None = None,
        resolver: GitPathResolver | None = None,
        runner: Runner | None = None,
    ) -> None:
        super().__init__(driver.name)
        self.driver = driver
        self.options = options
        self._reports = list(reports) if reports else None
        self._resolver = resolver or GitPathResolver()
        self._runner: Runner = runner or execute
        self._violations_dict: ViolationsDict = {}
        self._reports_parsed = False
        self._driver_installed: bool | None = None

    def clear_cache(self) -> None:
        self._violations_dict = {}
        self._reports_parsed = False

    def violations(self, src_path: str) -> list[Violation]:
        if not self.driver.supports(src_path):
            return []

        rel_path = to_unix_path(self._resolver.relative_path(src_path))

        if self._reports is not None:
            if not self._reports_parsed:
                self._violations_dict = self.driver.parse_reports(self._reports)
                self._reports_parsed = True
                log.debug(
                    "quality_reports_parsed",
                    driver=self.driver.name,
                    reports=len(self._reports),
                    files=len(self._violations_dict),
                )
            return self._violations_dict.get(rel_path, [])

        if rel_path not in self._violations_dict:
            self._violations_dict.update(self._run_driver(rel_path))
            self._violations_dict.setdefault(rel_path, [])
        return self._violations_dict[rel_path]

    def _run_driver(self, rel_path: str) -> ViolationsDict:
        if not os.path.exists(rel_path):
            # Deleted in the working tree but still named by the diff
            log.debug("quality_file_missing", path=rel_path)
            return {rel_path: []}

        if self._driver_installed is None:
            self._driver_installed = self.driver.installed()
        if not self._driver_installed:
            raise DriverNotInstalledError.for_driver(self.driver.name)

        command = list(self.driver.command)
        if self.options:
            command.extend(self.options.split())
        command.append(rel_path)

        log.debug("quality_driver_run", driver=self.driver.name, command=" ".join(command))
        stdout, stderr = self._runner(command, self.driver.exit_codes)
        output = stderr if self.driver.output_stderr else stdout
        return self.driver.parse_reports([output])

    def measured_lines(self, src_path: str) -> list[int] | None:  # noqa: ARG002
        return None
