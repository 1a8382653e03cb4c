"""Tests for quality drivers and their output parsing."""

from __future__ import annotations

import re
from unittest.mock import patch

import pytest

from diffgate.core.errors import DriverError, ErrorCode
from diffgate.core.violations import Violation
from diffgate.quality import registry
from diffgate.quality.drivers import EslintDriver, RegexBasedDriver


class TestRegexBasedDriver:
    """Line-oriented linter output."""

    def test_parses_matching_lines(self) -> None:
        driver = registry.create("pylint")
        report = (
            "************* Module app\n"
            "src/app.py:3: [C0114(missing-module-docstring), ] Missing module docstring\n"
            "src/app.py:10: [W0611(unused-import), ] Unused import os  \n"
            "src/util.py:1: [E0401(import-error), ] Unable to import 'x'\n"
        )

        result = driver.parse_reports([report])

        assert result == {
            "src/app.py": [
                Violation(3, "[C0114(missing-module-docstring), ] Missing module docstring"),
                Violation(10, "[W0611(unused-import), ] Unused import os"),
            ],
            "src/util.py": [Violation(1, "[E0401(import-error), ] Unable to import 'x'")],
        }

    def test_several_reports_accumulate(self) -> None:
        driver = registry.create("flake8")

        result = driver.parse_reports(["a.py:1:1: E1 first\n", "a.py:2:5: E2 second\n"])

        assert result == {"a.py": [Violation(1, "E1 first"), Violation(2, "E2 second")]}

    def test_multiline_pattern_scans_whole_report(self) -> None:
        driver = RegexBasedDriver(
            name="custom",
            supported_extensions=["txt"],
            command=["custom"],
            expression=re.compile(r"^FILE (\S+)\nLINE (\d+)\nMSG (.*)$", re.MULTILINE),
        )

        result = driver.parse_reports(["FILE a.txt\nLINE 4\nMSG too long\n"])

        assert result == {"a.txt": [Violation(4, "too long")]}

    def test_pattern_with_too_few_groups_yields_nothing(self) -> None:
        driver = RegexBasedDriver("custom", ["txt"], ["custom"], r"^(\S+):(\d+)$")

        assert driver.parse_reports(["a.txt:4\n"]) == {}

    def test_mypy_output(self) -> None:
        driver = registry.create("mypy")
        report = (
            "src/app.py:12: error: Incompatible return value type  [return-value]\n"
            "src/app.py:14:5: warning: Unused 'type: ignore' comment  [unused-ignore]\n"
            "src/app.py:20: note: See https://mypy.readthedocs.io\n"
        )

        result = driver.parse_reports([report])

        assert [v.line for v in result["src/app.py"]] == [12, 14]

    def test_windows_paths_normalized(self) -> None:
        driver = registry.create("shellcheck")

        result = driver.parse_reports(["scripts\\build.sh:3:1: warning: Quote this [SC2086]\n"])

        assert list(result) == ["scripts/build.sh"]

    def test_supports(self) -> None:
        driver = registry.create("ruff")

        assert driver.supports("pkg/module.py")
        assert driver.supports("pkg/stubs.PYI")
        assert not driver.supports("README.md")

    def test_add_driver_args_rejects_unknown(self) -> None:
        driver = registry.create("pylint")

        with pytest.raises(DriverError) as exc_info:
            driver.add_driver_args(report_root_path="/tmp")

        assert exc_info.value.code == ErrorCode.DRIVER_UNSUPPORTED_ARGS

    def test_add_driver_args_accepts_nothing(self) -> None:
        registry.create("pylint").add_driver_args()

    def test_installed_checks_path(self) -> None:
        driver = registry.create("flake8")

        with patch("shutil.which", return_value=None):
            assert not driver.installed()
        with patch("shutil.which", return_value="/usr/bin/flake8"):
            assert driver.installed()


class TestEslintDriver:
    """Compact eslint output and report root remapping."""

    REPORT = (
        "/ci/project/web/src/app.js: line 3, col 7, Error - 'x' is assigned a value "
        "but never used. (no-unused-vars)\n"
        "/ci/project/web/src/app.js: line 9, col 1, Warning - Unexpected console statement. "
        "(no-console)\n"
        "\n"
        "2 problems\n"
    )

    def test_parses_compact_format(self) -> None:
        driver = EslintDriver()

        result = driver.parse_reports([self.REPORT])

        assert [v.line for v in result["/ci/project/web/src/app.js"]] == [3, 9]
        assert result["/ci/project/web/src/app.js"][1].message == (
            "Warning - Unexpected console statement. (no-console)"
        )

    def test_report_root_path(self) -> None:
        driver = registry.create("eslint")
        driver.add_driver_args(report_root_path="/ci/project")

        result = driver.parse_reports([self.REPORT])

        assert list(result) == ["web/src/app.js"]

    def test_other_args_still_rejected(self) -> None:
        driver = EslintDriver()

        with pytest.raises(DriverError):
            driver.add_driver_args(report_root_path="/ci", max_warnings=0)


class TestXmlDrivers:
    """Report-only Java drivers."""

    def test_checkstyle(self) -> None:
        driver = registry.create("checkstyle")
        report = """<?xml version="1.0" encoding="UTF-8"?>
<checkstyle version="10.12">
  <file name="src/main/java/Foo.java">
    <error line="5" column="3" severity="warning" message="Missing Javadoc."/>
    <error line="0" severity="error" message="File-level problem"/>
  </file>
  <file name="src/main/java/Bar.java"/>
</checkstyle>"""

        result = driver.parse_reports([report])

        assert result == {"src/main/java/Foo.java": [Violation(5, "Missing Javadoc.")]}

    def test_findbugs(self) -> None:
        driver = registry.create("findbugs")
        report = """<BugCollection>
  <BugInstance type="NP_NULL_ON_SOME_PATH">
    <LongMessage>Possible null pointer dereference</LongMessage>
    <SourceLine classname="com.example.Foo" start="42" end="42"
                sourcepath="com/example/Foo.java"/>
  </BugInstance>
  <BugInstance type="NO_SOURCE">
    <LongMessage>No line</LongMessage>
  </BugInstance>
</BugCollection>"""

        result = driver.parse_reports([report])

        assert result == {
            "com/example/Foo.java": [Violation(42, "Possible null pointer dereference")]
        }

    def test_malformed_report_skipped(self) -> None:
        driver = registry.create("checkstyle")
        good = '<checkstyle><file name="A.java"><error line="1" message="m"/></file></checkstyle>'

        result = driver.parse_reports(["<checkstyle>", good])

        assert result == {"A.java": [Violation(1, "m")]}

    def test_always_installed(self) -> None:
        with patch("shutil.which", return_value=None):
            assert registry.create("findbugs").installed()
