"""Tests for the driver registry."""

from __future__ import annotations

import pytest

from diffgate.core.errors import DriverError, ErrorCode
from diffgate.quality import registry
from diffgate.quality.drivers import EslintDriver
from diffgate.quality.registry import DriverRegistry


class TestBuiltinDrivers:
    """The drivers registered on import."""

    def test_names(self) -> None:
        assert registry.names() == [
            "checkstyle",
            "cppcheck",
            "eslint",
            "findbugs",
            "flake8",
            "mypy",
            "pylint",
            "ruff",
            "shellcheck",
        ]

    def test_cppcheck_reads_stderr(self) -> None:
        assert registry.create("cppcheck").output_stderr

    def test_unknown_driver(self) -> None:
        with pytest.raises(DriverError) as exc_info:
            registry.create("jslint")

        assert exc_info.value.code == ErrorCode.DRIVER_UNKNOWN
        assert "eslint" in exc_info.value.message


class TestDriverRegistry:
    """Registration and copying."""

    def test_create_returns_independent_copy(self) -> None:
        reg = DriverRegistry()
        reg.register(EslintDriver())

        configured = reg.create("eslint")
        configured.add_driver_args(report_root_path="/ci")

        fresh = reg.create("eslint")
        assert isinstance(configured, EslintDriver)
        assert isinstance(fresh, EslintDriver)
        assert configured.report_root_path == "/ci"
        assert fresh.report_root_path is None

    def test_register_replaces_same_name(self) -> None:
        reg = DriverRegistry()
        reg.register(EslintDriver())
        reg.register(EslintDriver())

        assert reg.names() == ["eslint"]
