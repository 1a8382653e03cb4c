"""Tests for config/models.py validators."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from diffgate.config.models import CoverConfig, DiffOptions, LogOutputConfig, QualityConfig


class TestDiffOptions:
    """Shared option validation."""

    def test_single_pattern_becomes_list(self) -> None:
        options = DiffOptions(exclude="*.pyc", include=["src/*"])
        assert options.exclude == ["*.pyc"]
        assert options.include == ["src/*"]

    @pytest.mark.parametrize("value", [-1, 100.5])
    def test_fail_under_out_of_range(self, value: float) -> None:
        with pytest.raises(ValidationError):
            DiffOptions(fail_under=value)

    def test_fail_under_bounds_accepted(self) -> None:
        assert DiffOptions(fail_under=0).fail_under == 0
        assert DiffOptions(fail_under=100).fail_under == 100


class TestToolConfigs:
    """Tool specific defaults."""

    def test_cover_defaults(self) -> None:
        config = CoverConfig()
        assert config.coverage_files == []
        assert config.expand_coverage_report is False
        assert config.show_uncovered is False

    def test_quality_defaults(self) -> None:
        config = QualityConfig()
        assert config.violations == "eslint"
        assert config.reports == []
        assert config.options is None


class TestLogOutputConfig:
    """Log destination validation."""

    def test_relative_file_destination_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LogOutputConfig(destination="logs/diffgate.log")

    def test_absolute_file_destination_accepted(self, tmp_path: Path) -> None:
        destination = str(tmp_path / "diffgate.log")
        assert LogOutputConfig(destination=destination).destination == destination
