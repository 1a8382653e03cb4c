"""Tests for structured logging."""

import json
from pathlib import Path

import pytest

from diffgate.config.models import LoggingConfig, LogOutputConfig
from diffgate.core.logging import configure_logging, get_log_file_path, get_logger


class TestConfigureLogging:
    """configure_logging output routing tests."""

    def test_given_config_object_when_configure_then_takes_precedence(self, tmp_path: Path) -> None:
        """LoggingConfig object takes precedence over simple params."""
        # Given
        log_file = tmp_path / "test.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[LogOutputConfig(format="json", destination=str(log_file))],
        )

        # When
        configure_logging(config=config, json_format=False, level="ERROR")
        get_logger().debug("diff_source_parsed", files=2)

        # Then
        data = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert data["event"] == "diff_source_parsed"
        assert data["files"] == 2
        assert data["level"] == "debug"
        assert "timestamp" in data

    def test_given_per_output_levels_when_logging_then_filtered(self, tmp_path: Path) -> None:
        """Each output applies its own level."""
        # Given
        debug_file = tmp_path / "debug.log"
        warn_file = tmp_path / "warn.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[
                LogOutputConfig(format="json", destination=str(warn_file), level="WARNING"),
                LogOutputConfig(format="json", destination=str(debug_file)),
            ],
        )

        # When
        configure_logging(config=config)
        logger = get_logger("test")
        logger.debug("debug only")
        logger.warning("warned")

        # Then
        assert "debug only" in debug_file.read_text()
        assert "warned" in debug_file.read_text()
        assert "debug only" not in warn_file.read_text()
        assert "warned" in warn_file.read_text()

    def test_log_file_path_tracks_first_file_output(self, tmp_path: Path) -> None:
        log_file = tmp_path / "diffgate.log"
        configure_logging(
            config=LoggingConfig(outputs=[LogOutputConfig(destination=str(log_file))])
        )
        assert get_log_file_path() == log_file

    def test_console_only_has_no_log_file(self) -> None:
        configure_logging(level="INFO")
        assert get_log_file_path() is None

    def test_stream_outputs_use_current_streams(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Diagnostics sent to stdout and stderr land on the streams active at configure time."""
        configure_logging(
            config=LoggingConfig(
                outputs=[
                    LogOutputConfig(format="json", destination="stdout", level="INFO"),
                    LogOutputConfig(destination="stderr", level="ERROR"),
                ],
            )
        )
        logger = get_logger()
        logger.warning("reports_discovered", count=2)
        logger.error("report_unreadable")

        captured = capsys.readouterr()
        assert json.loads(captured.out.splitlines()[0])["event"] == "reports_discovered"
        assert "report_unreadable" in captured.err
        assert "reports_discovered" not in captured.err
