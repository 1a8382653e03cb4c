"""Core module exports."""

from diffgate.core.errors import (
    ConfigError,
    DiffGateError,
    DiffParseError,
    DriverError,
    DriverNotInstalledError,
    ErrorCode,
    ReportParseError,
    UnsupportedFormatError,
)
from diffgate.core.logging import configure_logging, get_logger

__all__ = [
    # Errors
    "ConfigError",
    "DiffGateError",
    "DiffParseError",
    "DriverError",
    "DriverNotInstalledError",
    "ErrorCode",
    "ReportParseError",
    "UnsupportedFormatError",
    # Logging
    "configure_logging",
    "get_logger",
]
