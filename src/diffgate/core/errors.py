"""diffgate error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Diff
- 4xxx: Report (coverage / quality report input)
- 5xxx: Driver (live linter invocation)
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_MISSING_SECTION = 2003
    CONFIG_FILE_NOT_FOUND = 2004
    CONFIG_UNSUPPORTED_FILE = 2005

    # Diff (3xxx)
    DIFF_PARSE_ERROR = 3001

    # Report (4xxx)
    REPORT_PARSE_ERROR = 4001
    REPORT_UNSUPPORTED_FORMAT = 4002
    REPORT_NOT_FOUND = 4003

    # Driver (5xxx)
    DRIVER_NOT_INSTALLED = 5001
    DRIVER_UNKNOWN = 5002
    DRIVER_UNSUPPORTED_ARGS = 5003


@dataclass(frozen=True, slots=True)
class DiffGateError(Exception):
    """Base error with structured context for CLI and JSON output."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'DIFF_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(DiffGateError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def missing_section(cls, path: str, section: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_MISSING_SECTION,
            message=f"No '{section}' configuration available in {path}",
            details={"path": path, "section": section},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )

    @classmethod
    def unsupported_file(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_UNSUPPORTED_FILE,
            message=f"No config parser could handle {path}",
            details={"path": path},
        )


class DiffParseError(DiffGateError):
    """Malformed unified diff. Fatal: statistics would be meaningless."""

    @classmethod
    def unrecognized_header(cls, line: str) -> "DiffParseError":
        return cls(
            code=ErrorCode.DIFF_PARSE_ERROR,
            message=f"Do not recognize format of source in line '{line}'",
            details={"line": line},
        )

    @classmethod
    def bad_source_path(cls, line: str) -> "DiffParseError":
        return cls(
            code=ErrorCode.DIFF_PARSE_ERROR,
            message=f"Could not parse source path in line '{line}'",
            details={"line": line},
        )

    @classmethod
    def orphan_hunk(cls, line: str) -> "DiffParseError":
        return cls(
            code=ErrorCode.DIFF_PARSE_ERROR,
            message=f"Hunk has no source file: '{line}'",
            details={"line": line},
        )

    @classmethod
    def bad_hunk(cls, line: str) -> "DiffParseError":
        return cls(
            code=ErrorCode.DIFF_PARSE_ERROR,
            message=f"Could not parse hunk in line '{line}'",
            details={"line": line},
        )


class ReportParseError(DiffGateError):
    """A single coverage/quality report could not be read.

    Recovered by the extractors: the offending source is skipped.
    """

    @classmethod
    def invalid_xml(cls, source: str, reason: str) -> "ReportParseError":
        return cls(
            code=ErrorCode.REPORT_PARSE_ERROR,
            message=f"Invalid XML in {source}: {reason}",
            details={"source": source, "reason": reason},
        )

    @classmethod
    def not_found(cls, path: str, reason: str) -> "ReportParseError":
        return cls(
            code=ErrorCode.REPORT_NOT_FOUND,
            message=f"Could not read report {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class UnsupportedFormatError(DiffGateError):
    """Coverage input is neither a known XML format nor LCOV."""

    @classmethod
    def unknown(cls, path: str) -> "UnsupportedFormatError":
        return cls(
            code=ErrorCode.REPORT_UNSUPPORTED_FORMAT,
            message=f"Could not detect coverage format for: {path}. "
            "Supported formats: cobertura, clover, jacoco (XML) and lcov",
            details={"path": path},
        )

    @classmethod
    def mixed(cls) -> "UnsupportedFormatError":
        return cls(
            code=ErrorCode.REPORT_UNSUPPORTED_FORMAT,
            message="Mixing LCOV and XML reports is not supported yet",
        )


class DriverError(DiffGateError):
    """Quality driver selection or invocation errors."""

    @classmethod
    def unknown(cls, name: str, available: list[str]) -> "DriverError":
        return cls(
            code=ErrorCode.DRIVER_UNKNOWN,
            message=f"Quality driver '{name}' not supported. Available: {', '.join(available)}",
            details={"driver": name},
        )

    @classmethod
    def unsupported_args(cls, name: str, args: list[str]) -> "DriverError":
        return cls(
            code=ErrorCode.DRIVER_UNSUPPORTED_ARGS,
            message=f"Unsupported argument(s) for {name}: {', '.join(args)}",
            details={"driver": name, "args": args},
        )


class DriverNotInstalledError(DriverError):
    """Live linting requested but the linter executable is missing."""

    @classmethod
    def for_driver(cls, name: str) -> "DriverNotInstalledError":
        return cls(
            code=ErrorCode.DRIVER_NOT_INSTALLED,
            message=f"{name} is not installed",
            details={"driver": name},
        )

