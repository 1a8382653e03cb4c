"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. CLI options (only those actually given)
2. Environment variables (DIFFGATE__<KEY>)
3. Config file ([tool.diff_cover] / [tool.diff_quality] in TOML, or the
   diff_cover: / diff_quality: section of a YAML file)
4. Built-in defaults (this file)

Examples:
    DIFFGATE__COMPARE_BRANCH=origin/develop
    DIFFGATE__FAIL_UNDER=80
    DIFFGATE__EXCLUDE='["*/migrations/*"]'
"""

from enum import Enum
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Tool(Enum):
    """Which gate a configuration belongs to."""

    DIFF_COVER = "diff_cover"
    DIFF_QUALITY = "diff_quality"


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. The CLI raises it to DEBUG with --verbose.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class DiffOptions(BaseModel):
    """Options shared by both gates: which diff to look at and how to report it."""

    compare_branch: str = Field(
        default="origin/main",
        description="Branch the committed diff is computed against.",
    )
    diff_range_notation: Literal["...", ".."] = Field(
        default="...",
        description="'...' compares against the merge base, '..' against the branch tip.",
    )
    ignore_staged: bool = False
    ignore_unstaged: bool = False
    include_untracked: bool = False
    ignore_whitespace: bool = Field(
        default=False,
        description="Pass --ignore-all-space and --ignore-blank-lines to git diff.",
    )
    diff_file: str | None = Field(
        default=None,
        description="Read the committed diff from this file instead of running git.",
    )
    exclude: list[str] | None = None
    include: list[str] | None = None
    fail_under: float = Field(
        default=0.0,
        description="Exit non-zero when the total percentage is below this value.",
    )
    total_percent_float: bool = Field(
        default=False,
        description="Report the total as a float rounded to two decimals instead of truncating.",
    )
    quiet: bool = False
    json_report: str | None = None
    markdown_report: str | None = None
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("exclude", "include", mode="before")
    @classmethod
    def normalize_patterns(cls, v: object) -> object:
        if isinstance(v, str):
            return [v]
        return v

    @field_validator("fail_under")
    @classmethod
    def validate_fail_under(cls, v: float) -> float:
        if not (0 <= v <= 100):
            raise ValueError(f"fail_under must be 0-100, got {v}")
        return v


class CoverConfig(DiffOptions):
    """diff-cover configuration."""

    coverage_files: list[str] = Field(default_factory=list)
    src_roots: list[str] = Field(
        default_factory=lambda: ["src/main/java", "src/test/java"],
        description="Source directories JaCoCo package paths are resolved against.",
    )
    expand_coverage_report: bool = Field(
        default=False,
        description="Fill unreported lines with the hit count of the previous reported line.",
    )
    show_uncovered: bool = False


class QualityConfig(DiffOptions):
    """diff-quality configuration."""

    violations: str = Field(
        default="eslint",
        description="Quality driver name (see `diffgate quality --help`).",
    )
    reports: list[str] = Field(
        default_factory=list,
        description="Pre-generated linter reports. Empty means run the linter per file.",
    )
    options: str | None = Field(
        default=None,
        description="Extra arguments appended to the linter command.",
    )
    report_root_path: str | None = None
