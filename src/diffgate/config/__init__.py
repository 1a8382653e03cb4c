"""Config module exports."""

from diffgate.config.loader import load_config, load_config_file
from diffgate.config.models import (
    CoverConfig,
    DiffOptions,
    LoggingConfig,
    LogOutputConfig,
    QualityConfig,
    Tool,
)

__all__ = [
    "load_config",
    "load_config_file",
    "CoverConfig",
    "DiffOptions",
    "LoggingConfig",
    "LogOutputConfig",
    "QualityConfig",
    "Tool",
]
