"""Diagnostic logging for diffgate runs.

diffgate writes two kinds of output. Reports (console, JSON, Markdown) go
to stdout or to report files and are never routed through here. Everything
else is diagnostics: which diff sources were read, which reports were
parsed, which linter commands ran. Those events are structlog events,
rendered by stdlib handlers so each output can have its own level and
format:

    [tool.diff_cover.logging]
    level = "DEBUG"
    outputs = [
        { destination = "stderr", level = "WARNING" },
        { destination = "/tmp/diffgate.log", format = "json" },
    ]

The first file output is remembered so a failing run can point at it.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

import structlog

if TYPE_CHECKING:
    from diffgate.config.models import LoggingConfig

# First file destination of the active configuration
_log_file_path: Path | None = None


def get_log_file_path() -> Path | None:
    """File the current run logs to, None when logging only to streams."""
    return _log_file_path


def _set_log_file_path(path: Path | None) -> None:
    global _log_file_path
    _log_file_path = path


_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _stream(destination: str) -> TextIO | None:
    """Current stderr or stdout, looked up at configure time."""
    if destination == "stderr":
        return sys.stderr
    if destination == "stdout":
        return sys.stdout
    return None


def configure_logging(
    *,
    config: LoggingConfig | None = None,
    json_format: bool = False,
    level: str = "INFO",
) -> None:
    """Route diagnostics to the configured outputs.

    The CLI calls this once per command: with the logging section of the
    loaded config, or with just a level for --verbose and --quiet.

    Args:
        config: Outputs and levels; overrides json_format and level.
        json_format: Single stderr output rendered as JSON lines.
        level: Level of the single stderr output.
    """
    from diffgate.config.models import LoggingConfig, LogOutputConfig

    if config is None:
        config = LoggingConfig(
            level=level,  # type: ignore[arg-type]
            outputs=[LogOutputConfig(format="json" if json_format else "console")],
        )

    default_level = _LEVEL_MAP.get(config.level.upper(), logging.INFO)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
    ]

    _configure_stdlib_logging(config, shared_processors, default_level)


def _create_handler(destination: str) -> logging.Handler:
    """Stream handler for stderr/stdout, appending file handler otherwise."""
    stream = _stream(destination)
    if stream is not None:
        return logging.StreamHandler(stream)
    path = Path(destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, mode="a")


def _configure_stdlib_logging(
    config: LoggingConfig,
    shared_processors: list[structlog.types.Processor],
    default_level: int,
) -> None:
    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(default_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Reconfigured on every CLI invocation, including within one test process
        cache_logger_on_first_use=False,
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(default_level)

    _set_log_file_path(None)

    for output in config.outputs:
        output_level = _LEVEL_MAP.get((output.level or config.level).upper(), default_level)
        stream = _stream(output.destination)

        if stream is None and _log_file_path is None:
            _set_log_file_path(Path(output.destination))

        if output.format == "json":
            renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
        else:
            renderer = structlog.dev.ConsoleRenderer(
                colors=stream is not None and stream.isatty(),
                pad_event_to=0,
                pad_level=False,
            )

        handler = _create_handler(output.destination)
        handler.setLevel(output_level)
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=renderer,
                foreign_pre_chain=shared_processors,
            )
        )
        root_logger.addHandler(handler)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Logger bound to a component name, e.g. "console"."""
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(logger=name)
    return logger  # type: ignore[no-any-return]
