"""User-facing console output for CLI operations.

Usage::

    from diffgate.core.console import status

    status("Auto-detected coverage reports: coverage.xml")
    status("Coverage (80%) is below the threshold (90%)", style="error")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

# Reports go to stdout, status messages to stderr
_console = Console(stderr=True)
_report_console = Console(highlight=False, soft_wrap=True)

# Style prefixes
_STYLES = {
    "success": "[green]✓[/green] ",
    "error": "[red]✗[/red] ",
    "warning": "[yellow]![/yellow] ",
    "info": "  ",
    "none": "",
}


def _get_logger() -> BoundLogger:
    """Get logger lazily to respect runtime config."""
    from diffgate.core.logging import get_logger

    return get_logger("console")


def get_report_console() -> Console:
    """Get the stdout console used for rendered reports."""
    return _report_console


def status(message: str, *, style: str = "info", indent: int = 0) -> None:
    """Print a styled status message to stderr."""
    prefix = _STYLES.get(style, "")
    padding = " " * indent
    _console.print(f"{padding}{prefix}{message}", highlight=False, markup=True)

    _get_logger().debug("status", message=message, style=style)
