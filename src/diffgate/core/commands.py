"""Synchronous subprocess invocation for git and linters."""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path

import structlog

log = structlog.get_logger()


class CommandError(Exception):
    """A command exited with an unexpected status or could not be started."""

    def __init__(
        self, message: str, *, command: Sequence[str], exit_code: int | None = None
    ) -> None:
        super().__init__(message)
        self.command = list(command)
        self.exit_code = exit_code


def execute(
    command: Sequence[str],
    exit_codes: Sequence[int] | None = (0,),
    cwd: str | Path | None = None,
) -> tuple[str, str]:
    """Run a command and return (stdout, stderr).

    Args:
        command: Tokens of the command; the first is the executable.
        exit_codes: Exit statuses that do not indicate failure. None accepts all.
        cwd: Working directory; the current one when None.

    Raises:
        CommandError: The executable is missing or exited outside exit_codes.
    """
    if not command:
        raise ValueError("Command cannot be empty")

    try:
        result = subprocess.run(
            list(command),
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError as e:
        log.error("command_not_found", command=" ".join(command))
        raise CommandError(f"Command not found: {command[0]}", command=command) from e

    log.debug("command_run", command=" ".join(command), exit_code=result.returncode)

    if exit_codes is not None and result.returncode not in exit_codes:
        raise CommandError(
            result.stderr or f"Command failed with exit code {result.returncode}",
            command=command,
            exit_code=result.returncode,
        )
    return result.stdout or "", result.stderr or ""
