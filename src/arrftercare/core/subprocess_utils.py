"""Subprocess utilities for external tool invocation.

This module provides the single subprocess wrapper used for every ffmpeg
and ffprobe call, so that argument conversion, text decoding, logging and
the shape of the returned result are the same everywhere. Callers inspect
the returned CommandResult; a non-zero exit is not raised.
"""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - subprocess is required for FFmpeg invocation
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one external command."""

    args: tuple[str, ...]
    """Command and arguments exactly as executed."""

    returncode: int
    """Process exit status."""

    stdout: str = ""
    """Captured standard output (empty if not captured)."""

    stderr: str = ""
    """Captured standard error (empty if not captured)."""

    @property
    def succeeded(self) -> bool:
        """True if the command exited with status 0."""
        return self.returncode == 0

    @property
    def command_name(self) -> str:
        """Base name of the executable, for log messages."""
        return Path(self.args[0]).name if self.args else "unknown"


def run_command(
    args: list[str | Path],
    timeout: float | None = None,
    capture_output: bool = True,
    errors: str = "replace",
    **kwargs: Any,
) -> CommandResult:
    """Run external command with standard error handling.

    This function wraps subprocess.run with arrftercare's standard patterns:
    - Explicit text decoding with error replacement
    - Optional timeout (default None: wait for the tool indefinitely)
    - Consistent return type

    Args:
        args: Command and arguments. Path objects are converted to strings.
        timeout: Timeout in seconds, or None to wait indefinitely.
        capture_output: Capture stdout/stderr (default True).
        errors: Error handling mode for text decoding (default "replace").
        **kwargs: Additional subprocess.run arguments.

    Returns:
        CommandResult with the exit status and captured output.

    Raises:
        subprocess.TimeoutExpired: If a timeout was given and expired. The
            child process is killed by subprocess.run before this is raised.
        OSError: If the executable cannot be started.
    """
    str_args = [str(arg) for arg in args]
    command_name = Path(str_args[0]).name if str_args else "unknown"

    logger.debug(
        "Executing command: %s",
        " ".join(str_args),
        extra={"command": command_name, "arg_count": len(str_args)},
    )

    start_time = time.monotonic()

    try:
        completed = subprocess.run(  # nosec B603 - caller builds args as a list
            str_args,
            capture_output=capture_output,
            text=True,
            errors=errors,
            timeout=timeout,
            **kwargs,
        )
    except subprocess.TimeoutExpired:
        elapsed = time.monotonic() - start_time
        logger.warning(
            "Command timed out after %ss: %s",
            timeout,
            " ".join(str_args[:3]) + ("..." if len(str_args) > 3 else ""),
            extra={
                "command": command_name,
                "timeout_seconds": timeout,
                "elapsed_seconds": round(elapsed, 3),
            },
        )
        raise

    elapsed = time.monotonic() - start_time
    logger.debug(
        "Command completed",
        extra={
            "command": command_name,
            "elapsed_seconds": round(elapsed, 3),
            "returncode": completed.returncode,
        },
    )

    return CommandResult(
        args=tuple(str_args),
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )
