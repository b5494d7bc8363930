"""File context for structured logging.

Uses contextvars so that every log record emitted while a media file is
being processed carries that file's path, without threading the path
through every function call.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_file_path: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "file_path", default=None
)


@contextmanager
def file_context(file_path: Path | str) -> Generator[None, None, None]:
    """Context manager that tags log records with the file being processed.

    Args:
        file_path: Path to the media file being processed.

    Yields:
        None

    Example:
        with file_context("/movies/Heat (1995).mkv"):
            logger.info("Detecting crop")  # tagged [Heat (1995).mkv]
    """
    token = _file_path.set(str(file_path))
    try:
        yield
    finally:
        _file_path.reset(token)


def get_file_context() -> str | None:
    """Return the path of the file currently being processed, if any."""
    return _file_path.get()


class FileContextFilter(logging.Filter):
    """Logging filter that injects the current file into log records.

    Adds a file_path attribute for JSON output and a compact file_tag
    like "[Heat (1995).mkv] " for the text format.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Inject file context into log record.

        Args:
            record: The log record to process.

        Returns:
            Always True (does not filter, only enriches).
        """
        file_path = get_file_context()
        record.file_path = file_path
        record.file_tag = f"[{Path(file_path).name}] " if file_path else ""
        return True
