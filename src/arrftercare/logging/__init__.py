"""Structured logging for arrftercare.

Provides configurable logging with JSON format support and file rotation,
plus a per-file context that tags every record with the media file being
processed.
"""

from arrftercare.logging.config import configure_logging
from arrftercare.logging.context import (
    FileContextFilter,
    file_context,
    get_file_context,
)
from arrftercare.logging.handlers import JSONFormatter

__all__ = [
    "FileContextFilter",
    "JSONFormatter",
    "configure_logging",
    "file_context",
    "get_file_context",
]
