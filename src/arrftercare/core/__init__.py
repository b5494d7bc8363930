"""Core utilities shared across arrftercare modules."""

from arrftercare.core.formatting import format_bitrate, format_file_size
from arrftercare.core.subprocess_utils import CommandResult, run_command

__all__ = [
    "CommandResult",
    "format_bitrate",
    "format_file_size",
    "run_command",
]
