"""Execution of the re-encode and the file operations around it."""

from arrftercare.executor.backup import (
    BACKUP_SUFFIX,
    discard_staged_output,
    get_backup_path,
    retire_original,
)
from arrftercare.executor.interface import (
    REQUIRED_TOOLS,
    Toolchain,
    ToolNotFoundError,
    find_tool,
    resolve_toolchain,
)

__all__ = [
    "BACKUP_SUFFIX",
    "REQUIRED_TOOLS",
    "ToolNotFoundError",
    "Toolchain",
    "discard_staged_output",
    "find_tool",
    "get_backup_path",
    "resolve_toolchain",
    "retire_original",
]
