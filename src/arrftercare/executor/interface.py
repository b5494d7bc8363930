"""External tool resolution.

ffmpeg and ffprobe must both be available before any file is touched.
Configured paths (config file, environment, CLI) take precedence over
a PATH lookup.
"""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path

from arrftercare.config.models import ToolPathsConfig
from arrftercare.exceptions import ArrftercareError

logger = logging.getLogger(__name__)

REQUIRED_TOOLS = ("ffmpeg", "ffprobe")


class ToolNotFoundError(ArrftercareError):
    """Raised when a required external tool is not available.

    Attributes:
        missing: Names of the tools that could not be resolved.
    """

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(
            f"Missing required dependency: {', '.join(missing)}. "
            "Install ffmpeg with your system package manager, or set "
            "ARRFTERCARE_FFMPEG_PATH / ARRFTERCARE_FFPROBE_PATH."
        )


@dataclass(frozen=True)
class Toolchain:
    """Resolved paths of the external executables."""

    ffmpeg: Path
    ffprobe: Path


def find_tool(tool_name: str, configured_path: Path | None = None) -> Path | None:
    """Locate an executable.

    Args:
        tool_name: Executable name to look up in PATH.
        configured_path: Explicitly configured location, checked first.

    Returns:
        Path to the executable, or None if it is not available.
    """
    if configured_path is not None:
        candidate = Path(configured_path).expanduser()
        if candidate.is_file() and os.access(candidate, os.X_OK):
            return candidate
        logger.warning(
            "Configured %s path is not an executable file: %s",
            tool_name,
            candidate,
        )
        return None

    found = shutil.which(tool_name)
    return Path(found) if found else None


def resolve_toolchain(tools: ToolPathsConfig) -> Toolchain:
    """Resolve ffmpeg and ffprobe, failing if either is unavailable.

    Args:
        tools: Configured tool paths.

    Returns:
        Toolchain with both executables resolved.

    Raises:
        ToolNotFoundError: Listing every tool that could not be found.
    """
    resolved: dict[str, Path] = {}
    missing: list[str] = []
    for name in REQUIRED_TOOLS:
        path = find_tool(name, getattr(tools, name))
        if path is None:
            missing.append(name)
        else:
            resolved[name] = path

    if missing:
        raise ToolNotFoundError(missing)

    logger.debug(
        "Resolved toolchain",
        extra={key: str(value) for key, value in resolved.items()},
    )
    return Toolchain(ffmpeg=resolved["ffmpeg"], ffprobe=resolved["ffprobe"])
