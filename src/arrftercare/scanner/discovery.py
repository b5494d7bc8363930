"""Media file discovery."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from arrftercare.exceptions import InvalidTargetError

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".mp4", ".mkv", ".avi")


def discover_media_files(
    directory: Path,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
) -> list[Path]:
    """Find media files below a directory.

    Matching is case-insensitive on the extension. Only regular files are
    returned, sorted so that repeated runs process files in the same order.

    Args:
        directory: Directory to walk recursively.
        extensions: Extensions to match, with leading dot.

    Returns:
        Sorted list of media file paths.

    Raises:
        InvalidTargetError: If directory is not an existing directory.
    """
    if not directory.is_dir():
        raise InvalidTargetError(
            f"Provided path is not a directory: {directory}", path=directory
        )

    wanted = {ext.casefold() for ext in extensions}
    files = [
        path
        for path in directory.rglob("*")
        if path.suffix.casefold() in wanted and path.is_file()
    ]

    logger.debug(
        "Discovered %d media file(s) in %s",
        len(files),
        directory,
        extra={"extensions": sorted(wanted)},
    )
    return sorted(files)
