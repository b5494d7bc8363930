"""Processed-marker naming rules.

A processed file is written next to its source as "<stem> [PPd]<suffix>".
The marker doubles as the idempotence guard: any file whose name already
carries it is left alone.
"""

from pathlib import Path

PROCESSED_MARKER = "[PPd]"

# The guard matches the marker only directly before an extension, so a
# title that merely contains "[PPd]" mid-name is still processed.
_MARKER_WITH_DOT = f"{PROCESSED_MARKER}."


def is_processed(path: Path) -> bool:
    """Return True if the file name already carries the processed marker."""
    return _MARKER_WITH_DOT in path.name


def processed_output_path(path: Path) -> Path:
    """Return the final output path for a source file."""
    return path.with_name(f"{path.stem} {PROCESSED_MARKER}{path.suffix}")


def staging_output_path(path: Path) -> Path:
    """Return the hidden path the encoder writes to before commit.

    The staging name keeps the real extension (ffmpeg picks the container
    from it) and carries the marker, so a scan running at the same time
    never picks up a half-written file.
    """
    return path.with_name(f".{path.stem} {PROCESSED_MARKER}{path.suffix}")
