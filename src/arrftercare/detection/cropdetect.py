"""Crop detection with ffmpeg's cropdetect filter.

ffmpeg does the actual frame analysis; this module builds the sampling
command and reads the geometry back out of the filter's diagnostic lines,
which look like:

    [Parsed_cropdetect_1 @ 0x...] x1:0 x2:1919 y1:140 y2:939 w:1920 h:800
    x:0 y:140 pts:... t:... limit:24 crop=1920:800:0:140

The last reported crop wins: cropdetect refines its estimate as it sees
more frames. Output without any crop token means "don't crop", never an
error, because a wrong crop would damage the encode.
"""

from __future__ import annotations

import logging
import re
import subprocess  # nosec B404 - only for TimeoutExpired
from dataclasses import dataclass
from pathlib import Path

from arrftercare.core.subprocess_utils import run_command
from arrftercare.exceptions import ArrftercareError

logger = logging.getLogger(__name__)

_CROP_PATTERN = re.compile(r"crop=(\d+):(\d+):(\d+):(\d+)")


class CropDetectionError(ArrftercareError):
    """Raised when the crop detection pass itself fails."""


@dataclass(frozen=True)
class CropGeometry:
    """Region of the frame to keep, in pixels."""

    width: int
    height: int
    x: int
    y: int

    @property
    def filter_string(self) -> str:
        """ffmpeg video filter applying this crop."""
        return f"crop={self.width}:{self.height}:{self.x}:{self.y}"


def build_cropdetect_command(
    ffmpeg: Path,
    input_path: Path,
    start_seconds: int = 120,
    frame_interval: int = 100,
) -> list[str | Path]:
    """Build the sampling command.

    Seeks past the opening, analyzes every Nth frame and discards the
    output; audio is not decoded.
    """
    return [
        ffmpeg,
        "-hide_banner",
        "-nostdin",
        "-ss",
        str(start_seconds),
        "-i",
        input_path,
        "-vf",
        f"select=not(mod(n\\,{frame_interval})),cropdetect",
        "-an",
        "-f",
        "null",
        "-",
    ]


def parse_crop(output: str) -> CropGeometry | None:
    """Return the last crop reported in cropdetect output, or None."""
    matches = _CROP_PATTERN.findall(output)
    if not matches:
        return None
    width, height, x, y = (int(value) for value in matches[-1])
    return CropGeometry(width=width, height=height, x=x, y=y)


def detect_crop(
    ffmpeg: Path,
    input_path: Path,
    start_seconds: int = 120,
    frame_interval: int = 100,
    timeout: float | None = None,
) -> CropGeometry | None:
    """Run crop detection on a file.

    Args:
        ffmpeg: Resolved path to ffmpeg.
        input_path: Media file to analyze.
        start_seconds: Seek offset before sampling.
        frame_interval: Analyze every Nth frame.
        timeout: Seconds before the pass is abandoned (None = no limit).

    Returns:
        Detected geometry, or None if no crop could be determined.

    Raises:
        CropDetectionError: If ffmpeg cannot be run or exits non-zero.
    """
    logger.info("Detecting crop value from: %s", input_path)
    cmd = build_cropdetect_command(ffmpeg, input_path, start_seconds, frame_interval)

    try:
        result = run_command(cmd, timeout=timeout)
    except (OSError, subprocess.TimeoutExpired) as e:
        raise CropDetectionError(f"Failed to run crop detection: {e}") from e

    if not result.succeeded:
        tail = result.stderr.strip().splitlines()[-1:] or [""]
        raise CropDetectionError(
            f"Failed to run crop detection (exit {result.returncode}): {tail[0]}"
        )

    geometry = parse_crop(result.stderr)
    if geometry is None:
        logger.warning("Failed to detect crop value. Defaulting to no crop.")
        return None

    logger.info("Crop detected: %s", geometry.filter_string)
    return geometry


def removed_rows(geometry: CropGeometry, original_height: int) -> int:
    """Rows between the bottom of the kept region and the frame bottom."""
    return original_height - geometry.height - geometry.y


def is_significant(
    geometry: CropGeometry, original_height: int, threshold: int = 20
) -> bool:
    """True if the crop removes at least threshold rows."""
    return removed_rows(geometry, original_height) >= threshold
