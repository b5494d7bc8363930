"""Video bitrate estimation.

The estimate caps the re-encode (-maxrate, with twice that as -bufsize) so
that constant-quality encoding cannot produce a file much larger than the
source.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from arrftercare.core.formatting import format_bitrate
from arrftercare.exceptions import ArrftercareError
from arrftercare.introspector.interface import MediaInfo

logger = logging.getLogger(__name__)


class BitrateEstimationError(ArrftercareError):
    """Raised when no bitrate can be read or derived."""


@dataclass(frozen=True)
class BitrateEstimate:
    """Video bitrate ceiling for the encode."""

    bits_per_second: int
    estimated: bool
    """True if derived from file size and duration rather than declared."""

    @property
    def bufsize(self) -> int:
        """Rate-control buffer size, twice the ceiling."""
        return self.bits_per_second * 2


def estimate_bitrate(media_info: MediaInfo, size_bytes: int) -> BitrateEstimate:
    """Read the declared video bitrate, or derive one from size and duration.

    The derived value is size_bytes * 8 divided by the whole seconds of the
    container duration, in integer arithmetic
    (1,000,000,000 bytes over 1000.5 s gives 8,000,000 bit/s).

    Args:
        media_info: Probe result for the file.
        size_bytes: File size in bytes.

    Returns:
        BitrateEstimate.

    Raises:
        BitrateEstimationError: If no bitrate is declared and the duration
            is missing or shorter than one second.
    """
    video = media_info.primary_video_stream
    if video is not None and video.bit_rate:
        logger.info("Detected bitrate: %s", format_bitrate(video.bit_rate))
        return BitrateEstimate(bits_per_second=video.bit_rate, estimated=False)

    duration = media_info.duration_seconds
    if duration is None or not math.isfinite(duration):
        raise BitrateEstimationError(
            f"Invalid duration, cannot estimate bitrate for {media_info.path}"
        )
    whole_seconds = math.floor(duration)
    if whole_seconds <= 0:
        raise BitrateEstimationError(
            f"Invalid duration ({duration}s), cannot estimate bitrate "
            f"for {media_info.path}"
        )

    bits_per_second = size_bytes * 8 // whole_seconds
    logger.info("Estimated bitrate: %s", format_bitrate(bits_per_second))
    return BitrateEstimate(bits_per_second=bits_per_second, estimated=True)
