"""Media introspection types.

StreamInfo and MediaInfo hold only what the post-processing pipeline reads
from a probe: stream layout, codecs, frame height, declared bitrates,
container duration.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from arrftercare.exceptions import ArrftercareError


class MediaIntrospectionError(ArrftercareError):
    """Raised when media introspection fails."""


@dataclass(frozen=True)
class StreamInfo:
    """A single stream within a media file."""

    index: int
    codec_type: str  # "video", "audio", "subtitle", "attachment", "data"
    codec_name: str | None = None
    width: int | None = None
    height: int | None = None
    bit_rate: int | None = None
    """Declared bitrate in bits/second, None if absent or not an integer."""

    is_attached_pic: bool = False
    """Cover art stored as a video stream (not a real video track)."""


@dataclass(frozen=True)
class MediaInfo:
    """Result of probing a media file."""

    path: Path
    format_name: str | None
    duration_seconds: float | None
    streams: tuple[StreamInfo, ...] = field(default_factory=tuple)

    @property
    def primary_video_stream(self) -> StreamInfo | None:
        """Return the first real video stream, skipping cover art."""
        return next(
            (
                s
                for s in self.streams
                if s.codec_type == "video" and not s.is_attached_pic
            ),
            None,
        )

    @property
    def audio_streams(self) -> list[StreamInfo]:
        """Return audio streams in probe order (ascending stream index)."""
        return sorted(
            (s for s in self.streams if s.codec_type == "audio"),
            key=lambda s: s.index,
        )
