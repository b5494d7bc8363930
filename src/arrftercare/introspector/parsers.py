"""Pure parsing functions for ffprobe JSON output.

These functions transform ffprobe JSON data into MediaInfo objects.
All functions are pure (no I/O, no side effects) for easy testing.
"""

import logging
from pathlib import Path

from arrftercare.introspector.interface import MediaInfo, StreamInfo

logger = logging.getLogger(__name__)


def parse_duration(value: str | float | None) -> float | None:
    """Parse duration string from ffprobe into seconds.

    Args:
        value: Duration string from ffprobe (e.g., "3600.000") or None.

    Returns:
        Duration in seconds as float, or None if parsing fails.
    """
    if value is None:
        return None
    try:
        return float(value)
    except (ValueError, TypeError):
        return None


def parse_bit_rate(value: str | int | None) -> int | None:
    """Parse a declared bitrate.

    Only plain decimal integers are accepted. ffprobe reports "N/A" or
    omits the field for many Matroska files, which yields None.
    """
    if value is None:
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    text = str(value).strip()
    if not text.isdecimal():
        return None
    return int(text)


def _positive_int(value: object, field_name: str, file_path: str) -> int | None:
    if value is None:
        return None
    if not isinstance(value, int) or value < 0:
        logger.warning("Invalid %s %r in %s", field_name, value, file_path)
        return None
    return value


def parse_stream(stream: dict, file_path: str) -> StreamInfo:
    """Parse a single ffprobe stream dict into a StreamInfo."""
    disposition = stream.get("disposition", {})
    return StreamInfo(
        index=stream.get("index", 0),
        codec_type=stream.get("codec_type", ""),
        codec_name=stream.get("codec_name"),
        width=_positive_int(stream.get("width"), "width", file_path),
        height=_positive_int(stream.get("height"), "height", file_path),
        bit_rate=parse_bit_rate(stream.get("bit_rate")),
        is_attached_pic=disposition.get("attached_pic", 0) == 1,
    )


def parse_ffprobe_output(path: Path, data: dict) -> MediaInfo:
    """Parse ffprobe JSON output into MediaInfo.

    Args:
        path: Path to the media file.
        data: Parsed ffprobe JSON output.

    Returns:
        MediaInfo with streams ordered by stream index.
    """
    format_info = data.get("format", {})

    streams: list[StreamInfo] = []
    seen_indices: set[int] = set()
    for raw in data.get("streams", []):
        stream = parse_stream(raw, str(path))
        if stream.index in seen_indices:
            logger.warning(
                "Duplicate stream index %d in %s, skipping", stream.index, path
            )
            continue
        seen_indices.add(stream.index)
        streams.append(stream)

    return MediaInfo(
        path=path,
        format_name=format_info.get("format_name"),
        duration_seconds=parse_duration(format_info.get("duration")),
        streams=tuple(sorted(streams, key=lambda s: s.index)),
    )
