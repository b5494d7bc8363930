"""Audio planning and argument building for the re-encode.

TrueHD tracks are transcoded to AC3 at a fixed bitrate; all other tracks
are copied unchanged.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from arrftercare.introspector.interface import StreamInfo

DEFAULT_AC3_BITRATE = 640_000


class AudioAction(Enum):
    """What happens to one audio stream."""

    COPY = "copy"
    TRANSCODE_AC3 = "transcode_ac3"


@dataclass(frozen=True)
class AudioTrackPlan:
    """Plan for a single audio stream."""

    stream_index: int
    """Absolute stream index in the input (and, with -map 0, the output)."""

    action: AudioAction
    source_codec: str | None = None
    target_bitrate: int | None = None
    """Bits/second, only set for transcoded streams."""


@dataclass(frozen=True)
class AudioPlan:
    """Per-stream audio actions in stream index order."""

    tracks: tuple[AudioTrackPlan, ...] = field(default_factory=tuple)

    @property
    def has_changes(self) -> bool:
        """True if any stream is transcoded rather than copied."""
        return any(t.action is not AudioAction.COPY for t in self.tracks)

    def as_dict(self) -> dict[int, AudioAction]:
        """Map stream index to action."""
        return {t.stream_index: t.action for t in self.tracks}


def build_audio_plan(
    audio_streams: Iterable[StreamInfo],
    ac3_bitrate: int = DEFAULT_AC3_BITRATE,
) -> AudioPlan:
    """Decide the action for each audio stream.

    Args:
        audio_streams: Probed audio streams.
        ac3_bitrate: Target bitrate for TrueHD to AC3 transcodes.

    Returns:
        AudioPlan ordered by ascending stream index.
    """
    tracks = []
    for stream in sorted(audio_streams, key=lambda s: s.index):
        codec = (stream.codec_name or "").casefold()
        if codec == "truehd":
            tracks.append(
                AudioTrackPlan(
                    stream_index=stream.index,
                    action=AudioAction.TRANSCODE_AC3,
                    source_codec=stream.codec_name,
                    target_bitrate=ac3_bitrate,
                )
            )
        else:
            tracks.append(
                AudioTrackPlan(
                    stream_index=stream.index,
                    action=AudioAction.COPY,
                    source_codec=stream.codec_name,
                )
            )
    return AudioPlan(tracks=tuple(tracks))


def format_bitrate_arg(bits_per_second: int) -> str:
    """Format a bitrate for ffmpeg, using the k suffix when exact."""
    if bits_per_second % 1000 == 0:
        return f"{bits_per_second // 1000}k"
    return str(bits_per_second)


def build_audio_args(audio_plan: AudioPlan) -> list[str]:
    """Build ffmpeg arguments for audio stream handling.

    Stream specifiers use the absolute stream index. This is only correct
    together with "-map 0", which keeps output indices equal to input
    indices.

    Args:
        audio_plan: The audio handling plan.

    Returns:
        List of ffmpeg arguments for audio.
    """
    args: list[str] = []
    for track in audio_plan.tracks:
        idx = track.stream_index
        if track.action is AudioAction.TRANSCODE_AC3:
            args.extend([f"-c:{idx}", "ac3"])
            bitrate = track.target_bitrate or DEFAULT_AC3_BITRATE
            args.extend([f"-b:{idx}", format_bitrate_arg(bitrate)])
        else:
            args.extend([f"-c:{idx}", "copy"])
    return args
