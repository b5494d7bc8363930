"""Shared test fixtures for arrftercare."""

import logging
import signal
from pathlib import Path

import pytest

from arrftercare.config.models import ArrftercareConfig
from arrftercare.core.subprocess_utils import CommandResult
from arrftercare.executor.interface import Toolchain
from arrftercare.introspector.interface import MediaInfo, StreamInfo

# Representative cropdetect stderr: the estimate converges on the last line.
CROPDETECT_STDERR = """\
Input #0, matroska,webm, from 'movie.mkv':
  Duration: 01:58:03.00, start: 0.000000, bitrate: 9000 kb/s
[Parsed_cropdetect_1 @ 0x55d0] x1:0 x2:1919 y1:128 y2:951 w:1920 h:816 \
x:0 y:132 pts:120120 t:120.120000 limit:24 crop=1920:816:0:132
[Parsed_cropdetect_1 @ 0x55d0] x1:0 x2:1919 y1:138 y2:941 w:1920 h:800 \
x:0 y:140 pts:124124 t:124.124000 limit:24 crop=1920:800:0:140
"""


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Save and restore root logger state between tests."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers[:] = original_handlers
    root.setLevel(original_level)


@pytest.fixture(autouse=True)
def restore_sigterm_handler():
    """Undo SIGTERM handlers installed by CLI invocations."""
    original = signal.getsignal(signal.SIGTERM)
    yield
    signal.signal(signal.SIGTERM, original)


@pytest.fixture
def toolchain() -> Toolchain:
    """Toolchain pointing at nominal ffmpeg/ffprobe paths."""
    return Toolchain(ffmpeg=Path("/usr/bin/ffmpeg"), ffprobe=Path("/usr/bin/ffprobe"))


@pytest.fixture
def settings() -> ArrftercareConfig:
    """Default configuration."""
    return ArrftercareConfig()


@pytest.fixture
def media_file(tmp_path: Path) -> Path:
    """A small stand-in media file."""
    path = tmp_path / "Heat (1995).mkv"
    path.write_bytes(b"original-bytes" * 64)
    return path


@pytest.fixture
def make_media_info():
    """Factory for MediaInfo objects with a 1080p video stream."""

    def _make(
        path: Path = Path("/movies/movie.mkv"),
        height: int = 1080,
        video_bit_rate: int | None = None,
        duration: float | None = 7083.0,
        audio_codecs: tuple[str, ...] = ("truehd", "ac3"),
    ) -> MediaInfo:
        streams = [
            StreamInfo(
                index=0,
                codec_type="video",
                codec_name="h264",
                width=1920,
                height=height,
                bit_rate=video_bit_rate,
            )
        ]
        for offset, codec in enumerate(audio_codecs, start=1):
            streams.append(
                StreamInfo(index=offset, codec_type="audio", codec_name=codec)
            )
        streams.append(
            StreamInfo(
                index=len(streams), codec_type="subtitle", codec_name="subrip"
            )
        )
        return MediaInfo(
            path=path,
            format_name="matroska,webm",
            duration_seconds=duration,
            streams=tuple(streams),
        )

    return _make


@pytest.fixture
def command_result():
    """Factory for CommandResult objects."""

    def _make(returncode: int = 0, stdout: str = "", stderr: str = ""):
        return CommandResult(
            args=("ffmpeg",), returncode=returncode, stdout=stdout, stderr=stderr
        )

    return _make


@pytest.fixture
def cropdetect_stderr() -> str:
    """cropdetect diagnostic output reporting crop=1920:800:0:140 last."""
    return CROPDETECT_STDERR
