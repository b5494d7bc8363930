"""Tests for encode command building."""

from pathlib import Path

from arrftercare.config.models import EncodeConfig
from arrftercare.detection.cropdetect import CropGeometry
from arrftercare.executor.transcode.audio import AudioPlan, build_audio_plan
from arrftercare.executor.transcode.bitrate import BitrateEstimate
from arrftercare.executor.transcode.command import build_encode_command
from arrftercare.introspector.interface import StreamInfo

FFMPEG = Path("/usr/bin/ffmpeg")
CROP = CropGeometry(1920, 800, 0, 140)
BITRATE = BitrateEstimate(bits_per_second=8_000_000, estimated=True)


def _audio_plan() -> AudioPlan:
    return build_audio_plan(
        [
            StreamInfo(index=1, codec_type="audio", codec_name="truehd"),
            StreamInfo(index=2, codec_type="audio", codec_name="ac3"),
        ]
    )


class TestBuildEncodeCommand:
    """Tests for build_encode_command."""

    def test_full_command(self) -> None:
        cmd = build_encode_command(
            FFMPEG,
            Path("/m/a.mkv"),
            Path("/m/.a [PPd].mkv"),
            CROP,
            BITRATE,
            _audio_plan(),
            EncodeConfig(),
        )

        assert cmd == [
            "/usr/bin/ffmpeg",
            "-y",
            "-hide_banner",
            "-nostdin",
            "-i",
            "/m/a.mkv",
            "-map",
            "0",
            "-c:v",
            "copy",
            "-filter:0",
            "crop=1920:800:0:140",
            "-c:0",
            "libx264",
            "-crf:0",
            "18",
            "-preset:0",
            "slow",
            "-maxrate:0",
            "8000000",
            "-bufsize:0",
            "16000000",
            "-c:1",
            "ac3",
            "-b:1",
            "640k",
            "-c:2",
            "copy",
            "-c:s",
            "copy",
            "-c:t",
            "copy",
            "/m/.a [PPd].mkv",
        ]

    def test_no_crop_omits_filter(self) -> None:
        cmd = build_encode_command(
            FFMPEG,
            Path("/m/a.mkv"),
            Path("/m/out.mkv"),
            None,
            BITRATE,
            AudioPlan(),
            EncodeConfig(),
        )
        assert "-filter:0" not in cmd
        assert cmd[cmd.index("-c:0") + 1] == "libx264"

    def test_encoder_settings_from_config(self) -> None:
        cmd = build_encode_command(
            FFMPEG,
            Path("/m/a.mkv"),
            Path("/m/out.mkv"),
            CROP,
            BITRATE,
            AudioPlan(),
            EncodeConfig(video_codec="libx265", crf=22, preset="medium"),
        )

        assert cmd[cmd.index("-c:0") + 1] == "libx265"
        assert cmd[cmd.index("-crf:0") + 1] == "22"
        assert cmd[cmd.index("-preset:0") + 1] == "medium"

    def test_output_is_last(self) -> None:
        cmd = build_encode_command(
            FFMPEG,
            Path("/m/a.mkv"),
            Path("/m/out.mkv"),
            CROP,
            BITRATE,
            AudioPlan(),
            EncodeConfig(),
        )
        assert cmd[-1] == "/m/out.mkv"

    def test_targets_main_video_stream_only(self) -> None:
        """Cover art before the main video is copied, not cropped."""
        cmd = build_encode_command(
            FFMPEG,
            Path("/m/a.mp4"),
            Path("/m/out.mp4"),
            CROP,
            BITRATE,
            AudioPlan(),
            EncodeConfig(),
            video_stream_index=1,
        )

        assert cmd[cmd.index("-c:v") + 1] == "copy"
        assert cmd[cmd.index("-filter:1") + 1] == "crop=1920:800:0:140"
        assert cmd[cmd.index("-c:1") + 1] == "libx264"
        assert cmd[cmd.index("-maxrate:1") + 1] == "8000000"
        assert "-vf" not in cmd
        assert "-filter:0" not in cmd
        # Stream-specific codec must follow the generic copy to take effect
        assert cmd.index("-c:v") < cmd.index("-c:1")
