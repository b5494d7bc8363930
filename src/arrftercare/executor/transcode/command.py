"""FFmpeg command building for the crop re-encode."""

from __future__ import annotations

from pathlib import Path

from arrftercare.config.models import EncodeConfig
from arrftercare.detection.cropdetect import CropGeometry
from arrftercare.executor.transcode.audio import AudioPlan, build_audio_args
from arrftercare.executor.transcode.bitrate import BitrateEstimate


def build_video_args(
    crop: CropGeometry | None,
    bitrate: BitrateEstimate,
    encode: EncodeConfig,
    stream_index: int = 0,
) -> list[str]:
    """Build video filter, encoder and rate-control arguments.

    Only the stream at stream_index is cropped and re-encoded. Any other
    video stream, such as MP4 cover art, is copied as is.
    """
    target = str(stream_index)
    args = ["-c:v", "copy"]
    if crop is not None:
        args.extend([f"-filter:{target}", crop.filter_string])
    args.extend([f"-c:{target}", encode.video_codec])
    args.extend([f"-crf:{target}", str(encode.crf)])
    args.extend([f"-preset:{target}", encode.preset])
    args.extend([f"-maxrate:{target}", str(bitrate.bits_per_second)])
    args.extend([f"-bufsize:{target}", str(bitrate.bufsize)])
    return args


def build_encode_command(
    ffmpeg: Path,
    input_path: Path,
    output_path: Path,
    crop: CropGeometry | None,
    bitrate: BitrateEstimate,
    audio_plan: AudioPlan,
    encode: EncodeConfig,
    video_stream_index: int = 0,
) -> list[str]:
    """Build the complete re-encode command.

    Every input stream is mapped, so output stream indexes equal input
    indexes. The main video stream is cropped and re-encoded, audio
    follows the audio plan, everything else is copied.

    Args:
        ffmpeg: Path to the ffmpeg binary.
        input_path: Source file.
        output_path: File to write (the staging path during a real run).
        crop: Crop to apply, None to re-encode without cropping.
        bitrate: Rate-control ceiling.
        audio_plan: Per-stream audio actions.
        encode: Encoder settings.
        video_stream_index: Input index of the main video stream.

    Returns:
        Command as a list of strings.
    """
    cmd = [
        str(ffmpeg),
        "-y",
        "-hide_banner",
        "-nostdin",
        "-i",
        str(input_path),
        "-map",
        "0",
    ]
    cmd.extend(build_video_args(crop, bitrate, encode, video_stream_index))
    cmd.extend(build_audio_args(audio_plan))
    cmd.extend(["-c:s", "copy", "-c:t", "copy"])
    cmd.append(str(output_path))
    return cmd
