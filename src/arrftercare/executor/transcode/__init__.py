"""Re-encode planning and execution.

Public API:
    - build_audio_plan / build_audio_args: TrueHD to AC3, copy the rest
    - estimate_bitrate: Declared or size-derived rate-control ceiling
    - build_encode_command: Assemble the ffmpeg re-encode command
    - TranscodeExecutor: Encode to staging, validate, commit or roll back
"""

from arrftercare.executor.transcode.audio import (
    DEFAULT_AC3_BITRATE,
    AudioAction,
    AudioPlan,
    AudioTrackPlan,
    build_audio_args,
    build_audio_plan,
)
from arrftercare.executor.transcode.bitrate import (
    BitrateEstimate,
    BitrateEstimationError,
    estimate_bitrate,
)
from arrftercare.executor.transcode.command import (
    build_encode_command,
    build_video_args,
)
from arrftercare.executor.transcode.executor import TranscodeExecutor
from arrftercare.executor.transcode.types import (
    CommitState,
    TranscodePlan,
    TranscodeResult,
)

__all__ = [
    "DEFAULT_AC3_BITRATE",
    "AudioAction",
    "AudioPlan",
    "AudioTrackPlan",
    "BitrateEstimate",
    "BitrateEstimationError",
    "CommitState",
    "TranscodeExecutor",
    "TranscodePlan",
    "TranscodeResult",
    "build_audio_args",
    "build_audio_plan",
    "build_encode_command",
    "build_video_args",
    "estimate_bitrate",
]
