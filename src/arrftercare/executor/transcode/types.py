"""Transcode data types and result classes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from arrftercare.detection.cropdetect import CropGeometry
from arrftercare.executor.transcode.audio import AudioPlan
from arrftercare.executor.transcode.bitrate import BitrateEstimate


class CommitState(Enum):
    """How a transcode attempt ended on disk."""

    COMMITTED = "committed"
    """Output is at its final path and the original has been retired."""

    ROLLED_BACK = "rolled_back"
    """Staged output was discarded and the original is untouched."""


@dataclass(frozen=True)
class TranscodePlan:
    """Everything needed to run one re-encode."""

    input_path: Path
    output_path: Path
    staging_path: Path
    crop: CropGeometry | None
    bitrate: BitrateEstimate
    audio_plan: AudioPlan
    video_stream_index: int = 0


@dataclass
class TranscodeResult:
    """Result of a transcode operation."""

    success: bool
    state: CommitState
    output_path: Path | None = None
    error_message: str | None = None
    backup_path: Path | None = None
    input_size: int | None = None
    output_size: int | None = None
