"""Pipeline state and per-file results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from arrftercare.detection.cropdetect import CropGeometry
from arrftercare.executor.transcode.audio import AudioPlan
from arrftercare.executor.transcode.bitrate import BitrateEstimate
from arrftercare.executor.transcode.types import TranscodeResult
from arrftercare.introspector.interface import MediaInfo


class FileOutcome(Enum):
    """What happened to one media file."""

    PROCESSED = "processed"
    SKIPPED_ALREADY_PROCESSED = "skipped_already_processed"
    SKIPPED_NO_CROP = "skipped_no_crop"
    SKIPPED_INSIGNIFICANT_CROP = "skipped_insignificant_crop"
    SKIPPED_MISSING = "skipped_missing"
    PLANNED = "planned"
    FAILED = "failed"

    @property
    def is_skip(self) -> bool:
        """True for outcomes where the file was deliberately left alone."""
        return self.value.startswith("skipped_")


@dataclass
class PipelineState:
    """Data accumulated as a file moves through the pipeline stages."""

    input_path: Path
    crop: CropGeometry | None = None
    media_info: MediaInfo | None = None
    removed_rows: int | None = None
    audio_plan: AudioPlan | None = None
    bitrate: BitrateEstimate | None = None
    transcode_result: TranscodeResult | None = None


@dataclass(frozen=True)
class FileResult:
    """Final outcome for one file."""

    path: Path
    outcome: FileOutcome
    message: str
    output_path: Path | None = None
    details: dict | None = None
    """Dry-run plan description, when outcome is PLANNED."""

    @property
    def failed(self) -> bool:
        return self.outcome is FileOutcome.FAILED
