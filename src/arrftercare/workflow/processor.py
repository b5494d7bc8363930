"""Per-file post-processing pipeline.

Stages run in a fixed order and stop at the first one that decides the
file should be left alone:

    marker guard -> crop detection -> probe -> significance gate
    -> audio plan -> bitrate -> encode and commit

The marker guard runs no subprocess, so already-processed files cost
nothing. Hard errors (crop detection or probe failure, unusable duration)
are raised; everything else is returned as a FileResult.
"""

from __future__ import annotations

import logging
from pathlib import Path

from arrftercare.config.models import ArrftercareConfig
from arrftercare.detection.cropdetect import (
    detect_crop,
    is_significant,
    removed_rows,
)
from arrftercare.executor.interface import Toolchain
from arrftercare.executor.transcode.audio import build_audio_plan
from arrftercare.executor.transcode.bitrate import estimate_bitrate
from arrftercare.executor.transcode.executor import TranscodeExecutor
from arrftercare.executor.transcode.types import TranscodePlan
from arrftercare.introspector.ffprobe import FFprobeIntrospector
from arrftercare.introspector.interface import MediaIntrospectionError
from arrftercare.logging.context import file_context
from arrftercare.naming import (
    is_processed,
    processed_output_path,
    staging_output_path,
)
from arrftercare.workflow.types import FileOutcome, FileResult, PipelineState

logger = logging.getLogger(__name__)


class PostProcessor:
    """Runs the crop-and-re-encode pipeline on single files."""

    def __init__(
        self,
        toolchain: Toolchain,
        settings: ArrftercareConfig,
        introspector: FFprobeIntrospector | None = None,
        executor: TranscodeExecutor | None = None,
    ) -> None:
        self.toolchain = toolchain
        self.settings = settings
        self.introspector = introspector or FFprobeIntrospector(toolchain.ffprobe)
        self.executor = executor or TranscodeExecutor(
            toolchain, settings.encode, introspector=self.introspector
        )

    def process_file(self, path: Path, dry_run: bool = False) -> FileResult:
        """Run the pipeline on one file.

        Args:
            path: Media file to process.
            dry_run: Detect and plan only. No encode runs and nothing on
                disk changes.

        Returns:
            FileResult describing the outcome.

        Raises:
            CropDetectionError: If the crop detection pass fails.
            MediaIntrospectionError: If the file cannot be probed.
            BitrateEstimationError: If no bitrate can be determined.
        """
        with file_context(path):
            return self._run(PipelineState(input_path=path), dry_run)

    def _run(self, state: PipelineState, dry_run: bool) -> FileResult:
        path = state.input_path

        if is_processed(path):
            logger.info("File already processed, skipping")
            return FileResult(
                path, FileOutcome.SKIPPED_ALREADY_PROCESSED, "Already processed"
            )

        if not path.is_file():
            logger.warning("File not found, skipping: %s", path)
            return FileResult(path, FileOutcome.SKIPPED_MISSING, "File not found")

        crop_config = self.settings.crop
        state.crop = detect_crop(
            self.toolchain.ffmpeg,
            path,
            start_seconds=crop_config.start_seconds,
            frame_interval=crop_config.frame_interval,
            timeout=self.settings.encode.timeout_seconds,
        )
        if state.crop is None:
            return FileResult(path, FileOutcome.SKIPPED_NO_CROP, "No crop detected")

        state.media_info = self.introspector.get_file_info(path)
        video = state.media_info.primary_video_stream
        if video is None or not video.height:
            raise MediaIntrospectionError(f"No video stream with a height in {path}")

        state.removed_rows = removed_rows(state.crop, video.height)
        threshold = crop_config.min_removed_rows
        if not is_significant(state.crop, video.height, threshold):
            logger.info(
                "Crop removes %d rows, below threshold of %d; skipping",
                state.removed_rows,
                threshold,
                extra={"crop": state.crop.filter_string, "height": video.height},
            )
            return FileResult(
                path,
                FileOutcome.SKIPPED_INSIGNIFICANT_CROP,
                f"Crop removes only {state.removed_rows} rows",
            )

        state.audio_plan = build_audio_plan(
            state.media_info.audio_streams,
            ac3_bitrate=self.settings.encode.ac3_bitrate,
        )
        state.bitrate = estimate_bitrate(state.media_info, path.stat().st_size)

        plan = TranscodePlan(
            input_path=path,
            output_path=processed_output_path(path),
            staging_path=staging_output_path(path),
            crop=state.crop,
            bitrate=state.bitrate,
            audio_plan=state.audio_plan,
            video_stream_index=video.index,
        )

        if dry_run:
            details = self.executor.dry_run(plan)
            logger.info(
                "Dry run: would encode to %s", plan.output_path.name, extra=details
            )
            return FileResult(
                path,
                FileOutcome.PLANNED,
                f"Would apply {state.crop.filter_string}",
                output_path=plan.output_path,
                details=details,
            )

        state.transcode_result = self.executor.execute(plan)
        if not state.transcode_result.success:
            return FileResult(
                path,
                FileOutcome.FAILED,
                state.transcode_result.error_message or "Encode failed",
            )
        return FileResult(
            path,
            FileOutcome.PROCESSED,
            f"Applied {state.crop.filter_string}",
            output_path=state.transcode_result.output_path,
        )
