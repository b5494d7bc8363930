"""Transcode executor: encode to a staging file, then commit or roll back.

The encoder never writes to the final path. Output goes to a hidden staging
file next to the source; only after ffmpeg exits cleanly and the staged
file probes as a playable video is it renamed into place and the original
retired. Any failure before that point removes the staged file and leaves
the original exactly as it was.
"""

from __future__ import annotations

import logging
import os
import subprocess  # nosec B404 - only for TimeoutExpired
import time

from arrftercare.config.models import EncodeConfig
from arrftercare.core.formatting import format_file_size
from arrftercare.core.subprocess_utils import run_command
from arrftercare.executor.backup import discard_staged_output, retire_original
from arrftercare.executor.interface import Toolchain
from arrftercare.introspector.ffprobe import FFprobeIntrospector
from arrftercare.introspector.interface import MediaIntrospectionError

from .command import build_encode_command
from .types import CommitState, TranscodePlan, TranscodeResult

logger = logging.getLogger(__name__)

# Number of trailing ffmpeg stderr lines included in failure messages
_STDERR_TAIL_LINES = 10


class TranscodeExecutor:
    """Runs the re-encode for a TranscodePlan."""

    def __init__(
        self,
        toolchain: Toolchain,
        encode: EncodeConfig,
        introspector: FFprobeIntrospector | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            toolchain: Resolved ffmpeg/ffprobe paths.
            encode: Encoder and commit settings.
            introspector: Used to validate the staged output. Defaults to an
                FFprobeIntrospector on the toolchain's ffprobe.
        """
        self.toolchain = toolchain
        self.encode = encode
        self.introspector = introspector or FFprobeIntrospector(toolchain.ffprobe)

    def build_command(self, plan: TranscodePlan) -> list[str]:
        """Build the ffmpeg command writing to the plan's staging path."""
        return build_encode_command(
            self.toolchain.ffmpeg,
            plan.input_path,
            plan.staging_path,
            plan.crop,
            plan.bitrate,
            plan.audio_plan,
            self.encode,
            video_stream_index=plan.video_stream_index,
        )

    def dry_run(self, plan: TranscodePlan) -> dict:
        """Describe what execute() would do without running anything."""
        return {
            "input_path": str(plan.input_path),
            "output_path": str(plan.output_path),
            "crop": plan.crop.filter_string if plan.crop else None,
            "maxrate": plan.bitrate.bits_per_second,
            "bitrate_estimated": plan.bitrate.estimated,
            "audio": {
                track.stream_index: track.action.value
                for track in plan.audio_plan.tracks
            },
            "command": self.build_command(plan),
        }

    def execute(self, plan: TranscodePlan) -> TranscodeResult:
        """Execute a transcode plan.

        Args:
            plan: The transcode plan to execute.

        Returns:
            TranscodeResult. On failure the state is ROLLED_BACK and
            error_message describes the cause.
        """
        input_size = plan.input_path.stat().st_size
        try:
            return self._encode_and_commit(plan, input_size)
        except BaseException:
            # Ctrl-C or SIGTERM: leave no partial output behind.
            discard_staged_output(plan.staging_path)
            logger.warning(
                "Encode aborted, staged output removed",
                extra={"staging_path": str(plan.staging_path)},
            )
            raise

    def _encode_and_commit(
        self, plan: TranscodePlan, input_size: int
    ) -> TranscodeResult:
        start_time = time.monotonic()

        cmd = self.build_command(plan)
        logger.info(
            "Encoding %s",
            plan.input_path.name,
            extra={
                "input_path": str(plan.input_path),
                "staging_path": str(plan.staging_path),
                "crop": plan.crop.filter_string if plan.crop else None,
                "maxrate": plan.bitrate.bits_per_second,
            },
        )
        logger.debug("Executing FFmpeg: %s", " ".join(cmd))

        try:
            result = run_command(cmd, timeout=self.encode.timeout_seconds)
        except subprocess.TimeoutExpired:
            return self._rollback(
                plan,
                f"Encode timed out after {self.encode.timeout_seconds} seconds",
            )
        except OSError as e:
            return self._rollback(plan, f"Could not run ffmpeg: {e}")

        if not result.succeeded:
            tail = "\n".join(result.stderr.strip().splitlines()[-_STDERR_TAIL_LINES:])
            return self._rollback(
                plan, f"FFmpeg exited with code {result.returncode}: {tail}"
            )

        error = self._validate_staged_output(plan)
        if error:
            return self._rollback(plan, error)

        try:
            os.replace(plan.staging_path, plan.output_path)
        except OSError as e:
            return self._rollback(plan, f"Failed to move staged output into place: {e}")

        try:
            backup_path = retire_original(
                plan.input_path, keep_backup=self.encode.keep_original_backup
            )
        except OSError as e:
            # Undo the rename so the directory holds only the original again.
            discard_staged_output(plan.output_path)
            return self._rollback(plan, f"Failed to retire original file: {e}")

        output_size = plan.output_path.stat().st_size
        elapsed = time.monotonic() - start_time
        logger.info("Original size: %s", format_file_size(input_size))
        logger.info("New size: %s", format_file_size(output_size))
        logger.info(
            "Transcode completed: %s",
            plan.output_path.name,
            extra={
                "output_path": str(plan.output_path),
                "elapsed_seconds": round(elapsed, 3),
                "input_size": input_size,
                "output_size": output_size,
            },
        )
        return TranscodeResult(
            success=True,
            state=CommitState.COMMITTED,
            output_path=plan.output_path,
            backup_path=backup_path,
            input_size=input_size,
            output_size=output_size,
        )

    def _validate_staged_output(self, plan: TranscodePlan) -> str | None:
        """Return an error message if the staged output is unusable."""
        if not plan.staging_path.exists():
            return "Output file was not created"
        try:
            info = self.introspector.get_file_info(plan.staging_path)
        except MediaIntrospectionError as e:
            return f"Output file failed verification: {e}"
        if info.primary_video_stream is None:
            return "Output file failed verification: no video stream"
        return None

    def _rollback(self, plan: TranscodePlan, message: str) -> TranscodeResult:
        discard_staged_output(plan.staging_path)
        logger.error(
            "Transcode failed, original left untouched: %s",
            message,
            extra={"input_path": str(plan.input_path)},
        )
        return TranscodeResult(
            success=False,
            state=CommitState.ROLLED_BACK,
            error_message=message,
        )
