"""Tests for TranscodeExecutor commit and rollback."""

import subprocess
from dataclasses import replace
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from arrftercare.config.models import EncodeConfig
from arrftercare.detection.cropdetect import CropGeometry
from arrftercare.executor.backup import get_backup_path
from arrftercare.executor.transcode.audio import AudioPlan
from arrftercare.executor.transcode.bitrate import BitrateEstimate
from arrftercare.executor.transcode.executor import TranscodeExecutor
from arrftercare.executor.transcode.types import CommitState, TranscodePlan
from arrftercare.introspector.interface import MediaIntrospectionError
from arrftercare.naming import processed_output_path, staging_output_path

RUN_COMMAND = "arrftercare.executor.transcode.executor.run_command"


@pytest.fixture
def plan(media_file: Path) -> TranscodePlan:
    return TranscodePlan(
        input_path=media_file,
        output_path=processed_output_path(media_file),
        staging_path=staging_output_path(media_file),
        crop=CropGeometry(1920, 800, 0, 140),
        bitrate=BitrateEstimate(bits_per_second=8_000_000, estimated=True),
        audio_plan=AudioPlan(),
    )


@pytest.fixture
def introspector(make_media_info) -> MagicMock:
    mock = MagicMock()
    mock.get_file_info.return_value = make_media_info(height=800)
    return mock


@pytest.fixture
def executor(toolchain, introspector) -> TranscodeExecutor:
    return TranscodeExecutor(toolchain, EncodeConfig(), introspector=introspector)


def _encoder(command_result, returncode=0):
    """run_command side effect that writes the staged output like ffmpeg."""

    def _run(cmd, **kwargs):
        Path(cmd[-1]).write_bytes(b"encoded")
        return command_result(returncode=returncode, stderr="frame=100\nerror line")

    return _run


def _assert_rolled_back(plan: TranscodePlan, original: bytes) -> None:
    assert plan.input_path.read_bytes() == original
    assert not plan.staging_path.exists()
    assert not plan.output_path.exists()
    assert not get_backup_path(plan.input_path).exists()


class TestExecuteCommit:
    """Successful encodes."""

    def test_commits_and_deletes_original(
        self, executor, plan, command_result
    ) -> None:
        with patch(RUN_COMMAND, side_effect=_encoder(command_result)):
            result = executor.execute(plan)

        assert result.success
        assert result.state is CommitState.COMMITTED
        assert result.output_path == plan.output_path
        assert plan.output_path.read_bytes() == b"encoded"
        assert not plan.input_path.exists()
        assert not plan.staging_path.exists()
        assert result.backup_path is None
        assert result.output_size == len(b"encoded")

    def test_encoder_writes_to_staging_path(
        self, executor, plan, command_result
    ) -> None:
        with patch(
            RUN_COMMAND, side_effect=_encoder(command_result)
        ) as mock_run:
            executor.execute(plan)

        cmd = mock_run.call_args[0][0]
        assert cmd[-1] == str(plan.staging_path)
        assert mock_run.call_args[1]["timeout"] is None

    def test_keeps_backup_when_configured(
        self, toolchain, introspector, plan, command_result
    ) -> None:
        original = plan.input_path.read_bytes()
        executor = TranscodeExecutor(
            toolchain,
            EncodeConfig(keep_original_backup=True),
            introspector=introspector,
        )

        with patch(RUN_COMMAND, side_effect=_encoder(command_result)):
            result = executor.execute(plan)

        assert result.backup_path == get_backup_path(plan.input_path)
        assert result.backup_path.read_bytes() == original
        assert not plan.input_path.exists()

    def test_logs_sizes(self, executor, plan, command_result, caplog) -> None:
        caplog.set_level("INFO")
        with patch(RUN_COMMAND, side_effect=_encoder(command_result)):
            executor.execute(plan)

        assert "Original size:" in caplog.text
        assert "New size: 7 B" in caplog.text


class TestExecuteRollback:
    """Failed encodes leave the original untouched."""

    def test_encoder_failure(self, executor, plan, command_result, caplog) -> None:
        original = plan.input_path.read_bytes()

        with patch(
            RUN_COMMAND,
            side_effect=_encoder(command_result, returncode=1),
        ):
            result = executor.execute(plan)

        assert not result.success
        assert result.state is CommitState.ROLLED_BACK
        assert "exited with code 1" in result.error_message
        assert "error line" in result.error_message
        assert "Transcode failed" in caplog.text
        _assert_rolled_back(plan, original)

    def test_encoder_failure_with_backup_enabled(
        self, toolchain, introspector, plan, command_result
    ) -> None:
        original = plan.input_path.read_bytes()
        executor = TranscodeExecutor(
            toolchain,
            EncodeConfig(keep_original_backup=True),
            introspector=introspector,
        )

        with patch(
            RUN_COMMAND,
            side_effect=_encoder(command_result, returncode=1),
        ):
            executor.execute(plan)

        _assert_rolled_back(plan, original)

    def test_timeout(self, executor, plan) -> None:
        original = plan.input_path.read_bytes()

        def _hang(cmd, **kwargs):
            Path(cmd[-1]).write_bytes(b"partial")
            raise subprocess.TimeoutExpired(cmd="ffmpeg", timeout=1)

        with patch(RUN_COMMAND, side_effect=_hang):
            result = executor.execute(plan)

        assert "timed out" in result.error_message
        _assert_rolled_back(plan, original)

    def test_interrupted_encode_removes_staging(self, executor, plan) -> None:
        original = plan.input_path.read_bytes()

        def _interrupt(cmd, **kwargs):
            Path(cmd[-1]).write_bytes(b"partial")
            raise KeyboardInterrupt

        with patch(RUN_COMMAND, side_effect=_interrupt):
            with pytest.raises(KeyboardInterrupt):
                executor.execute(plan)

        _assert_rolled_back(plan, original)

    def test_termination_during_verify_removes_staging(
        self, executor, introspector, plan, command_result
    ) -> None:
        original = plan.input_path.read_bytes()
        introspector.get_file_info.side_effect = SystemExit(143)

        with patch(RUN_COMMAND, side_effect=_encoder(command_result)):
            with pytest.raises(SystemExit):
                executor.execute(plan)

        _assert_rolled_back(plan, original)

    def test_spawn_failure(self, executor, plan) -> None:
        original = plan.input_path.read_bytes()

        with patch(RUN_COMMAND, side_effect=FileNotFoundError("ffmpeg")):
            result = executor.execute(plan)

        assert result.state is CommitState.ROLLED_BACK
        _assert_rolled_back(plan, original)

    def test_missing_output(self, executor, plan, command_result) -> None:
        original = plan.input_path.read_bytes()

        with patch(RUN_COMMAND, return_value=command_result()):
            result = executor.execute(plan)

        assert result.error_message == "Output file was not created"
        _assert_rolled_back(plan, original)

    def test_unprobeable_output(
        self, executor, introspector, plan, command_result
    ) -> None:
        original = plan.input_path.read_bytes()
        introspector.get_file_info.side_effect = MediaIntrospectionError("corrupt")

        with patch(RUN_COMMAND, side_effect=_encoder(command_result)):
            result = executor.execute(plan)

        assert "failed verification" in result.error_message
        _assert_rolled_back(plan, original)

    def test_output_without_video(
        self, executor, introspector, make_media_info, plan, command_result
    ) -> None:
        original = plan.input_path.read_bytes()
        info = make_media_info()
        introspector.get_file_info.return_value = type(info)(
            path=info.path,
            format_name=info.format_name,
            duration_seconds=info.duration_seconds,
            streams=tuple(s for s in info.streams if s.codec_type != "video"),
        )

        with patch(RUN_COMMAND, side_effect=_encoder(command_result)):
            result = executor.execute(plan)

        assert "no video stream" in result.error_message
        _assert_rolled_back(plan, original)

    def test_retire_failure_undoes_commit(
        self, executor, plan, command_result
    ) -> None:
        original = plan.input_path.read_bytes()

        with (
            patch(RUN_COMMAND, side_effect=_encoder(command_result)),
            patch(
                "arrftercare.executor.transcode.executor.retire_original",
                side_effect=PermissionError("read-only"),
            ),
        ):
            result = executor.execute(plan)

        assert result.state is CommitState.ROLLED_BACK
        assert "Failed to retire original" in result.error_message
        _assert_rolled_back(plan, original)


class TestDryRun:
    """Tests for TranscodeExecutor.dry_run."""

    def test_describes_plan_without_running(self, executor, plan) -> None:
        with patch(RUN_COMMAND) as mock_run:
            details = executor.dry_run(plan)

        mock_run.assert_not_called()
        assert details["crop"] == "crop=1920:800:0:140"
        assert details["maxrate"] == 8_000_000
        assert details["command"][-1] == str(plan.staging_path)
        assert not plan.staging_path.exists()
        assert plan.input_path.exists()

    def test_command_targets_plan_video_stream(self, executor, plan) -> None:
        details = executor.dry_run(replace(plan, video_stream_index=2))

        command = details["command"]
        assert command[command.index("-c:2") + 1] == "libx264"
        assert "-filter:2" in command
