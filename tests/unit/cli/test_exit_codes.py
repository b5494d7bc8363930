"""Tests for cli/exit_codes.py and cli/output.py."""

from pathlib import Path

import pytest

from arrftercare.cli.exit_codes import ExitCode
from arrftercare.cli.output import error_exit, format_file_result
from arrftercare.workflow.types import FileOutcome, FileResult


class TestExitCode:
    """Tests for ExitCode enum."""

    def test_success_is_zero(self) -> None:
        assert ExitCode.SUCCESS == 0

    def test_general_error_is_one(self) -> None:
        assert ExitCode.GENERAL_ERROR == 1


class TestErrorExit:
    """Tests for error_exit."""

    def test_prints_and_exits(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            error_exit("Missing required dependency: ffmpeg")

        assert exc_info.value.code == 1
        assert capsys.readouterr().err == "Error: Missing required dependency: ffmpeg\n"


class TestFormatFileResult:
    """Tests for format_file_result."""

    @pytest.mark.parametrize(
        ("outcome", "label"),
        [
            (FileOutcome.PROCESSED, "processed"),
            (FileOutcome.SKIPPED_NO_CROP, "skipped"),
            (FileOutcome.PLANNED, "dry-run"),
            (FileOutcome.FAILED, "failed"),
        ],
    )
    def test_labels(self, outcome, label) -> None:
        result = FileResult(Path("/m/a.mkv"), outcome, "message")
        assert format_file_result(result) == f"[{label}] a.mkv: message"
