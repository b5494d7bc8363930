"""CLI output helpers shared by the subcommands."""

from __future__ import annotations

import sys
from typing import NoReturn

import click

from arrftercare.cli.exit_codes import ExitCode
from arrftercare.workflow.types import FileOutcome, FileResult

_OUTCOME_LABELS = {
    FileOutcome.PROCESSED: "processed",
    FileOutcome.SKIPPED_ALREADY_PROCESSED: "skipped",
    FileOutcome.SKIPPED_NO_CROP: "skipped",
    FileOutcome.SKIPPED_INSIGNIFICANT_CROP: "skipped",
    FileOutcome.SKIPPED_MISSING: "skipped",
    FileOutcome.PLANNED: "dry-run",
    FileOutcome.FAILED: "failed",
}


def error_exit(message: str, code: ExitCode | int = ExitCode.GENERAL_ERROR) -> NoReturn:
    """Print "Error: <message>" to stderr and exit.

    Args:
        message: Error message to display.
        code: Exit code to use.

    Note:
        This function never returns; it always calls sys.exit().
    """
    click.echo(f"Error: {message}", err=True)
    sys.exit(int(code))


def format_file_result(result: FileResult) -> str:
    """One-line, human-readable summary of a file result."""
    label = _OUTCOME_LABELS[result.outcome]
    return f"[{label}] {result.path.name}: {result.message}"


def echo_file_result(result: FileResult) -> None:
    """Print a file result, to stderr when it is a failure."""
    click.echo(format_file_result(result), err=result.failed)
