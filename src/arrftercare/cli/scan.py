"""The scan command: post-process every media file below a directory."""

from __future__ import annotations

import logging
from collections import Counter
from pathlib import Path

import click

from arrftercare.cli.common import create_processor, get_settings
from arrftercare.cli.exit_codes import ExitCode
from arrftercare.cli.output import echo_file_result, error_exit
from arrftercare.config.models import ScanConfig
from arrftercare.exceptions import ArrftercareError
from arrftercare.scanner.discovery import discover_media_files
from arrftercare.workflow.types import FileOutcome

logger = logging.getLogger(__name__)


@click.command("scan")
@click.argument("directory", type=click.Path(path_type=Path))
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Detect and plan only; never encode or modify files.",
)
@click.option(
    "--extension",
    "-e",
    "extensions",
    multiple=True,
    help="File extension to process (repeatable). Default: mp4, mkv, avi.",
)
@click.pass_context
def scan_command(
    ctx: click.Context,
    directory: Path,
    dry_run: bool,
    extensions: tuple[str, ...],
) -> None:
    """Post-process media files below DIRECTORY, one at a time.

    A failed encode is reported and the scan moves on to the next file.
    Crop detection or probe errors stop the scan.
    """
    settings = get_settings(ctx)
    processor = create_processor(settings)

    scan_config = settings.scan
    if extensions:
        try:
            scan_config = ScanConfig(extensions=extensions)
        except ValueError as e:
            error_exit(str(e), ExitCode.GENERAL_ERROR)

    try:
        files = discover_media_files(directory, scan_config.extensions)
    except ArrftercareError as e:
        error_exit(str(e), ExitCode.GENERAL_ERROR)

    if not files:
        click.echo(f"No media files found in {directory}")
        return

    logger.info("Processing %d file(s) in %s", len(files), directory)
    counts: Counter[str] = Counter()
    for path in files:
        try:
            result = processor.process_file(path, dry_run=dry_run)
        except ArrftercareError as e:
            error_exit(str(e), ExitCode.GENERAL_ERROR)
        echo_file_result(result)
        counts[_summary_key(result.outcome)] += 1

    click.echo("")
    click.echo(
        f"Processed: {counts['processed']}, "
        + (f"Planned: {counts['planned']}, " if dry_run else "")
        + f"Skipped: {counts['skipped']}, Failed: {counts['failed']}"
    )


def _summary_key(outcome: FileOutcome) -> str:
    if outcome.is_skip:
        return "skipped"
    return outcome.value
