"""The hook command: Radarr/Sonarr custom-script entry point.

Configure it in Radarr or Sonarr under Settings > Connect > Custom Script
with "On Import" (and optionally "On Upgrade") enabled. The media manager
runs it with no arguments and passes the event in environment variables.
"""

from __future__ import annotations

import logging
import sys

import click

from arrftercare.cli.common import create_processor, get_settings
from arrftercare.cli.exit_codes import ExitCode
from arrftercare.cli.output import echo_file_result, error_exit
from arrftercare.events import EventKind, read_event
from arrftercare.exceptions import ArrftercareError
from arrftercare.naming import is_processed

logger = logging.getLogger(__name__)


@click.command("hook")
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Detect and plan only; never encode or modify files.",
)
@click.pass_context
def hook_command(ctx: click.Context, dry_run: bool) -> None:
    """Post-process the file named by a Radarr/Sonarr event."""
    processor = create_processor(get_settings(ctx))

    event = read_event()
    if event is None:
        logger.info("No Radarr or Sonarr event in environment, nothing to do")
        return
    if event.event_kind is EventKind.TEST:
        logger.info("Received %s test event", event.source.value)
        click.echo(f"{event.source.value} test event received")
        return
    if event.event_kind is EventKind.OTHER:
        logger.info(
            "Ignoring %s event %s", event.source.value, event.raw_event_type
        )
        return

    path = event.media_path
    if path is None:
        error_exit(
            f"{event.source.value} Download event without a media file path",
            ExitCode.GENERAL_ERROR,
        )
    # Already-processed names go to the pipeline, which skips them
    if not is_processed(path) and not path.is_file():
        error_exit(f"Media file not found: {path}", ExitCode.GENERAL_ERROR)

    try:
        result = processor.process_file(path, dry_run=dry_run)
    except ArrftercareError as e:
        error_exit(str(e), ExitCode.GENERAL_ERROR)

    echo_file_result(result)
    if result.failed:
        sys.exit(ExitCode.GENERAL_ERROR)
