"""Command-line interface for arrftercare."""

from __future__ import annotations

import logging
import signal
import sys
import threading
from pathlib import Path

import click

from arrftercare import __version__
from arrftercare.cli.exit_codes import ExitCode
from arrftercare.cli.output import error_exit
from arrftercare.config.loader import get_config
from arrftercare.config.logging_factory import build_logging_config
from arrftercare.config.models import ArrftercareConfig
from arrftercare.logging.config import configure_logging

logger = logging.getLogger(__name__)


def _configure_logging(
    config: ArrftercareConfig,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Configure logging from the loaded config and CLI options."""
    logging_config = build_logging_config(
        config.logging,
        level=log_level,
        file=log_file,
        format="json" if log_json else None,
    )
    configure_logging(logging_config)


def _handle_termination(signum: int, frame) -> None:
    """Raise SystemExit on SIGTERM so in-flight cleanup runs."""
    logger.warning("Received %s, stopping", signal.Signals(signum).name)
    sys.exit(128 + signum)


def _setup_signal_handlers() -> None:
    # signal.signal is only allowed from the main thread
    if threading.current_thread() is threading.main_thread():
        signal.signal(signal.SIGTERM, _handle_termination)


@click.group()
@click.version_option(version=__version__, prog_name="arrftercare")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Config file (default: ~/.config/arrftercare/config.toml).",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """arrftercare - crop black bars from Radarr/Sonarr imports."""
    ctx.ensure_object(dict)

    # Tests may pass a prepared config through obj
    if "config" not in ctx.obj:
        try:
            ctx.obj["config"] = get_config(config_path=config_path)
        except ValueError as e:
            error_exit(f"Invalid configuration: {e}", ExitCode.GENERAL_ERROR)

    try:
        _configure_logging(ctx.obj["config"], log_level, log_file, log_json)
    except ValueError as e:
        error_exit(f"Invalid logging configuration: {e}", ExitCode.GENERAL_ERROR)

    _setup_signal_handlers()
    logger.debug("arrftercare %s starting", __version__)


# Defer import to avoid circular dependency
def _register_commands():
    from arrftercare.cli.hook import hook_command
    from arrftercare.cli.scan import scan_command

    main.add_command(hook_command)
    main.add_command(scan_command)


_register_commands()
