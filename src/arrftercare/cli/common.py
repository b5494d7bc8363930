"""Setup shared by the hook and scan commands."""

from __future__ import annotations

import click

from arrftercare.cli.exit_codes import ExitCode
from arrftercare.cli.output import error_exit
from arrftercare.config.models import ArrftercareConfig
from arrftercare.executor.interface import ToolNotFoundError, resolve_toolchain
from arrftercare.workflow.processor import PostProcessor


def get_settings(ctx: click.Context) -> ArrftercareConfig:
    """Return the configuration loaded by the command group."""
    return ctx.obj["config"]


def create_processor(settings: ArrftercareConfig) -> PostProcessor:
    """Resolve ffmpeg/ffprobe and build a PostProcessor.

    Exits with GENERAL_ERROR if either tool is unavailable, before any file
    is looked at.
    """
    try:
        toolchain = resolve_toolchain(settings.tools)
    except ToolNotFoundError as e:
        error_exit(str(e), ExitCode.GENERAL_ERROR)
    return PostProcessor(toolchain, settings)
