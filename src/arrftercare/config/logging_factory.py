"""Apply command-line logging flags on top of the loaded LoggingConfig."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from arrftercare.config.models import LoggingConfig


def build_logging_config(
    base: LoggingConfig,
    *,
    level: str | None = None,
    file: Path | None = None,
    format: str | None = None,
    include_stderr: bool | None = None,
) -> LoggingConfig:
    """Return a copy of base with every non-None override applied.

    Raises:
        ValueError: If an override fails LoggingConfig validation.
    """
    overrides = {
        "level": level,
        "file": file,
        "format": format,
        "include_stderr": include_stderr,
    }
    return replace(
        base, **{name: value for name, value in overrides.items() if value is not None}
    )
