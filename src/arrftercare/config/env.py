"""Typed access to ARRFTERCARE_* and Radarr/Sonarr environment variables.

EnvReader takes an optional mapping in place of os.environ, so settings
and event parsing can be tested without touching the process environment.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


class EnvReader:
    """Read environment variables with type conversion.

    Unset variables return the caller's default. Values that fail to
    convert are logged and also fall back to the default, so a typo in a
    service unit never stops a hook run.
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self._env: Mapping[str, str] = os.environ if env is None else env

    def _convert(
        self, var: str, convert: Callable[[str], T], default: T | None
    ) -> T | None:
        raw = self._env.get(var)
        if raw is None:
            return default
        try:
            return convert(raw)
        except ValueError:
            logger.warning(
                "Ignoring %s=%r: expected %s", var, raw, convert.__name__
            )
            return default

    def get_str(self, var: str, default: str | None = None) -> str | None:
        return self._env.get(var, default)

    def get_int(self, var: str, default: int | None = None) -> int | None:
        return self._convert(var, int, default)

    def get_float(self, var: str, default: float | None = None) -> float | None:
        return self._convert(var, float, default)

    def get_bool(self, var: str, default: bool | None = None) -> bool | None:
        """Parse a flag. "1", "true", "yes" and "on" are true, anything else false."""
        return self._convert(
            var, lambda raw: raw.strip().casefold() in TRUE_VALUES, default
        )

    def get_path(
        self, var: str, must_exist: bool = True, default: Path | None = None
    ) -> Path | None:
        """Read a path, with ~ expanded.

        Args:
            var: Variable name. An empty value counts as unset.
            must_exist: Fall back to default (with a warning) when the path
                does not exist.
            default: Returned when unset or missing.
        """
        raw = self._env.get(var)
        if not raw:
            return default
        path = Path(raw).expanduser()
        if must_exist and not path.exists():
            logger.warning("%s points to a missing path: %s", var, raw)
            return default
        return path
