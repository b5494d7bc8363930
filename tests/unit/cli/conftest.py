"""Fixtures for CLI tests."""

from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from arrftercare.config.models import ArrftercareConfig

EVENT_VARIABLES = (
    "radarr_eventtype",
    "radarr_moviefile_path",
    "sonarr_eventtype",
    "sonarr_episodefile_path",
)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def cli_obj() -> dict:
    """Context object with default configuration, bypassing config files."""
    return {"config": ArrftercareConfig()}


@pytest.fixture
def event_env():
    """Build a CliRunner env with only the given event variables set."""

    def _make(**values: str) -> dict:
        env = dict.fromkeys(EVENT_VARIABLES)
        env.update(values)
        return env

    return _make


@pytest.fixture
def mock_toolchain(toolchain):
    with patch(
        "arrftercare.cli.common.resolve_toolchain", return_value=toolchain
    ) as mock_resolve:
        yield mock_resolve


@pytest.fixture
def mock_processor(mock_toolchain):
    """Patch PostProcessor in the CLI; yields the instance mock."""
    with patch("arrftercare.cli.common.PostProcessor") as mock_cls:
        instance = MagicMock()
        mock_cls.return_value = instance
        yield instance
