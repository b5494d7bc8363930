"""Tests for Radarr/Sonarr event reading."""

from pathlib import Path

from arrftercare.events import EventKind, EventSource, read_event


class TestEventKind:
    """Tests for EventKind.from_event_type."""

    def test_download(self) -> None:
        assert EventKind.from_event_type("Download") is EventKind.DOWNLOAD

    def test_test(self) -> None:
        assert EventKind.from_event_type("Test") is EventKind.TEST

    def test_other_values(self) -> None:
        for value in ("Grab", "Rename", "MovieDelete", "download", "TEST"):
            assert EventKind.from_event_type(value) is EventKind.OTHER


class TestReadEvent:
    """Tests for read_event."""

    def test_no_variables_returns_none(self) -> None:
        assert read_event({}) is None

    def test_empty_event_type_returns_none(self) -> None:
        assert read_event({"radarr_eventtype": "", "sonarr_eventtype": ""}) is None

    def test_radarr_download(self) -> None:
        event = read_event(
            {
                "radarr_eventtype": "Download",
                "radarr_moviefile_path": "/movies/Heat (1995)/Heat.mkv",
            }
        )

        assert event is not None
        assert event.source is EventSource.RADARR
        assert event.is_download
        assert event.media_path == Path("/movies/Heat (1995)/Heat.mkv")

    def test_sonarr_download(self) -> None:
        event = read_event(
            {
                "sonarr_eventtype": "Download",
                "sonarr_episodefile_path": "/tv/Show/S01E01.mkv",
            }
        )

        assert event.source is EventSource.SONARR
        assert event.media_path == Path("/tv/Show/S01E01.mkv")

    def test_radarr_takes_precedence(self) -> None:
        event = read_event(
            {
                "radarr_eventtype": "Test",
                "sonarr_eventtype": "Download",
                "sonarr_episodefile_path": "/tv/a.mkv",
            }
        )

        assert event.source is EventSource.RADARR
        assert event.event_kind is EventKind.TEST
        assert event.media_path is None

    def test_sonarr_used_when_radarr_empty(self) -> None:
        event = read_event({"radarr_eventtype": "", "sonarr_eventtype": "Grab"})

        assert event.source is EventSource.SONARR
        assert event.event_kind is EventKind.OTHER
        assert event.raw_event_type == "Grab"

    def test_download_without_path(self) -> None:
        event = read_event(
            {"radarr_eventtype": "Download", "radarr_moviefile_path": ""}
        )

        assert event.is_download
        assert event.media_path is None
