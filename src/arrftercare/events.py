"""Radarr/Sonarr custom-script event handling.

Radarr and Sonarr invoke custom scripts with no arguments and describe the
event entirely through environment variables. Only "Download" events (a
file was imported) lead to any work; "Test" is sent when the connection is
saved in the UI, and every other event kind is ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from arrftercare.config.env import EnvReader

logger = logging.getLogger(__name__)


class EventSource(Enum):
    """Media manager that sent the event."""

    RADARR = "radarr"
    SONARR = "sonarr"


class EventKind(Enum):
    """Kind of event, as far as post-processing is concerned."""

    DOWNLOAD = "Download"
    TEST = "Test"
    OTHER = "other"

    @classmethod
    def from_event_type(cls, value: str) -> EventKind:
        """Map a raw *_eventtype value to an EventKind (exact match)."""
        if value == cls.DOWNLOAD.value:
            return cls.DOWNLOAD
        if value == cls.TEST.value:
            return cls.TEST
        return cls.OTHER


# (source, event type variable, media path variable), in precedence order
_EVENT_VARIABLES: tuple[tuple[EventSource, str, str], ...] = (
    (EventSource.RADARR, "radarr_eventtype", "radarr_moviefile_path"),
    (EventSource.SONARR, "sonarr_eventtype", "sonarr_episodefile_path"),
)


@dataclass(frozen=True)
class EventDescriptor:
    """An event received from a media manager."""

    source: EventSource
    event_kind: EventKind
    raw_event_type: str
    media_path: Path | None = None
    """File path from the event, None if the variable was unset or empty."""

    @property
    def is_download(self) -> bool:
        """True if this event should trigger post-processing."""
        return self.event_kind is EventKind.DOWNLOAD


def read_event(env: Mapping[str, str] | None = None) -> EventDescriptor | None:
    """Build an EventDescriptor from Radarr/Sonarr environment variables.

    Radarr variables take precedence when both are present.

    Args:
        env: Environment mapping (None uses os.environ).

    Returns:
        EventDescriptor, or None if no event type variable is set.
    """
    reader = EnvReader(env)
    for source, type_var, path_var in _EVENT_VARIABLES:
        event_type = reader.get_str(type_var)
        if not event_type:
            continue

        raw_path = reader.get_str(path_var)
        descriptor = EventDescriptor(
            source=source,
            event_kind=EventKind.from_event_type(event_type),
            raw_event_type=event_type,
            media_path=Path(raw_path) if raw_path else None,
        )
        logger.debug(
            "Received %s event %s",
            source.value,
            event_type,
            extra={"media_path": raw_path},
        )
        return descriptor

    return None
