"""JSON log formatting.

One JSON object per line, so a log file written by a hook run can be fed
straight to jq or a log shipper.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord carries; anything else came in through extra=
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName"}

# Set by FileContextFilter; file_path is emitted explicitly below
_FILTER_ATTRS = frozenset({"file_path", "file_tag"})


class JSONFormatter(logging.Formatter):
    """Render records as JSON.

    Keys: timestamp (ISO-8601, UTC), level, logger, message, and, when
    present, context (extra fields plus the current media file) and
    exception.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
        }
        if record.name != "root":
            entry["logger"] = record.name
        entry["message"] = record.getMessage()

        context = _extra_fields(record)
        if context:
            entry["context"] = context
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    fields = {
        key: value
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRS
        and key not in _FILTER_ATTRS
        and not key.startswith("_")
    }
    media_file = getattr(record, "file_path", None)
    if media_file:
        fields["file_path"] = media_file
    return fields
