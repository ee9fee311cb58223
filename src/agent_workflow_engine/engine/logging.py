"""JSON log output for the engine.

Each record is written as one JSON object per line. The engine's correlation
fields (`workflow_id`, `step_id`, `attempt`) are lifted to top-level keys so a
single run can be followed with a plain key filter; any other `extra` fields
are nested under `extra`.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any, TextIO

CORRELATION_FIELDS: tuple[str, ...] = ("workflow_id", "step_id", "attempt")

# Attributes every record carries; anything else arrived through `extra`.
_STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _STANDARD_ATTRS and not key.startswith("_")
    }


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        fields = _extra_fields(record)
        for key in CORRELATION_FIELDS:
            if key in fields:
                payload[key] = fields.pop(key)
        if fields:
            payload["extra"] = fields

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: str, *, stream: TextIO | None = None) -> None:
    """Send all engine logging to `stream` (stdout by default) as JSON lines."""

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream=stream or sys.stdout)
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)
    root.setLevel(level.upper())

    # httpx stays at INFO or above even when the root runs at DEBUG.
    logging.getLogger("httpx").setLevel(max(root.level, logging.INFO))
