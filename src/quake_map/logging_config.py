"""JSON log lines for the map renderer.

The CLI and the dashboard share one root handler. Records from the
pipeline may carry the feed URL, the event count, the load duration and
the pipeline state; those travel as top-level keys of the JSON object.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import TextIO

# Attributes passed through ``extra=`` that are copied into the entry
PIPELINE_FIELDS = ("feed", "event_count", "duration_ms", "state")


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, pipeline fields included when set."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (name, getattr(record, name))
            for name in PIPELINE_FIELDS
            if getattr(record, name, None) is not None
        )
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def configure_logging(level: int | str = logging.INFO, stream: TextIO | None = None) -> None:
    """Route all logging through a single JSON handler.

    Logs go to stderr by default so the CLI summary on stdout stays readable.
    """
    root = logging.getLogger()
    root.setLevel(level)

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(StructuredFormatter())
    root.addHandler(handler)
