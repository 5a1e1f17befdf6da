"""Tests for the JSON log formatter."""

import io
import json
import logging

from quake_map.logging_config import StructuredFormatter, configure_logging


def _record(**extra):
    record = logging.LogRecord(
        name="quake_map.pipeline", level=logging.INFO, pathname=__file__, lineno=1,
        msg="Feed loaded %s", args=("ok",), exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    def test_base_fields(self):
        entry = json.loads(StructuredFormatter().format(_record()))
        assert entry["level"] == "INFO"
        assert entry["logger"] == "quake_map.pipeline"
        assert entry["message"] == "Feed loaded ok"
        assert "feed" not in entry

    def test_structured_fields(self):
        entry = json.loads(StructuredFormatter().format(
            _record(feed="https://example.test/feed", event_count=3, state="ready"),
        ))
        assert entry["feed"] == "https://example.test/feed"
        assert entry["event_count"] == 3
        assert entry["state"] == "ready"


class TestConfigureLogging:
    def test_single_json_handler_on_stream(self):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        stream = io.StringIO()
        try:
            configure_logging("DEBUG", stream=stream)
            logging.getLogger("quake_map.test").info(
                "Total earthquakes: %d", 2, extra={"event_count": 2},
            )
            assert len(root.handlers) == 1
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
        entry = json.loads(stream.getvalue().strip())
        assert entry["message"] == "Total earthquakes: 2"
        assert entry["event_count"] == 2
