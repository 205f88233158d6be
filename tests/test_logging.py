"""Tests for the JSON log formatter."""

import json
import logging
import sys
from datetime import datetime

from libs.observability import JsonTraceFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="cdp-datagen.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="Generated %d events.",
        args=(3,),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonTraceFormatter:
    def test_core_fields(self):
        line = JsonTraceFormatter("datagen-test").format(_record())
        payload = json.loads(line)

        assert payload["level"] == "INFO"
        assert payload["logger"] == "cdp-datagen.test"
        assert payload["message"] == "Generated 3 events."
        assert payload["service"] == "datagen-test"
        assert payload["trace_id"] is None
        assert payload["span_id"] is None
        assert "\n" not in line

    def test_extra_fields_are_included(self):
        payload = json.loads(
            JsonTraceFormatter().format(_record(country="FR", event_type_counts={"search": 2}))
        )
        assert payload["country"] == "FR"
        assert payload["event_type_counts"] == {"search": 2}
        assert "pathname" not in payload
        assert "args" not in payload

    def test_non_serialisable_extra_is_repr(self):
        when = datetime(2024, 1, 1)
        payload = json.loads(JsonTraceFormatter().format(_record(started=when)))
        assert payload["started"] == repr(when)

    def test_exception_is_formatted(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = _record()
            record.exc_info = sys.exc_info()
        payload = json.loads(JsonTraceFormatter().format(record))
        assert "ValueError: boom" in payload["exc_info"]
