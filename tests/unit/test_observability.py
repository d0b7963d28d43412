"""Тесты structured logging."""

import json
import logging

from src.infrastructure import JSONFormatter, setup_logging


def _record(msg: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord("src.lifecycle.controller", logging.WARNING, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    def test_base_fields(self):
        payload = json.loads(JSONFormatter().format(_record("Authenticity proof rejected")))
        assert payload["level"] == "WARNING"
        assert payload["logger"] == "src.lifecycle.controller"
        assert payload["message"] == "Authenticity proof rejected"
        assert "timestamp" in payload

    def test_extra_fields_surface(self):
        payload = json.loads(
            JSONFormatter().format(_record("x", request_handle="req-1", error_code="BAD_PROOF"))
        )
        assert payload["request_handle"] == "req-1"
        assert payload["error_code"] == "BAD_PROOF"
        assert "record_id" not in payload


class TestSetupLogging:
    def test_installs_handler(self):
        handler = setup_logging(level="debug", fmt="text")
        try:
            assert handler in logging.root.handlers
            assert logging.root.level == logging.DEBUG
        finally:
            logging.root.removeHandler(handler)
            logging.root.setLevel(logging.WARNING)
