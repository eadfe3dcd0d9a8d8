from __future__ import annotations

import json
import logging

from main import JsonFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("studio_api", logging.INFO, __file__, 1, "GET %s", ("/health",), None)
    for name, value in extra.items():
        setattr(record, name, value)
    return record


def test_json_formatter_includes_request_fields() -> None:
    line = JsonFormatter().format(
        _record(endpoint="/health", method="GET", status=200, latency_ms=1.5)
    )
    payload = json.loads(line)

    assert payload["message"] == "GET /health"
    assert payload["logger"] == "studio_api"
    assert payload["level"] == "INFO"
    assert payload["endpoint"] == "/health"
    assert payload["status"] == 200
    assert payload["latency_ms"] == 1.5


def test_json_formatter_omits_fields_not_set() -> None:
    payload = json.loads(JsonFormatter().format(_record()))

    assert set(payload) == {"timestamp", "level", "logger", "message"}
