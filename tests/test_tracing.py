import json
import logging

from ops.structured_logger import JsonFormatter
from ops.tracing import bind_request_id, current_request_id, release_request_id


def _record(**extra):
    record = logging.LogRecord("greenlink.test", logging.INFO, __file__, 1, "route_assigned", None, None)
    for k, v in extra.items():
        setattr(record, k, v)
    return record


def test_request_id_is_scoped():
    token = bind_request_id("rid-1")
    try:
        assert current_request_id() == "rid-1"
    finally:
        release_request_id(token)
    assert current_request_id() == ""


def test_formatter_merges_extra_and_request_id():
    token = bind_request_id("rid-2")
    try:
        line = JsonFormatter().format(_record(extra={"ward": 3, "collector_id": "c-ravi"}))
    finally:
        release_request_id(token)
    payload = json.loads(line)
    assert payload["message"] == "route_assigned"
    assert payload["severity"] == "INFO"
    assert payload["request_id"] == "rid-2"
    assert payload["ward"] == 3


def test_formatter_serializes_dates():
    from datetime import date

    payload = json.loads(JsonFormatter().format(_record(extra={"date": date(2025, 3, 10)})))
    assert payload["date"] == "2025-03-10"
