import json
import logging
import sys

from proptrack.adapters.logging_utils import JsonLogFormatter, get_logger


def _record(msg, context=None, exc_info=None):
    record = logging.LogRecord("proptrack.test", logging.INFO, __file__, 1, msg, None, exc_info)
    if context is not None:
        record.context = context
    return record


def test_context_is_merged_and_serialized():
    line = JsonLogFormatter().format(_record("mirr undefined", {"periods": 3, "as_of": object()}))
    payload = json.loads(line)
    assert payload["service"] == "proptrack"
    assert payload["message"] == "mirr undefined"
    assert payload["periods"] == 3
    assert isinstance(payload["as_of"], str)


def test_context_cannot_override_standard_fields():
    payload = json.loads(JsonLogFormatter().format(_record("hi", {"level": "FAKE", "message": "x"})))
    assert payload["level"] == "INFO"
    assert payload["message"] == "hi"


def test_exception_is_attached():
    try:
        raise ValueError("boom")
    except ValueError:
        payload = json.loads(JsonLogFormatter().format(_record("failed", exc_info=sys.exc_info())))
    assert "ValueError: boom" in payload["exc"]


def test_get_logger_is_idempotent():
    a = get_logger("proptrack.test.once", level="DEBUG")
    b = get_logger("proptrack.test.once")
    assert a is b
    assert len(a.handlers) == 1
    assert a.level == logging.DEBUG
    assert a.propagate is False
