"""Structured Logging - JSON formatter fields and idempotent setup."""

import json
import logging

from vocabulary_api.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "vocabulary_api.test", logging.INFO, __file__, 1, "Looking up word", None, None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_core_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "INFO"
    assert log["logger"] == "vocabulary_api.test"
    assert log["message"] == "Looking up word"
    assert "timestamp" in log


def test_json_formatter_surfaces_known_extras_only():
    log = json.loads(JSONFormatter().format(_record(word="hello", secret="x")))
    assert log["word"] == "hello"
    assert "secret" not in log


def test_json_formatter_includes_exception():
    try:
        raise ValueError("bad")
    except ValueError:
        import sys
        record = _record()
        record.exc_info = sys.exc_info()
    log = json.loads(JSONFormatter().format(record))
    assert "ValueError: bad" in log["exception"]


def test_setup_logging_does_not_duplicate_handler():
    before = list(logging.root.handlers)
    original_level = logging.root.level
    try:
        setup_logging("DEBUG", "text")
        setup_logging("DEBUG", "json")
        ours = [h for h in logging.root.handlers if h.get_name() == "vocabulary_api"]
        assert len(ours) == 1
        assert isinstance(ours[0].formatter, JSONFormatter)
        assert logging.root.level == logging.DEBUG
    finally:
        for h in list(logging.root.handlers):
            if h not in before:
                logging.root.removeHandler(h)
        logging.root.setLevel(original_level)
