"""Structured logging — JSON line shape, extra fields and handler replacement."""

import json
import logging

from decomposition_engine.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra):
    record = logging.LogRecord(
        "decomposition_engine.test", logging.INFO, __file__, 1,
        "Action '%s' failed", ("linkComponents",), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_line_carries_decomposition_context():
    line = JSONFormatter().format(_record(
        action="linkComponents", session_id="s1", error_code="CYCLE_DETECTED",
    ))
    log = json.loads(line)
    assert log["message"] == "Action 'linkComponents' failed"
    assert log["level"] == "INFO"
    assert log["action"] == "linkComponents"
    assert log["session_id"] == "s1"
    assert log["error_code"] == "CYCLE_DETECTED"


def test_json_line_omits_missing_context():
    log = json.loads(JSONFormatter().format(_record()))
    assert "component_id" not in log
    assert "session_id" not in log


def test_setup_logging_replaces_its_own_handler():
    before = list(logging.root.handlers)
    level = logging.root.level
    try:
        first = setup_logging("DEBUG", "json")
        second = setup_logging("WARNING", "text")
        assert first not in logging.root.handlers
        assert second in logging.root.handlers
        assert logging.root.level == logging.WARNING
    finally:
        logging.root.handlers = before
        logging.root.setLevel(level)


def test_text_format_fills_missing_action():
    level = logging.root.level
    handler = setup_logging("INFO", "text")
    try:
        assert "[-]" in handler.formatter.format(_record())
    finally:
        logging.root.removeHandler(handler)
        logging.root.setLevel(level)
