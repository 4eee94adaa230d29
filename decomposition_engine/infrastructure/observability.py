"""Structured Logging — one JSON object per line for dispatcher and graph events.

Invariants:
    - Every line carries timestamp (record creation time, UTC), level, logger, message
    - Decomposition context (session_id, action, error_code, problem/component/phase
      ids) copied from the record's extra when present, omitted otherwise
    - LOG_FORMAT=text swaps in a plain one-line format; component summaries stay
      multi-line in both
    - setup_logging is idempotent: calling it again replaces its own handler

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - setup_logging called once on startup via lifespan
"""

import logging
import json
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "session_id", "action", "error_code",
    "problem_id", "component_id", "phase_id",
)
_HANDLER_NAME = "decomposition_engine"


class JSONFormatter(logging.Formatter):
    """Decomposition log record -> JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the engine's root handler, replacing one from an earlier call."""
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s [%(action)s] %(message)s",
            defaults={"action": "-"},
        ))
    for existing in list(logging.root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logging.root.removeHandler(existing)
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
