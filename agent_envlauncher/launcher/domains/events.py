"""Structured event logging for launcher runs."""
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Optional, TextIO

EVENT_LOGGER_NAME = "agent_envlauncher.events"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class JSONFormatter(logging.Formatter):
    """Render log records as one JSON object per line.

    Output shape: {"timestamp", "level", "message", "data"}; ``data`` is
    omitted when the record carries none.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec="seconds"),
            "level": record.levelname.lower(),
            "message": record.getMessage(),
        }
        data = getattr(record, "data", None)
        if data is not None:
            entry["data"] = data
        return json.dumps(entry, default=str)


class LoggingEventSink:
    """Event sink that forwards events to a standard library logger."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(EVENT_LOGGER_NAME)

    def record(self, level: str, message: str, data: Optional[Any] = None) -> None:
        self.logger.log(_LEVELS.get(level, logging.INFO), message, extra={"data": data})


def configure_event_logging(stream: Optional[TextIO] = None, level: str = "INFO") -> logging.Logger:
    """
    Attach a JSON line handler to the event logger.

    Args:
        stream: Destination stream (defaults to stderr)
        level: Logging level name, e.g. "INFO" or "ERROR"

    Returns:
        The configured event logger
    """
    logger = logging.getLogger(EVENT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)
    logger.setLevel(level.upper())
    # Events are emitted once; keep them out of the root logger's plain-text handler
    logger.propagate = False
    return logger
