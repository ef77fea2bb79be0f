"""JSON logging formatter used by the blindhash logging setup.

:class:`JsonFormatter` renders one JSON object per record. Messages produced
by ``log_event`` (a JSON object carrying an ``event`` key) are flattened into
the line so events are not double-encoded; any other message is kept as text.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

ISO = "%Y-%m-%dT%H:%M:%S.%fZ"

_RECORD_INTERNALS = frozenset(
    (
        "msg",
        "args",
        "levelname",
        "levelno",
        "name",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
    )
)


def _decode_event(message: str) -> Optional[Dict[str, Any]]:
    """Return the payload of a ``log_event`` message, or ``None`` for plain text."""
    if not message.startswith("{"):
        return None
    try:
        parsed = json.loads(message)
    except ValueError:
        return None
    if isinstance(parsed, dict) and "event" in parsed:
        return parsed
    return None


class JsonFormatter(logging.Formatter):
    """Lightweight JSON formatter for structured logs.

    Each line starts with the record header (timestamp, level, logger). Event
    messages contribute their keys directly; plain messages land in ``msg``.
    Extra attributes attached to the record are merged last.
    """

    def format(self, record: logging.LogRecord) -> str:
        line: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).strftime(ISO),
            "level": record.levelname,
            "logger": record.name,
        }
        message = record.getMessage()
        event = _decode_event(message)
        if event is None:
            line["msg"] = message
        else:
            # Event keys never shadow the record header.
            line.update((k, v) for k, v in event.items() if k not in line)
        if record.exc_info:
            line["exc"] = self.formatException(record.exc_info)
        for k, v in record.__dict__.items():
            if k.startswith("_") or k in _RECORD_INTERNALS or k in line:
                continue
            line[k] = v
        return json.dumps(line, ensure_ascii=False, default=str)


__all__ = ["JsonFormatter", "ISO"]
