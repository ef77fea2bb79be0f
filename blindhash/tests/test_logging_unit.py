"""Unit coverage for structured logging utilities."""

from __future__ import annotations

import io
import json
import logging

from blindhash.base.log_support import JsonFormatter
from blindhash.base.logging import (
    LogContext,
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
)


def test_get_logger_env_overrides_level(monkeypatch, capsys):
    monkeypatch.setenv("BLINDHASH_LOG_LEVEL", "ERROR")
    logger = get_logger(name="blindhash.test", json_mode=True, level=logging.DEBUG)
    logger.info("hello")
    assert capsys.readouterr().err == ""
    logger.error("fail")
    data = json.loads(capsys.readouterr().err.strip())
    assert data["level"] == "ERROR"
    assert data["logger"] == "blindhash.test"


def test_log_event_drops_none_and_merges_context(capsys):
    logger = get_logger(name="blindhash.test2")
    log_event(logger, "config.fetch.ok", LogContext(app_id="app-1"), servers=3, missing=None)
    data = json.loads(capsys.readouterr().err.strip())
    assert data["event"] == "config.fetch.ok"
    assert data["app_id"] == "app-1"
    assert data["servers"] == 3
    assert "missing" not in data


def test_normalized_log_event_includes_required_keys(capsys):
    logger = get_logger(name="blindhash.test3")
    ctx = LogContext(app_id="app-1", request_id="r1")
    normalized_log_event(
        logger,
        "salt.attempt",
        ctx,
        phase="salt",
        attempt=0,
        host="a.test",
        outcome="success",
        extra_field=123,
        outcome_override="ignored",
    )
    payload = json.loads(capsys.readouterr().err.strip())
    for k in ("phase", "attempt", "host", "outcome", "latency_ms"):
        assert k in payload
    assert payload["latency_ms"] is None
    assert "error_code" not in payload
    assert payload["extra_field"] == 123
    assert payload["request_id"] == "r1"


def test_json_formatter_hoists_json_message():
    formatter = JsonFormatter()
    record = logging.LogRecord("blindhash", logging.INFO, __file__, 1, json.dumps({"event": "x", "n": 1}), None, None)
    data = json.loads(formatter.format(record))
    assert data["event"] == "x" and data["n"] == 1


def test_configure_logger_file_handler(tmp_path):
    path = tmp_path / "logs" / "client.log"
    logger = configure_logger(level="DEBUG", file_path=str(path))
    try:
        log_event(logger, "stats.tick", hosts=["a"])
        for h in logger.handlers:
            h.flush()
        line = path.read_text(encoding="utf-8").strip().splitlines()[-1]
        assert json.loads(line)["event"] == "stats.tick"
    finally:
        configure_logger(level="INFO", file_path=None)
    assert not any(getattr(h, "_blindhash_file_handler", False) for h in logger.handlers)


def test_get_logger_recovers_from_closed_console_stream(capsys):
    base = get_logger()
    handler = next(h for h in base.handlers if getattr(h, "_blindhash_console_handler", False))
    stale = io.StringIO()
    handler.setStream(stale)
    stale.close()

    logger = get_logger("blindhash.test4")
    log_event(logger, "client.start", hosts=["a.test"])

    assert handler not in base.handlers
    assert json.loads(capsys.readouterr().err.strip())["event"] == "client.start"


def test_json_formatter_keeps_plain_text_and_header():
    formatter = JsonFormatter()
    plain = logging.LogRecord("blindhash", logging.WARNING, __file__, 1, "{not json", None, None)
    assert json.loads(formatter.format(plain))["msg"] == "{not json"

    payload = json.dumps({"event": "stats.tick", "level": "bogus", "logger": "other"})
    record = logging.LogRecord("blindhash.stats", logging.INFO, __file__, 1, payload, None, None)
    data = json.loads(formatter.format(record))
    assert data["event"] == "stats.tick"
    assert (data["level"], data["logger"]) == ("INFO", "blindhash.stats")
    assert "msg" not in data
