"""Tests for JSON and text log formatters."""

from __future__ import annotations

import json
import logging
import sys

import httpx

from duffel.config import Settings
from duffel.logging_config import JSONFormatter, TextFormatter, setup_logging
from duffel.request_context import call_id_var


def _make_record(msg: str = "hello", level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord(
        name="duffel.executor",
        level=level,
        pathname="executor.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


def test_json_output_structure():
    data = json.loads(JSONFormatter().format(_make_record("GET /air/offers")))
    assert data["level"] == "INFO"
    assert data["logger"] == "duffel.executor"
    assert data["message"] == "GET /air/offers"
    assert "timestamp" in data


def test_json_includes_call_id():
    token = call_id_var.set("abc123def456")
    try:
        data = json.loads(JSONFormatter().format(_make_record("with id")))
        assert data["call_id"] == "abc123def456"
    finally:
        call_id_var.reset(token)


def test_json_excludes_empty_call_id():
    token = call_id_var.set("")
    try:
        data = json.loads(JSONFormatter().format(_make_record("no id")))
        assert "call_id" not in data
    finally:
        call_id_var.reset(token)


def test_json_extra_fields():
    record = _make_record("slept")
    record.delay_seconds = 1.5
    data = json.loads(JSONFormatter().format(record))
    assert data["delay_seconds"] == 1.5


def test_json_exception_formatting():
    try:
        raise ValueError("boom")
    except ValueError:
        record = _make_record("error")
        record.exc_info = sys.exc_info()
    data = json.loads(JSONFormatter().format(record))
    assert "ValueError: boom" in data["exception"]


def test_text_format_with_call_id():
    token = call_id_var.set("aabbccdd1122")
    try:
        output = TextFormatter().format(_make_record("hello text"))
        assert "[aabbccdd1122]" in output
        assert output.endswith("duffel.executor - hello text")
    finally:
        call_id_var.reset(token)


def test_text_format_without_call_id():
    token = call_id_var.set("")
    try:
        output = TextFormatter().format(_make_record("no cid"))
        assert "[" not in output
        assert "no cid" in output
    finally:
        call_id_var.reset(token)


def test_setup_logging_installs_single_handler():
    logger = setup_logging("DEBUG", "json")
    setup_logging("DEBUG", "json")
    assert logger.name == "duffel"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, JSONFormatter)


def test_setup_logging_unknown_level_defaults_to_info():
    logger = setup_logging("chatty", "text")
    assert logger.level == logging.INFO
    assert isinstance(logger.handlers[0].formatter, TextFormatter)


def _http_record(msg: str = "GET https://api.duffel.com/air/offers -> 200") -> logging.LogRecord:
    record = _make_record(msg, level=logging.DEBUG)
    record.http_method = "GET"
    record.http_path = "/air/offers"
    record.http_status = 200
    return record


def test_json_groups_http_fields():
    data = json.loads(JSONFormatter().format(_http_record()))
    assert data["http"] == {"method": "GET", "path": "/air/offers", "status": 200}
    assert "http_method" not in data
    assert "http_status" not in data


def test_text_appends_http_summary():
    output = TextFormatter().format(_http_record())
    assert output.endswith("{GET /air/offers -> 200}")


def test_text_request_summary_has_no_status():
    record = _make_record("POST", level=logging.DEBUG)
    record.http_method = "POST"
    record.http_path = "/air/orders"
    assert TextFormatter().format(record).endswith("{POST /air/orders}")


def test_setup_logging_defaults_come_from_settings(monkeypatch):
    monkeypatch.setattr(
        "duffel.config.settings", Settings(_env_file=None, log_level="WARNING", log_format="json")
    )
    logger = setup_logging()
    assert logger.level == logging.WARNING
    assert isinstance(logger.handlers[0].formatter, JSONFormatter)


def test_executor_records_carry_http_fields(make_client, caplog):
    caplog.set_level(logging.DEBUG, logger="duffel")
    client = make_client(lambda req: httpx.Response(204))
    client.delete_payment_card_record("tcd_1")
    responses = [r for r in caplog.records if getattr(r, "http_status", None) is not None]
    assert responses
    assert responses[-1].http_method == "DELETE"
    assert responses[-1].http_path == "/vault/cards/tcd_1"
    assert responses[-1].http_status == 204
