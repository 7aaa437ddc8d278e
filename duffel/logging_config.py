"""Logging setup for applications embedding the client (JSON and text formatters)."""

from __future__ import annotations

import json
import logging
import sys
import traceback
from datetime import datetime, timezone

from duffel import config
from duffel.request_context import get_call_id

# Attributes present on every LogRecord; anything else is an ``extra=`` field.
_STANDARD_RECORD_ATTRS: frozenset[str] = frozenset(
    {
        "args",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)

# ``extra=`` keys the executor attaches to request/response records.
_HTTP_FIELDS: dict[str, str] = {
    "http_method": "method",
    "http_path": "path",
    "http_status": "status",
}


def _http_context(record: logging.LogRecord) -> dict:
    return {
        short: getattr(record, attr)
        for attr, short in _HTTP_FIELDS.items()
        if getattr(record, attr, None) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line.

    Records from the executor carry an ``http`` object (method, path and,
    for responses, status); every line logged during an API call carries
    that call's ``call_id``.
    """

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        entry: dict = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.message,
        }

        call_id = get_call_id()
        if call_id:
            entry["call_id"] = call_id

        http = _http_context(record)
        if http:
            entry["http"] = http

        for key, value in record.__dict__.items():
            if (
                key not in _STANDARD_RECORD_ATTRS
                and key not in _HTTP_FIELDS
                and not key.startswith("_")
            ):
                entry[key] = value

        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = "".join(traceback.format_exception(*record.exc_info))

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """``<ts> LEVEL [call_id] logger - message {METHOD path -> status}``."""

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S")

        call_id = get_call_id()
        cid_prefix = f"[{call_id}] " if call_id else ""
        line = f"{ts} {record.levelname:<8} {cid_prefix}{record.name} - {record.message}"

        http = _http_context(record)
        if http:
            summary = " ".join(str(http[k]) for k in ("method", "path") if k in http)
            if "status" in http:
                summary += f" -> {http['status']}"
            line += f" {{{summary}}}"

        if record.exc_info and record.exc_info[0] is not None:
            line += "\n" + "".join(traceback.format_exception(*record.exc_info))

        return line


def setup_logging(
    log_level: str | None = None,
    log_format: str | None = None,
    logger_name: str = "duffel",
) -> logging.Logger:
    """Attach a stderr handler to the ``duffel`` logger. Safe to call twice.

    Level and format default to ``DUFFEL_LOG_LEVEL`` and ``DUFFEL_LOG_FORMAT``.
    """
    log_level = log_level or config.settings.log_level
    log_format = log_format or config.settings.log_format

    logger = logging.getLogger(logger_name)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    if log_format.lower() == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter())

    logger.addHandler(handler)
    return logger
