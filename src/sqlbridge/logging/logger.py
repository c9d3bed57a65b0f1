"""Core logging setup and configuration.

This module wires structured JSON logging with context propagation and
OpenTelemetry correlation while keeping configuration declarative via
``logging.config.dictConfig``.
"""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Set

from opentelemetry import trace


def _build_reserved_keys() -> Set[str]:
    """Collect standard ``LogRecord`` attributes to avoid duplicating them."""
    probe = logging.LogRecord(
        name="sqlbridge.probe",
        level=logging.INFO,
        pathname=__file__,
        lineno=0,
        msg="",
        args=(),
        exc_info=None,
    )
    reserved = set(probe.__dict__.keys())
    reserved.update({"asctime", "message"})
    return reserved


_RESERVED_LOG_RECORD_KEYS = _build_reserved_keys()


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class BridgeJsonFormatter(logging.Formatter):
    """JSON formatter that enriches log entries with context and trace data."""

    def format(self, record: logging.LogRecord) -> str:
        log_record: Dict[str, Any] = {}

        for key, value in record.__dict__.items():
            if key not in _RESERVED_LOG_RECORD_KEYS and key not in log_record:
                log_record[key] = value

        log_record["timestamp"] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["message"] = record.getMessage()

        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            log_record["trace_id"] = format(span_context.trace_id, "032x")
            log_record["span_id"] = format(span_context.span_id, "016x")

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record, default=str)


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Configure structured logging backed by ``logging.config.dictConfig``.

    Records go to stderr; stdout is left alone because the protocol server
    above this layer may own it. When ``log_file`` is given (the ``LogFile``
    setting) records are also appended to that file.

    Args:
        level: Base log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path of a file to append JSON records to.
    """
    handlers: Dict[str, Any] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": level.upper(),
            "formatter": "bridge_json",
            "filters": ["bridge_context"],
            "stream": "ext://sys.stderr",
        }
    }
    if log_file:
        handlers["file"] = {
            "class": "logging.FileHandler",
            "level": level.upper(),
            "formatter": "bridge_json",
            "filters": ["bridge_context"],
            "filename": log_file,
            "encoding": "utf-8",
        }

    config_dict: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "bridge_json": {
                "()": "sqlbridge.logging.logger.BridgeJsonFormatter",
            }
        },
        "filters": {
            "bridge_context": {
                "()": "sqlbridge.logging.filters.ContextFilter",
            }
        },
        "handlers": handlers,
        "root": {
            "level": level.upper(),
            "handlers": list(handlers),
        },
    }

    logging.config.dictConfig(config_dict)
