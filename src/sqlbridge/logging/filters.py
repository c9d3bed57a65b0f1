"""Logging filters for context injection.

This module provides filters that inject context variables into log records,
so every line written while bootstrapping a data source names the source it
belongs to.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Optional

from sqlbridge.__version__ import __version__

data_source_var: ContextVar[Optional[str]] = ContextVar("data_source", default=None)
connector_var: ContextVar[Optional[str]] = ContextVar("connector", default=None)


class ContextFilter(logging.Filter):
    """Logging filter that adds context variables to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Add context variables to the log record.

        Args:
            record: Log record to enhance

        Returns:
            Always True (doesn't filter out any records)
        """
        setattr(record, "data_source", data_source_var.get())
        setattr(record, "connector", connector_var.get())
        setattr(record, "sdk_name", "sqlbridge")
        setattr(record, "sdk_version", __version__)

        return True


def set_logging_context(
    data_source: Optional[str] = None,
    connector: Optional[str] = None,
) -> None:
    """Set data source context variables."""
    if data_source is not None:
        data_source_var.set(data_source)
    if connector is not None:
        connector_var.set(connector)


def clear_logging_context() -> None:
    """Clear all data source context variables."""
    data_source_var.set(None)
    connector_var.set(None)
