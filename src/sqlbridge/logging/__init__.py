"""Logging infrastructure for sqlbridge.

This module provides structured JSON logging with data-source context
stamped on every record.
"""

from sqlbridge.logging.filters import ContextFilter, set_logging_context, clear_logging_context
from sqlbridge.logging.logger import BridgeJsonFormatter, get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "BridgeJsonFormatter",
    "ContextFilter",
    "set_logging_context",
    "clear_logging_context",
]
