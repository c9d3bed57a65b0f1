"""sqlbridge: connector bootstrap, dialect discovery and table resolution.

Quick Start:
    >>> import sys
    >>> from sqlbridge import DataSource, setup_logging
    >>>
    >>> source = DataSource.from_settings_file("bridge.properties")
    >>> setup_logging(log_file=source.log_file)
    >>> source.validate(sys.stderr)
    True
    >>> source.get_tables()
    [TableIdentifier(catalog='CRM', schema_='dbo', name='Account')]
"""

from sqlbridge.__version__ import __version__
from sqlbridge.common.exceptions import BridgeError, ErrorCode
from sqlbridge.datasource import DataSource
from sqlbridge.logging import get_logger, setup_logging
from sqlbridge.patterns import parse_table_patterns
from sqlbridge.settings import BridgeSettings, get_settings, load_settings
from sqlbridge.types import DialectCapabilities, ScopeDefaults, TableIdentifier, TablePattern

__all__ = [
    "__version__",
    "BridgeError",
    "BridgeSettings",
    "DataSource",
    "DialectCapabilities",
    "ErrorCode",
    "ScopeDefaults",
    "TableIdentifier",
    "TablePattern",
    "get_logger",
    "get_settings",
    "load_settings",
    "parse_table_patterns",
    "setup_logging",
]
