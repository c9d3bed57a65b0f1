"""Constants module for sqlbridge.

This module contains all constant values and enumerations used throughout
the package. It has no dependencies on other sqlbridge modules.

Organization:
    - connector: Connector sourcing modes and defaults
    - dialect: Dialect information keys and metadata queries
    - settings: Option names used in settings files and diagnostics
"""

from sqlbridge.constants.connector import (
    ConnectorSource,
    BUNDLED_SOURCE,
    RESOURCE_SCHEME,
    DEFAULT_PREFIX,
    DEFAULT_BUNDLED_CONNECTOR,
    ARCHIVE_SUFFIXES,
    RESOURCE_PACKAGE,
    ISOLATED_NAMESPACE_PREFIX,
)
from sqlbridge.constants.dialect import (
    SQLINFO_QUERY,
    ID_QUOTE_OPEN_CHAR,
    ID_QUOTE_CLOSE_CHAR,
    SUPPORTS_MULTIPLE_CATALOGS,
    SUPPORTS_MULTIPLE_SCHEMAS,
)
from sqlbridge.constants.settings import (
    PREFIX_OPTION,
    DRIVER_CLASS_OPTION,
    DRIVER_PATH_OPTION,
    JDBC_URL_OPTION,
    TABLES_OPTION,
    LOG_FILE_OPTION,
    ENV_PREFIX,
)

__all__ = [
    # Connector
    "ConnectorSource",
    "BUNDLED_SOURCE",
    "RESOURCE_SCHEME",
    "DEFAULT_PREFIX",
    "DEFAULT_BUNDLED_CONNECTOR",
    "ARCHIVE_SUFFIXES",
    "RESOURCE_PACKAGE",
    "ISOLATED_NAMESPACE_PREFIX",
    # Dialect
    "SQLINFO_QUERY",
    "ID_QUOTE_OPEN_CHAR",
    "ID_QUOTE_CLOSE_CHAR",
    "SUPPORTS_MULTIPLE_CATALOGS",
    "SUPPORTS_MULTIPLE_SCHEMAS",
    # Settings
    "PREFIX_OPTION",
    "DRIVER_CLASS_OPTION",
    "DRIVER_PATH_OPTION",
    "JDBC_URL_OPTION",
    "TABLES_OPTION",
    "LOG_FILE_OPTION",
    "ENV_PREFIX",
]
