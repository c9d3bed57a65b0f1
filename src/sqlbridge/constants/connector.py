"""Connector-related constants and enumerations.

This module defines how a configured connector locator maps onto one of the
supported sourcing modes, and the defaults applied when settings omit them.
"""

from enum import Enum


BUNDLED_SOURCE = "bundled"
RESOURCE_SCHEME = "resource:"

DEFAULT_PREFIX = "salesforce"
DEFAULT_BUNDLED_CONNECTOR = "sqlbridge.connectors.odbc.OdbcConnector"

ARCHIVE_SUFFIXES = (".zip", ".whl", ".pyz", ".egg")

RESOURCE_PACKAGE = "sqlbridge.resources"
ISOLATED_NAMESPACE_PREFIX = "_sqlbridge_scope_"


class ConnectorSource(str, Enum):
    """Where a connector implementation is loaded from.

    Values:
        BUNDLED: The connector is importable from the running interpreter.
            - Locator: the literal ``"bundled"``
            - Resolution: ``importlib.import_module``

        RESOURCE: The connector ships inside this distribution's
            ``sqlbridge.resources`` package.
            - Locator: ``"resource:<relative path>"``
            - Resolution: isolated import scope

        FILE: The connector is a file on disk (module, package or archive).
            - Locator: a filesystem path
            - Resolution: isolated import scope

    Example:
        >>> ConnectorSource.from_locator("bundled")
        <ConnectorSource.BUNDLED: 'bundled'>
        >>> ConnectorSource.from_locator("resource:drivers/acme.zip")
        <ConnectorSource.RESOURCE: 'resource'>
    """

    BUNDLED = "bundled"
    RESOURCE = "resource"
    FILE = "file"

    @classmethod
    def from_locator(cls, locator: str) -> "ConnectorSource":
        if locator == BUNDLED_SOURCE:
            return cls.BUNDLED
        if locator.startswith(RESOURCE_SCHEME):
            return cls.RESOURCE
        return cls.FILE
