"""ODBC connector built on pyodbc.

This is the default bundled connector. The data source URL is an ODBC
connection string (``DRIVER=...;SERVER=...``) and table metadata comes from
the driver's SQLTables catalog function.

Example:
    >>> connector = OdbcConnector()
    >>> connection = connector.connect("DSN=crm;UID=reader", {})
    >>> connection.metadata().schemas()
    [('CRM', 'dbo'), ('CRM', 'sales')]
"""

from contextlib import closing
from typing import Any, List, Mapping, Optional, Sequence, Tuple

import pyodbc

from sqlbridge.logging import get_logger

logger = get_logger(__name__)


class OdbcMetadata:
    """Catalog, schema and table listings through ``cursor.tables``."""

    def __init__(self, connection: "pyodbc.Connection"):
        self._connection = connection

    def _list(self, **filters: Any) -> List[Tuple[Any, ...]]:
        with closing(self._connection.cursor()) as cursor:
            return [tuple(row) for row in cursor.tables(**filters).fetchall()]

    def catalogs(self) -> List[Tuple[Optional[str]]]:
        # SQL_ALL_CATALOGS enumeration
        rows = self._list(catalog="%", schema="", table="")
        return [(row[0],) for row in rows]

    def schemas(self) -> List[Tuple[Optional[str], Optional[str]]]:
        # SQL_ALL_SCHEMAS enumeration
        rows = self._list(catalog="", schema="%", table="")
        return [(row[0], row[1]) for row in rows]

    def tables(
        self,
        catalog: Optional[str],
        schema: Optional[str],
        name_pattern: str,
        kinds: Optional[Sequence[str]] = None,
    ) -> List[Tuple[Optional[str], Optional[str], str, Optional[str]]]:
        table_type = ",".join(kinds) if kinds else None
        rows = self._list(table=name_pattern, catalog=catalog, schema=schema, tableType=table_type)
        return [(row[0], row[1], row[2], row[3]) for row in rows]


class OdbcConnection:
    """A pyodbc connection exposed through the Connection protocol."""

    def __init__(self, connection: "pyodbc.Connection"):
        self._connection = connection

    @property
    def raw(self) -> "pyodbc.Connection":
        return self._connection

    def cursor(self) -> "pyodbc.Cursor":
        return self._connection.cursor()

    def metadata(self) -> OdbcMetadata:
        return OdbcMetadata(self._connection)

    def close(self) -> None:
        self._connection.close()


class OdbcConnector:
    """Opens pyodbc connections from an ODBC connection string."""

    def __init__(self):
        # Each call opens a fresh physical connection.
        pyodbc.pooling = False

    def connect(self, url: str, properties: Mapping[str, Any]) -> OdbcConnection:
        """Open a connection.

        Args:
            url: ODBC connection string
            properties: Extra keyword arguments for ``pyodbc.connect``
        """
        options = {"autocommit": True}
        options.update(properties or {})
        connection = pyodbc.connect(url, **options)
        logger.debug("Opened ODBC connection")
        return OdbcConnection(connection)
