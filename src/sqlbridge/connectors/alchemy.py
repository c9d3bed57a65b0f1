"""SQLAlchemy connector.

The data source URL is a SQLAlchemy URL (``sqlite:///crm.db``,
``mssql+pyodbc://...``). Catalog, schema and table listings come from the
SQLAlchemy inspector. The inspector has no catalog level, so ``catalogs()``
is empty and listed tables carry a ``None`` catalog. A table lookup that names
a catalog therefore finds nothing.

Table name and schema filters use the usual metadata wildcard syntax:
``%`` matches any run of characters and ``_`` matches one character.
"""

import re
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.pool import NullPool

from sqlbridge.logging import get_logger

logger = get_logger(__name__)

TABLE_KIND = "TABLE"
VIEW_KIND = "VIEW"


def like_to_regex(pattern: str) -> "re.Pattern[str]":
    """Compile a LIKE-style wildcard pattern into an anchored regex."""
    parts = []
    for char in pattern:
        if char == "%":
            parts.append(".*")
        elif char == "_":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.DOTALL)


def _matches(pattern: Optional[str], value: Optional[str]) -> bool:
    if pattern is None:
        return True
    return like_to_regex(pattern).fullmatch(value or "") is not None


class AlchemyMetadata:
    """Metadata listings through ``sqlalchemy.inspect``."""

    def __init__(self, connection: Connection):
        self._inspector = inspect(connection)

    def catalogs(self) -> List[Tuple[Optional[str]]]:
        return []

    def schemas(self) -> List[Tuple[Optional[str], Optional[str]]]:
        return [(None, schema) for schema in self._inspector.get_schema_names()]

    def tables(
        self,
        catalog: Optional[str],
        schema: Optional[str],
        name_pattern: str,
        kinds: Optional[Sequence[str]] = None,
    ) -> List[Tuple[Optional[str], Optional[str], str, Optional[str]]]:
        # Every table here has no catalog, so only None or "" can match.
        if catalog:
            return []
        wanted = {kind.upper() for kind in kinds} if kinds else {TABLE_KIND, VIEW_KIND}
        rows: List[Tuple[Optional[str], Optional[str], str, Optional[str]]] = []
        for schema_name in self._inspector.get_schema_names():
            if not _matches(schema, schema_name):
                continue
            listed: List[Tuple[str, str]] = []
            if TABLE_KIND in wanted:
                listed += [(t, TABLE_KIND) for t in self._inspector.get_table_names(schema=schema_name)]
            if VIEW_KIND in wanted:
                listed += [(v, VIEW_KIND) for v in self._inspector.get_view_names(schema=schema_name)]
            for table_name, kind in sorted(listed):
                if _matches(name_pattern, table_name):
                    rows.append((None, schema_name, table_name, kind))
        return rows


class AlchemyConnection:
    """A SQLAlchemy connection exposed through the Connection protocol.

    ``cursor()`` hands out a DBAPI cursor of the underlying driver, so raw
    statements run without SQLAlchemy's text() wrapping.
    """

    def __init__(self, engine: Engine, connection: Connection):
        self._engine = engine
        self._connection = connection

    @property
    def raw(self) -> Connection:
        return self._connection

    def cursor(self) -> Any:
        return self._connection.connection.cursor()

    def metadata(self) -> AlchemyMetadata:
        return AlchemyMetadata(self._connection)

    def close(self) -> None:
        try:
            self._connection.close()
        finally:
            self._engine.dispose()


class AlchemyConnector:
    """Opens connections from a SQLAlchemy URL.

    ``properties`` are handed to the DBAPI driver as ``connect_args``.
    Pooling is disabled; every ``connect`` opens and owns a new engine.
    """

    def connect(self, url: str, properties: Mapping[str, Any]) -> AlchemyConnection:
        engine = create_engine(url, poolclass=NullPool, connect_args=dict(properties or {}))
        try:
            connection = engine.connect()
        except Exception:
            engine.dispose()
            raise
        logger.debug("Opened SQLAlchemy connection", extra={"dialect": engine.dialect.name})
        return AlchemyConnection(engine, connection)
