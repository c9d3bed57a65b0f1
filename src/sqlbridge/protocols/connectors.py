"""Connector protocol definitions.

A connector is the pluggable component that knows how to reach one kind of
data source. This package never assumes anything about a connector beyond
these protocols: it can open connections, and each connection can run a
statement and answer catalog/schema/table metadata lookups.
"""

from typing import Any, Iterable, Mapping, Optional, Protocol, Sequence, runtime_checkable


@runtime_checkable
class Cursor(Protocol):
    """The subset of a DB-API 2.0 cursor this package relies on."""

    def execute(self, operation: str, *args: Any) -> Any:
        ...

    def fetchall(self) -> Sequence[Sequence[Any]]:
        ...

    def close(self) -> None:
        ...


@runtime_checkable
class MetadataProvider(Protocol):
    """Catalog, schema and table listings for one open connection.

    Rows are positional. Every listing starts with the same leading columns
    so that callers can read them without knowing the driver:

    - ``catalogs()`` rows start with ``(catalog,)``
    - ``schemas()`` rows start with ``(catalog, schema)``
    - ``tables()`` rows start with ``(catalog, schema, name, kind)``

    Any trailing columns are ignored.
    """

    def catalogs(self) -> Iterable[Sequence[Any]]:
        """List catalogs visible to the connection."""
        ...

    def schemas(self) -> Iterable[Sequence[Any]]:
        """List schemas visible to the connection."""
        ...

    def tables(
        self,
        catalog: Optional[str],
        schema: Optional[str],
        name_pattern: str,
        kinds: Optional[Sequence[str]] = None,
    ) -> Iterable[Sequence[Any]]:
        """List tables matching the given filters.

        Args:
            catalog: Catalog to match, or None for any catalog
            schema: Schema to match, or None for any schema
            name_pattern: Name pattern in the engine's wildcard syntax
            kinds: Object kinds to include, or None for every queryable kind
        """
        ...


@runtime_checkable
class Connection(Protocol):
    """An open connection produced by a connector."""

    def cursor(self) -> Cursor:
        """Return a DB-API style cursor for statement execution."""
        ...

    def metadata(self) -> MetadataProvider:
        """Return the metadata entry point for this connection."""
        ...

    def close(self) -> None:
        ...


@runtime_checkable
class Connector(Protocol):
    """Produces connections given a connection string and a property set."""

    def connect(self, url: str, properties: Mapping[str, str]) -> Connection:
        ...
