"""Table pattern resolution against live engine metadata."""

from contextlib import closing
from typing import Callable, List, Sequence

from sqlbridge.common.exceptions import introspection_error
from sqlbridge.connectors.boundary import call_foreign
from sqlbridge.logging import get_logger
from sqlbridge.protocols import Connection
from sqlbridge.types import TableIdentifier, TablePattern
from sqlbridge.utils.decorators import traced

logger = get_logger(__name__)


def _pattern_count(open_connection: Callable[[], Connection], patterns: Sequence[TablePattern]) -> dict:
    return {"sqlbridge.table_patterns": len(patterns)}


def _expand(open_connection: Callable[[], Connection], patterns: Sequence[TablePattern]) -> List[TableIdentifier]:
    resolved: List[TableIdentifier] = []
    with closing(open_connection()) as connection:
        metadata = connection.metadata()
        for pattern in patterns:
            rows = metadata.tables(pattern.catalog or None, pattern.schema or None, pattern.name, None)
            matched = [TableIdentifier(catalog=row[0], schema=row[1], name=row[2]) for row in rows]
            logger.debug(
                "Resolved table pattern",
                extra={"pattern": pattern.name, "matches": len(matched)}
            )
            resolved.extend(matched)
    return resolved


@traced("sqlbridge.introspection.resolve_tables", attribute_getter=_pattern_count)
def resolve_tables(
    open_connection: Callable[[], Connection],
    patterns: Sequence[TablePattern],
) -> List[TableIdentifier]:
    """Expand table patterns into the concrete tables the engine reports.

    All patterns share one connection. Results keep the engine's names and
    order, concatenated in pattern order; a table matched by two patterns
    appears twice.

    Args:
        open_connection: Opens a new connection; called at most once
        patterns: Patterns to expand

    Returns:
        Resolved tables. Empty input returns ``[]`` without connecting.

    Raises:
        BridgeError: Whatever ``open_connection`` raised when it raised a
            BridgeError (``DataSource.new_connection`` raises
            CONNECTION_ERROR); SCHEMA_INTROSPECTION_ERROR for any other
            failure while connecting or listing tables
    """
    if not patterns:
        return []

    def _on_error(exc: BaseException):
        return introspection_error("resolve table patterns", exc)

    return call_foreign(_expand, open_connection, patterns, on_error=_on_error).unwrap()
