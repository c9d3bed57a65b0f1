"""Default catalog/schema resolution.

The scope used for unqualified table references depends on what the engine
can hold:

    - a single catalog with a single schema: both come from the first schema row
    - a single catalog with many schemas: the catalog comes from the first
      catalog row, the schema stays unset
    - many catalogs: neither is set

"First" means the first row the engine yields; no sorting is applied.
"""

from typing import Any, Iterable, Optional, Sequence

from sqlbridge.logging import get_logger
from sqlbridge.protocols import Connection
from sqlbridge.types import DialectCapabilities, ScopeDefaults
from sqlbridge.utils.decorators import traced

logger = get_logger(__name__)


def _first_row(rows: Iterable[Sequence[Any]]) -> Optional[Sequence[Any]]:
    return next(iter(rows), None)


@traced("sqlbridge.introspection.resolve_scope_defaults")
def resolve_scope_defaults(connection: Connection, capabilities: DialectCapabilities) -> ScopeDefaults:
    """Pick the default catalog and schema for an open connection.

    Args:
        connection: Open connection the capabilities were read from
        capabilities: Dialect capabilities of the engine

    Returns:
        ScopeDefaults, possibly with both parts unset
    """
    if capabilities.supports_multiple_catalogs:
        return ScopeDefaults()

    metadata = connection.metadata()

    if capabilities.supports_multiple_schemas:
        row = _first_row(metadata.catalogs())
        if row is None:
            logger.warning("Engine reported no catalogs; default catalog left unset")
            return ScopeDefaults()
        return ScopeDefaults(catalog=row[0])

    row = _first_row(metadata.schemas())
    if row is None:
        logger.warning("Engine reported no schemas; default scope left unset")
        return ScopeDefaults()
    return ScopeDefaults(catalog=row[0], schema=row[1])
