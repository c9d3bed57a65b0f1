"""Dialect capability discovery."""

from contextlib import closing
from typing import Dict, Optional

from sqlbridge.constants import SQLINFO_QUERY
from sqlbridge.logging import get_logger
from sqlbridge.protocols import Connection
from sqlbridge.types import DialectCapabilities
from sqlbridge.utils.decorators import traced

logger = get_logger(__name__)


@traced("sqlbridge.introspection.discover_capabilities", attributes={"db.statement": SQLINFO_QUERY})
def discover_capabilities(connection: Connection) -> DialectCapabilities:
    """Read the engine's dialect information table.

    Every ``(NAME, VALUE)`` row is kept; later rows win on duplicate names.
    Failures propagate to the caller.

    Args:
        connection: Open connection

    Returns:
        DialectCapabilities built from the reported rows
    """
    rows: Dict[str, Optional[str]] = {}
    with closing(connection.cursor()) as cursor:
        cursor.execute(SQLINFO_QUERY)
        for row in cursor.fetchall():
            rows[row[0]] = row[1]

    capabilities = DialectCapabilities.from_sqlinfo(rows)
    logger.debug(
        "Discovered dialect capabilities",
        extra={
            "reported_keys": len(capabilities.info),
            "identifier_quotes": capabilities.identifier_quotes,
            "multiple_catalogs": capabilities.supports_multiple_catalogs,
            "multiple_schemas": capabilities.supports_multiple_schemas,
        }
    )
    return capabilities
