"""Connectivity check for a loaded connector."""

from contextlib import closing
from typing import Any, Mapping, Optional

from sqlbridge.common.exceptions import connectivity_error
from sqlbridge.connectors.boundary import Outcome, call_foreign
from sqlbridge.logging import get_logger
from sqlbridge.protocols import Connector
from sqlbridge.utils.decorators import traced

logger = get_logger(__name__)


def _open_and_close(connector: Connector, url: str, properties: Mapping[str, Any]) -> bool:
    with closing(connector.connect(url, properties)):
        return True


@traced("sqlbridge.introspection.verify_connectivity")
def verify_connectivity(
    connector: Connector,
    url: str,
    properties: Optional[Mapping[str, Any]] = None,
) -> Outcome[bool]:
    """Open one connection and close it again.

    No statement is issued and nothing is retried.

    Args:
        connector: Loaded connector
        url: Data source URL
        properties: Connection properties, empty by default

    Returns:
        Outcome holding True, or a CONNECTION_ERROR whose message starts with
        ``Failed to open connection:``
    """
    outcome = call_foreign(
        _open_and_close, connector, url, dict(properties or {}),
        on_error=connectivity_error,
    )
    if outcome.ok:
        logger.info("Connectivity check passed")
    return outcome
