"""Protocol definitions for sqlbridge.

Protocols describe the contract foreign connector code must satisfy. They
are runtime_checkable so the loader can verify an instantiated connector
before handing it out.
"""

from sqlbridge.protocols.connectors import (
    Connection,
    Connector,
    Cursor,
    MetadataProvider,
)

__all__ = [
    "Connection",
    "Connector",
    "Cursor",
    "MetadataProvider",
]
