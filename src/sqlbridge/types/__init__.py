from sqlbridge.types.base import BridgeBaseModel
from sqlbridge.types.metadata import (
    DialectCapabilities,
    ScopeDefaults,
    TableIdentifier,
    TablePattern,
)

__all__ = [
    "BridgeBaseModel",
    "DialectCapabilities",
    "ScopeDefaults",
    "TableIdentifier",
    "TablePattern",
]
