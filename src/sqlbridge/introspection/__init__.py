"""Runtime discovery against a connected engine.

Each step takes an open connection (or a way to open one) and returns an
immutable value; none of them keeps state between calls.
"""

from .connectivity import verify_connectivity
from .dialect import discover_capabilities
from .scope import resolve_scope_defaults
from .tables import resolve_tables

__all__ = [
    "discover_capabilities",
    "resolve_scope_defaults",
    "resolve_tables",
    "verify_connectivity",
]
