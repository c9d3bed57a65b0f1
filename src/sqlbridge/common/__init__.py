"""Common exceptions for sqlbridge.

The exception system uses error codes for categorization rather than
numerous specific exception classes. All errors inherit from BridgeError
and include structured error information.
"""

from sqlbridge.common.exceptions import (
    BridgeError,
    ErrorCode,
    describe_failure,
    # Helper functions
    missing_option_error,
    configuration_error,
    connector_load_error,
    connectivity_error,
    introspection_error,
)

__all__ = [
    "BridgeError",
    "ErrorCode",
    "describe_failure",
    "missing_option_error",
    "configuration_error",
    "connector_load_error",
    "connectivity_error",
    "introspection_error",
]
