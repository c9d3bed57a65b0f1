from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Standard error codes for sqlbridge operations.

    Error codes categorize failures without requiring a separate exception
    class per failure type. Each category has its own number range.

    Attributes:
        CONFIG_*: Settings and configuration errors (1xxx)
        CONNECTOR_*: Connector loading errors (2xxx)
        CONNECTION_*: Connection establishment errors (3xxx)
        SCHEMA_*: Dialect and catalog metadata errors (4xxx)
    """
    # Configuration errors (1xxx)
    CONFIG_ERROR = "CONFIG_001"
    CONFIG_MISSING = "CONFIG_002"

    # Connector errors (2xxx)
    CONNECTOR_LOAD_ERROR = "CONNECTOR_001"

    # Connection errors (3xxx)
    CONNECTION_ERROR = "CONNECTION_001"

    # Metadata errors (4xxx)
    SCHEMA_INTROSPECTION_ERROR = "SCHEMA_001"


class BridgeError(Exception):
    """Base exception for all sqlbridge errors.

    Attributes:
        message: Error message
        error_code: Error code from ErrorCode enum
        details: Additional error details
        cause: Optional underlying exception
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.CONFIG_ERROR,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ):
        """Initialize sqlbridge error.

        Args:
            message: Error message
            error_code: Error code from ErrorCode enum
            details: Additional error details
            cause: Optional underlying exception
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause

        # Lazy import to avoid circular dependency
        from sqlbridge.logging import get_logger
        logger = get_logger(__name__)
        logger.error(
            message,
            extra={"error_code": error_code.value, "details": self.details},
            exc_info=cause,
        )

    def __str__(self) -> str:
        """String representation of the error."""
        return f"[{self.error_code.value}] {self.message}"

    @property
    def diagnostic(self) -> str:
        """Single human-readable line suitable for an error sink."""
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "error_name": self.error_code.name,
            "details": self.details,
        }


def describe_failure(exc: BaseException) -> str:
    """Render an exception as ``<category>: <message>``.

    The category is the exception's fully-qualified class name so that
    failures raised by foreign connector code remain recognizable.
    """
    cls = type(exc)
    module = cls.__module__
    category = cls.__qualname__ if module in ("builtins", None) else f"{module}.{cls.__qualname__}"
    return f"{category}: {exc}"


def missing_option_error(option: str, **kwargs) -> BridgeError:
    """Create an error for a required setting that is absent or empty.

    Args:
        option: Name of the missing option as users write it in the settings file
        **kwargs: Additional error details

    Returns:
        BridgeError with CONFIG_MISSING code
    """
    details = kwargs.get("details", {})
    details["option"] = option

    return BridgeError(
        message=f"The '{option}' option is missing",
        error_code=ErrorCode.CONFIG_MISSING,
        details=details,
        **{k: v for k, v in kwargs.items() if k != "details"}
    )


def configuration_error(
    message: str,
    config_key: Optional[str] = None,
    **kwargs
) -> BridgeError:
    """Create a configuration error.

    Args:
        message: Error message
        config_key: Configuration key that caused the error
        **kwargs: Additional error details

    Returns:
        BridgeError with CONFIG_ERROR code
    """
    details = kwargs.get("details", {})
    if config_key:
        details["config_key"] = config_key

    return BridgeError(
        message=message,
        error_code=ErrorCode.CONFIG_ERROR,
        details=details,
        **{k: v for k, v in kwargs.items() if k != "details"}
    )


def connector_load_error(
    message: str,
    original_error: Optional[BaseException] = None,
    class_name: Optional[str] = None,
    **kwargs
) -> BridgeError:
    """Create a connector load error.

    When ``original_error`` is given, its category and message are appended
    to ``message``.

    Args:
        message: Error message prefix
        original_error: The underlying exception, usually from foreign code
        class_name: Connector class that was being loaded
        **kwargs: Additional error details

    Returns:
        BridgeError with CONNECTOR_LOAD_ERROR code
    """
    details = kwargs.get("details", {})
    if class_name:
        details["class_name"] = class_name
    if original_error is not None:
        message = f"{message}: {describe_failure(original_error)}"

    return BridgeError(
        message=message,
        error_code=ErrorCode.CONNECTOR_LOAD_ERROR,
        details=details,
        cause=original_error,
        **{k: v for k, v in kwargs.items() if k not in ["details", "cause"]}
    )


def connectivity_error(
    original_error: BaseException,
    **kwargs
) -> BridgeError:
    """Create a connectivity error.

    Args:
        original_error: The exception raised while opening the connection
        **kwargs: Additional error details

    Returns:
        BridgeError with CONNECTION_ERROR code
    """
    details = kwargs.get("details", {})

    return BridgeError(
        message=f"Failed to open connection: {original_error}",
        error_code=ErrorCode.CONNECTION_ERROR,
        details=details,
        cause=original_error,
        **{k: v for k, v in kwargs.items() if k not in ["details", "cause"]}
    )


def introspection_error(
    operation: str,
    original_error: BaseException,
    **kwargs
) -> BridgeError:
    """Create a schema introspection error.

    Args:
        operation: Metadata operation that failed
        original_error: The underlying exception
        **kwargs: Additional error details

    Returns:
        BridgeError with SCHEMA_INTROSPECTION_ERROR code
    """
    details = kwargs.get("details", {})
    details["operation"] = operation

    return BridgeError(
        message=f"Failed to {operation}: {describe_failure(original_error)}",
        error_code=ErrorCode.SCHEMA_INTROSPECTION_ERROR,
        details=details,
        cause=original_error,
        **{k: v for k, v in kwargs.items() if k not in ["details", "cause"]}
    )
