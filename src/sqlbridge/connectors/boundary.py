"""Boundary for calls into foreign connector code.

Connectors are pluggable components loaded at runtime; their failure modes
cannot be enumerated in advance. Every call that crosses into connector
code goes through ``call_foreign``, which returns an ``Outcome`` holding
either the value or a tagged ``BridgeError``. This module is the only place
in the package that captures exceptions broadly.
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from sqlbridge.common.exceptions import BridgeError
from sqlbridge.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

# SystemExit is included because foreign modules occasionally call sys.exit()
# at import time. KeyboardInterrupt still propagates.
FOREIGN_FAILURES = (Exception, SystemExit)


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of a fallible call: a value or a BridgeError, never both."""

    value: Optional[T] = None
    error: Optional[BridgeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, raising the recorded error if there is one."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: BridgeError) -> "Outcome[T]":
        return cls(error=error)


def call_foreign(
    func: Callable[..., T],
    *args: Any,
    on_error: Callable[[BaseException], BridgeError],
    **kwargs: Any,
) -> Outcome[T]:
    """Call ``func`` and convert any failure into a tagged Outcome.

    BridgeErrors raised by ``func`` are kept as they are; anything else is
    handed to ``on_error`` to be categorized.

    Args:
        func: Callable that reaches into connector code
        *args: Positional arguments for ``func``
        on_error: Builds the BridgeError for an unexpected failure
        **kwargs: Keyword arguments for ``func``

    Returns:
        Outcome holding the return value or the error
    """
    try:
        return Outcome.success(func(*args, **kwargs))
    except BridgeError as exc:
        return Outcome.failure(exc)
    except FOREIGN_FAILURES as exc:
        logger.debug("Foreign call failed", extra={"callable": getattr(func, "__qualname__", repr(func))})
        return Outcome.failure(on_error(exc))
