"""
Structured error types for dbspine.

Every failure the driver layer can report is a typed error carrying a
category, a retry hint and structured context, so callers can tell a
missing driver package apart from a refused connection without parsing
messages.

Manifesto:
    - **Typed Error Hierarchy:** Resolution, connection and dispatch failures
      each have their own type
    - **Diagnosable:** Errors carry what was searched / what was asked for
    - **Error Chaining:** Driver-supplied causes are preserved, never replaced
    - **No retry logic here:** ``retryable`` is a hint for callers, the core
      never retries

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                       DBSpineError                           │
        │  (category, retryable, retry_after, context, cause)         │
        ├─────────────────────────────────────────────────────────────┤
        │                                                              │
        │  DriverError             DispatchError      ValidationError  │
        │  (DRIVER)                (DISPATCH)         (VALIDATION)     │
        │      │                        │                  │           │
        │  DriverNotFoundError     UnsupportedOperation   Unsupported  │
        │  DriverConnectionError   Error                  TypeError    │
        │  (DATABASE, retryable)                                       │
        │                                                              │
        │  ConfigError (CONFIG)                                        │
        └─────────────────────────────────────────────────────────────┘

Examples:
    >>> err = DriverNotFoundError("SQLite", ("global namespace",))
    >>> err.driver_name
    'SQLite'
    >>> err.category.value
    'DRIVER'

    >>> try:
    ...     raise OSError("connection refused")
    ... except OSError as e:
    ...     raise DriverConnectionError("Failed to connect", cause=e)
    Traceback (most recent call last):
    ...
    DriverConnectionError: Failed to connect

Guardrails:
    ❌ DON'T: Raise the builtin ``ConnectionError`` from a driver
    ✅ DO: Raise ``DriverConnectionError(..., cause=original)``

    ❌ DON'T: Swallow errors outside the display path
    ✅ DO: Let driver-internal errors propagate unchanged

Tags:
    error-handling, exception-hierarchy, error-context, dbspine, drivers

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and routing.

    Attributes:
        DRIVER: Driver lookup or driver contract violations
        DATABASE: Connection setup, authentication, network to the DBMS
        DISPATCH: No implementation of a generic operation
        VALIDATION: Values the type-mapping policy cannot handle
        CONFIG: Missing or invalid settings
        INTERNAL: Bugs, unexpected state
        UNKNOWN: Uncategorized errors
    """

    DRIVER = "DRIVER"
    DATABASE = "DATABASE"
    DISPATCH = "DISPATCH"
    VALIDATION = "VALIDATION"
    CONFIG = "CONFIG"
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Typed fields for what the driver layer knows at failure time; anything
    else goes into ``metadata``. ``to_dict()`` drops unset fields so the
    result can be passed straight to a structlog call.
    """

    driver: str | None = None
    operation: str | None = None
    receiver_type: str | None = None
    dbname: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["driver", "operation", "receiver_type", "dbname"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class DBSpineError(Exception):
    """
    Base exception for all dbspine errors.

    Subclasses set ``default_category`` and ``default_retryable``; both can
    be overridden per instance.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        retry_after: int | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.retry_after = retry_after
        self.context = context or ErrorContext()
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> DBSpineError:
        """
        Add context to this error (fluent API).

        Usage:
            raise DriverConnectionError("Failed").with_context(
                driver="SQLite", dbname="/data/app.db"
            )
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        if self.retry_after is not None:
            result["retry_after"] = self.retry_after
        if self.context:
            context_dict = self.context.to_dict()
            if context_dict:
                result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# DRIVER ERRORS
# =============================================================================


class DriverError(DBSpineError):
    """Driver lookup or driver contract error."""

    default_category = ErrorCategory.DRIVER
    default_retryable = False


class DriverNotFoundError(DriverError):
    """
    No driver binding found for a symbolic name.

    ``searched_locations`` lists every place the resolver looked, in search
    order, so a missing or not-yet-imported driver module is easy to spot.
    """

    def __init__(self, name: str, searched_locations: Sequence[str], **kwargs: Any):
        self.driver_name = name
        self.searched_locations = tuple(searched_locations)
        looked_in = "".join(f"\n* {location}" for location in self.searched_locations)
        super().__init__(
            f"Couldn't find driver {name}. Looked in:{looked_in}",
            context=ErrorContext(driver=name),
            **kwargs,
        )

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["searched_locations"] = list(self.searched_locations)
        return result


class DriverConnectionError(DriverError):
    """
    A driver failed to open a connection.

    The cause is whatever the driver's client library raised; the core
    treats it as opaque.
    """

    default_category = ErrorCategory.DATABASE
    default_retryable = True


# =============================================================================
# DISPATCH ERRORS
# =============================================================================


class DispatchError(DBSpineError):
    """Generic-operation dispatch error."""

    default_category = ErrorCategory.DISPATCH
    default_retryable = False


class UnsupportedOperationError(DispatchError):
    """No implementation of an operation for a receiver type, and no default."""

    def __init__(self, operation: str, receiver_type: type, **kwargs: Any):
        self.operation = operation
        self.receiver_type = receiver_type
        super().__init__(
            f"No implementation of '{operation}' for {receiver_type.__qualname__}",
            context=ErrorContext(operation=operation, receiver_type=receiver_type.__qualname__),
            **kwargs,
        )


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(DBSpineError):
    """
    Value validation error.

    Never retryable - the input must change.
    """

    default_category = ErrorCategory.VALIDATION
    default_retryable = False

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        if self.value is not None:
            result["value"] = repr(self.value)
        return result


class UnsupportedTypeError(ValidationError):
    """The type-mapping policy has no SQL type for a value."""

    pass


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(DBSpineError):
    """
    Configuration error.

    Never retryable - configuration must be fixed.
    """

    default_category = ErrorCategory.CONFIG
    default_retryable = False


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def is_retryable(error: Exception) -> bool:
    """Check if an error is retryable."""
    if isinstance(error, DBSpineError):
        return error.retryable
    return isinstance(error, (ConnectionError, TimeoutError))


def categorize_error(error: Exception) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, DBSpineError):
        return error.category
    if isinstance(error, (ConnectionError, OSError)):
        return ErrorCategory.DATABASE
    if isinstance(error, (TypeError, ValueError)):
        return ErrorCategory.VALIDATION
    return ErrorCategory.UNKNOWN


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "DBSpineError",
    # Driver
    "DriverError",
    "DriverNotFoundError",
    "DriverConnectionError",
    # Dispatch
    "DispatchError",
    "UnsupportedOperationError",
    # Validation
    "ValidationError",
    "UnsupportedTypeError",
    # Config
    "ConfigError",
    # Utilities
    "is_retryable",
    "categorize_error",
]
