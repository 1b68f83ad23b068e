"""
Structured error types for orphaned-data.

Every error raised by this package derives from :class:`OrphanedDataError`
and carries an :class:`ErrorCategory` plus an optional context dict for
logging.  Routine outcomes of the admin screen (an invalid target type, a
record that could not be deleted) are *not* errors: they surface as counts
in an :class:`~orphaned_data.ops.result.OperationResult`.  Exceptions are
reserved for configuration mistakes, storage faults, and permission checks.

Hierarchy::

    OrphanedDataError
    ├── ConfigError            (CONFIG)
    ├── DatabaseError          (DATABASE)
    ├── PermissionDeniedError  (AUTH)
    └── TypeRegistrationError  (VALIDATION)

Tags:
    error-handling, exception-hierarchy
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and routing."""

    DATABASE = "DATABASE"
    VALIDATION = "VALIDATION"
    CONFIG = "CONFIG"
    AUTH = "AUTH"
    INTERNAL = "INTERNAL"


class OrphanedDataError(Exception):
    """Base exception for all orphaned-data errors.

    Attributes:
        message: Human-readable description.
        category: :class:`ErrorCategory` used for routing and status mapping.
        context: Extra key/value metadata for logging.
        cause: Underlying exception, also set as ``__cause__``.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context: dict[str, Any] = dict(context or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> OrphanedDataError:
        """Add context fields fluently and return ``self``."""
        self.context.update(kwargs)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Serialise for structured logging."""
        d: dict[str, Any] = {
            "error_type": type(self).__name__,
            "message": self.message,
            "category": self.category.value,
        }
        if self.context:
            d["context"] = self.context
        if self.cause is not None:
            d["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return d

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, category={self.category.value})"


class ConfigError(OrphanedDataError):
    """Missing or invalid configuration (bad database URL, table prefix)."""

    default_category = ErrorCategory.CONFIG


class DatabaseError(OrphanedDataError):
    """The storage layer could not be reached or rejected a statement."""

    default_category = ErrorCategory.DATABASE


class PermissionDeniedError(OrphanedDataError):
    """The acting user lacks the capability an admin screen requires."""

    default_category = ErrorCategory.AUTH

    def __init__(self, capability: str, **kwargs: Any) -> None:
        super().__init__(
            "Sorry, you are not allowed to access this page.",
            **kwargs,
        )
        self.capability = capability
        self.context.setdefault("capability", capability)


class TypeRegistrationError(OrphanedDataError):
    """A type definition could not be registered (invalid name)."""

    default_category = ErrorCategory.VALIDATION


__all__ = [
    "ConfigError",
    "DatabaseError",
    "ErrorCategory",
    "OrphanedDataError",
    "PermissionDeniedError",
    "TypeRegistrationError",
]
