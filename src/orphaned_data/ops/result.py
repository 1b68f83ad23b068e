"""
Operation result envelope.

Every operation returns an :class:`OperationResult`: a typed success/failure
envelope carrying the payload, a structured :class:`OperationError`, warnings
and elapsed time.  List operations return :class:`PagedResult`, which adds
1-based page numbers the admin screen renders directly.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from orphaned_data.core.errors import ErrorCategory

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class OperationError:
    """Structured error detail for failed operations.

    Attributes:
        code: Machine-readable code (``NOT_FOUND``, ``INVALID_INPUT``,
            ``FORBIDDEN``, ``INTERNAL``).
        message: Human-readable description of the error.
        category: Optional :class:`ErrorCategory` for routing.
        details: Extra key/value context.
    """

    code: str
    message: str
    category: ErrorCategory | None = None
    details: dict[str, Any] = field(default_factory=dict)


@dataclass
class OperationResult(Generic[T]):
    """Envelope returned by every operation function.

    Use :meth:`ok` and :meth:`fail` rather than the constructor.
    """

    success: bool
    data: T | None = None
    error: OperationError | None = None
    warnings: list[str] = field(default_factory=list)
    elapsed_ms: float = 0.0

    @classmethod
    def ok(
        cls,
        data: T,
        *,
        warnings: list[str] | None = None,
        elapsed_ms: float = 0.0,
    ) -> OperationResult[T]:
        """Create a successful result."""
        return cls(success=True, data=data, warnings=warnings or [], elapsed_ms=elapsed_ms)

    @classmethod
    def fail(
        cls,
        code: str,
        message: str,
        *,
        category: ErrorCategory | None = None,
        details: dict[str, Any] | None = None,
        elapsed_ms: float = 0.0,
    ) -> OperationResult[T]:
        """Create a failed result."""
        return cls(
            success=False,
            error=OperationError(
                code=code,
                message=message,
                category=category,
                details=details or {},
            ),
            elapsed_ms=elapsed_ms,
        )


@dataclass
class PagedResult(OperationResult[list[T]]):
    """Paginated result for list operations.

    Attributes:
        total: Total number of matching items (before pagination).
        page: Current page, 1-based, already clamped to ``total_pages``.
        per_page: Items per page.
    """

    total: int = 0
    page: int = 1
    per_page: int = 20

    @classmethod
    def from_items(
        cls,
        items: list[T],
        total: int,
        *,
        page: int = 1,
        per_page: int = 20,
        elapsed_ms: float = 0.0,
    ) -> PagedResult[T]:
        return cls(
            success=True,
            data=items,
            total=total,
            page=page,
            per_page=per_page,
            elapsed_ms=elapsed_ms,
        )

    @property
    def total_pages(self) -> int:
        if self.per_page <= 0:
            return 0
        return math.ceil(self.total / self.per_page)

    @property
    def has_more(self) -> bool:
        return self.page < self.total_pages


# ------------------------------------------------------------------ #
# Timing helper
# ------------------------------------------------------------------ #


class _Timer:
    """Minimal stopwatch for timing operations."""

    __slots__ = ("_start",)

    def __init__(self) -> None:
        self._start = time.perf_counter()

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self._start) * 1000


def start_timer() -> _Timer:
    """Return a lightweight timer.  Use ``timer.elapsed_ms`` when done."""
    return _Timer()
