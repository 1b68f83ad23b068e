"""
Per-user screen preferences.

The listing page size is stored as usermeta ``orphaned_posts_per_page``.  A
stored value is honoured only when it is a positive integer; anything else
falls back to the default of 20.
"""

from __future__ import annotations

from orphaned_data.core.logging import get_logger
from orphaned_data.core.repositories import UserRepository
from orphaned_data.ops.context import OperationContext
from orphaned_data.ops.requests import SavePerPageRequest
from orphaned_data.ops.result import OperationResult, start_timer

logger = get_logger(__name__)

PER_PAGE_OPTION = "orphaned_posts_per_page"
DEFAULT_PER_PAGE = 20
MAX_PER_PAGE = 999


def _parse_positive_int(value: str | int | None) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    text = str(value).strip()
    if not text.isdigit():
        return None
    number = int(text)
    return number if number > 0 else None


def resolve_per_page(stored: str | int | None, default: int = DEFAULT_PER_PAGE) -> int:
    """Page size from a stored preference, or *default* when unusable.

    >>> resolve_per_page("50")
    50
    >>> resolve_per_page("0")
    20
    """
    return _parse_positive_int(stored) or default


def get_per_page(ctx: OperationContext, *, default: int = DEFAULT_PER_PAGE) -> OperationResult[int]:
    """Resolved page size for ``ctx.user``."""
    timer = start_timer()
    if not ctx.user.exists:
        return OperationResult.ok(default, elapsed_ms=timer.elapsed_ms)
    stored = UserRepository(ctx.conn, ctx.tables).get_meta(ctx.user.id, PER_PAGE_OPTION)
    return OperationResult.ok(resolve_per_page(stored, default), elapsed_ms=timer.elapsed_ms)


def save_per_page(ctx: OperationContext, request: SavePerPageRequest) -> OperationResult[int]:
    """Store the page size for ``ctx.user`` when it is within ``1..999``."""
    timer = start_timer()
    if not ctx.user.exists:
        return OperationResult.fail(
            "FORBIDDEN",
            "Preferences require a signed-in user",
            elapsed_ms=timer.elapsed_ms,
        )

    value = _parse_positive_int(request.value)
    if value is None or value > MAX_PER_PAGE:
        return OperationResult.fail(
            "INVALID_INPUT",
            f"Items per page must be between 1 and {MAX_PER_PAGE}",
            details={"value": request.value},
            elapsed_ms=timer.elapsed_ms,
        )

    if ctx.dry_run:
        return OperationResult.ok(value, elapsed_ms=timer.elapsed_ms)

    repo = UserRepository(ctx.conn, ctx.tables)
    repo.set_meta(ctx.user.id, PER_PAGE_OPTION, str(value))
    repo.commit()
    logger.debug("per_page_saved", user_id=ctx.user.id, per_page=value)
    return OperationResult.ok(value, elapsed_ms=timer.elapsed_ms)


__all__ = [
    "DEFAULT_PER_PAGE",
    "MAX_PER_PAGE",
    "PER_PAGE_OPTION",
    "get_per_page",
    "resolve_per_page",
    "save_per_page",
]
