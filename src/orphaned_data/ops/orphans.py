"""
Orphan operations.

Detection, placeholder registration and listing of records whose type has
no active definition.  Detection is recomputed on every call from the
current contents of the posts table; nothing about orphans is persisted.
"""

from __future__ import annotations

from orphaned_data.core.logging import get_logger
from orphaned_data.core.orphans import detect_orphaned_types, register_placeholder_types
from orphaned_data.core.repositories import PageSlice, PostRepository
from orphaned_data.core.types import label_from_name
from orphaned_data.ops.context import OperationContext
from orphaned_data.ops.requests import ListOrphanedPostsRequest
from orphaned_data.ops.responses import OrphanedTypeSummary, PostSummary
from orphaned_data.ops.result import OperationResult, PagedResult, start_timer

logger = get_logger(__name__)

ALL_TYPES = "all"


def _post_repo(ctx: OperationContext) -> PostRepository:
    return PostRepository(ctx.conn, ctx.tables)


def refresh_orphaned_types(ctx: OperationContext) -> OperationResult[list[str]]:
    """Detect orphaned types and register a placeholder for each.

    Safe to call on every request: a second call returns the same names and
    registers nothing new.
    """
    timer = start_timer()
    orphaned = detect_orphaned_types(_post_repo(ctx), ctx.registry)
    register_placeholder_types(ctx.registry, orphaned)
    return OperationResult.ok(orphaned, elapsed_ms=timer.elapsed_ms)


def list_orphaned_types(ctx: OperationContext) -> OperationResult[list[OrphanedTypeSummary]]:
    """Orphaned types in first-seen order, each with its record count."""
    timer = start_timer()
    repo = _post_repo(ctx)
    orphaned = detect_orphaned_types(repo, ctx.registry)
    counts = repo.count_by_type(orphaned)
    summaries = [
        OrphanedTypeSummary(name=name, label=label_from_name(name), count=counts.get(name, 0))
        for name in orphaned
    ]
    return OperationResult.ok(summaries, elapsed_ms=timer.elapsed_ms)


def resolve_type_filter(value: str | None, orphaned: list[str]) -> str:
    """Normalise a submitted type filter.

    Returns the value when it names a currently orphaned type, else ``"all"``.
    """
    if value and value in orphaned:
        return value
    return ALL_TYPES


def list_orphaned_posts(
    ctx: OperationContext,
    request: ListOrphanedPostsRequest,
) -> PagedResult[PostSummary]:
    """List records of orphaned types with sorting and pagination.

    Args:
        ctx: Operation context with database connection and registry.
        request: Filter, sort and page parameters.

    Returns:
        Paged list of :class:`PostSummary` items.  ``page`` on the result is
        the page actually shown after clamping.
    """
    timer = start_timer()
    per_page = max(1, request.per_page)

    try:
        repo = _post_repo(ctx)
        orphaned = detect_orphaned_types(repo, ctx.registry)
        type_filter = resolve_type_filter(request.type_filter, orphaned)
        types = orphaned if type_filter == ALL_TYPES else [type_filter]

        page = max(1, request.page)
        rows, total = repo.list_by_types(
            types,
            orderby=request.orderby,
            order=request.order,
            page=PageSlice(limit=per_page, offset=(page - 1) * per_page),
        )
        last_page = max(1, -(-total // per_page))
        if page > last_page:
            page = last_page
            rows, total = repo.list_by_types(
                types,
                orderby=request.orderby,
                order=request.order,
                page=PageSlice(limit=per_page, offset=(page - 1) * per_page),
            )
    except Exception as exc:
        logger.exception("op_failed", op="list_orphaned_posts", error=str(exc))
        return PagedResult.fail(
            "INTERNAL",
            f"Failed to list orphaned posts: {exc}",
            elapsed_ms=timer.elapsed_ms,
        )

    return PagedResult.from_items(
        [PostSummary.from_row(r) for r in rows],
        total=total,
        page=page,
        per_page=per_page,
        elapsed_ms=timer.elapsed_ms,
    )


__all__ = [
    "ALL_TYPES",
    "list_orphaned_posts",
    "list_orphaned_types",
    "refresh_orphaned_types",
    "resolve_type_filter",
]
