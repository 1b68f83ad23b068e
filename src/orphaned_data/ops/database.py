"""
Database operations.

Thin wrappers around :mod:`orphaned_data.core.schema` for table creation,
plus a demo data seeder used by ``orphaned-data db seed-demo`` and tests.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from orphaned_data.core.logging import get_logger
from orphaned_data.core.repositories import PostRepository, UserRepository
from orphaned_data.core.schema import apply_schema
from orphaned_data.ops.context import OperationContext
from orphaned_data.ops.requests import DatabaseInitRequest, SeedDemoRequest
from orphaned_data.ops.responses import DatabaseInitResult, SeedDemoResult
from orphaned_data.ops.result import OperationResult, start_timer

logger = get_logger(__name__)

_DEMO_EPOCH = datetime(2024, 1, 15, 9, 30, 0)
_DEMO_STATUSES = ("publish", "draft", "future", "private", "pending")


def initialize_database(
    ctx: OperationContext,
    request: DatabaseInitRequest | None = None,
) -> OperationResult[DatabaseInitResult]:
    """Create the WordPress tables on a SQLite database (idempotent)."""
    request = request or DatabaseInitRequest()
    timer = start_timer()
    tables = ctx.tables.all()

    if request.backend != "sqlite":
        return OperationResult.fail(
            "INVALID_INPUT",
            f"Tables are only created on SQLite; {request.backend} databases must already hold them",
            details={"backend": request.backend},
            elapsed_ms=timer.elapsed_ms,
        )

    if ctx.dry_run:
        return OperationResult.ok(
            DatabaseInitResult(tables_created=tables, dry_run=True),
            elapsed_ms=timer.elapsed_ms,
        )

    try:
        created = apply_schema(ctx.conn, ctx.tables)
    except Exception as exc:
        logger.exception("op_failed", op="initialize_database", error=str(exc))
        return OperationResult.fail(
            "INTERNAL",
            f"Failed to create tables: {exc}",
            elapsed_ms=timer.elapsed_ms,
        )
    return OperationResult.ok(DatabaseInitResult(tables_created=created), elapsed_ms=timer.elapsed_ms)


def seed_demo(
    ctx: OperationContext,
    request: SeedDemoRequest | None = None,
) -> OperationResult[SeedDemoResult]:
    """Fill an empty install with records of built-in and orphaned types.

    Creates an administrator when the users table is empty, then
    ``posts_per_type`` records for ``post``, ``page`` and each requested
    orphaned type.  Every orphaned record gets a meta row and the first one
    also a revision, so deletion of dependants can be observed.
    """
    request = request or SeedDemoRequest()
    timer = start_timer()
    posts = PostRepository(ctx.conn, ctx.tables)
    users = UserRepository(ctx.conn, ctx.tables)

    types = ["post", "page", *request.orphaned_types]
    if ctx.dry_run:
        return OperationResult.ok(
            SeedDemoResult(user_id=0, posts_created=len(types) * request.posts_per_type, types=types),
            elapsed_ms=timer.elapsed_ms,
        )

    try:
        user_id = users.scalar(f"SELECT MIN(ID) FROM {ctx.tables.users}")
        if user_id is None:
            user_id = users.create_user(request.admin_login, level=10, display_name="Administrator")

        created = 0
        stamp = _DEMO_EPOCH
        for post_type in types:
            for n in range(1, request.posts_per_type + 1):
                stamp += timedelta(hours=7, minutes=13)
                status = _DEMO_STATUSES[created % len(_DEMO_STATUSES)]
                post_id = posts.create(
                    {
                        "post_author": int(user_id),
                        "post_date": stamp.strftime("%Y-%m-%d %H:%M:%S"),
                        "post_modified": stamp.strftime("%Y-%m-%d %H:%M:%S"),
                        "post_title": f"{post_type.replace('_', ' ').title()} {n}",
                        "post_name": f"{post_type}-{n}",
                        "post_status": status,
                        "post_type": post_type,
                    }
                )
                created += 1
                if post_id is None or post_type in ("post", "page"):
                    continue
                posts.insert(
                    ctx.tables.postmeta,
                    {"post_id": post_id, "meta_key": "_legacy_data", "meta_value": post_type},
                )
                if n == 1:
                    posts.create(
                        {
                            "post_author": int(user_id),
                            "post_date": stamp.strftime("%Y-%m-%d %H:%M:%S"),
                            "post_modified": stamp.strftime("%Y-%m-%d %H:%M:%S"),
                            "post_title": f"{post_type.replace('_', ' ').title()} {n}",
                            "post_name": f"{post_id}-revision-v1",
                            "post_status": "inherit",
                            "post_parent": post_id,
                            "post_type": "revision",
                        }
                    )
        posts.commit()
    except Exception as exc:
        logger.exception("op_failed", op="seed_demo", error=str(exc))
        posts.rollback()
        return OperationResult.fail(
            "INTERNAL",
            f"Failed to seed demo data: {exc}",
            elapsed_ms=timer.elapsed_ms,
        )

    logger.info("demo_seeded", posts_created=created, types=types)
    return OperationResult.ok(
        SeedDemoResult(user_id=int(user_id), posts_created=created, types=types),
        elapsed_ms=timer.elapsed_ms,
    )


__all__ = ["initialize_database", "seed_demo"]
