"""
Bulk action processor.

Applies one action to a set of selected records and reports how many were
actually affected.  Two actions exist, in the order the listing screen
offers them::

    change_type   "Change Post Type"     needs edit_posts
    delete        "Delete Permanently"   needs delete_posts

Anything else, including an action the acting user lacks the capability
for, is a no-op that returns ``data=None`` and queues no notice.

Each record is committed on its own.  A record whose mutation raises a
database error is rolled back, logged and left out of the count; the loop
carries on with the next id.  Failures outside the per-record loop
propagate to the caller.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError

from orphaned_data.core.capabilities import Capability, User
from orphaned_data.core.logging import get_logger
from orphaned_data.core.repositories import PostRepository
from orphaned_data.ops.context import OperationContext
from orphaned_data.ops.requests import BulkActionRequest
from orphaned_data.ops.responses import BulkActionOutcome
from orphaned_data.ops.result import OperationResult, start_timer

logger = get_logger(__name__)

# Per-record errors that are counted as failures instead of aborting the batch
RECORD_ERRORS: tuple[type[BaseException], ...] = (sqlite3.Error, SQLAlchemyError)


def pluralize(count: int, singular: str, plural: str) -> str:
    """Pick the singular form only for exactly one."""
    return singular if count == 1 else plural


def delete_message(count: int) -> str:
    return f"Deleted {count} {pluralize(count, 'post', 'posts')}."


def change_type_message(count: int) -> str:
    return f"Post type changed for {count} {pluralize(count, 'post', 'posts')}."


def normalize_ids(values: Iterable[str | int]) -> list[int]:
    """Keep positive integer ids, de-duplicated in submission order."""
    ids: dict[int, None] = {}
    for value in values:
        if isinstance(value, bool):
            continue
        if isinstance(value, int):
            post_id = value
        else:
            text = str(value).strip()
            if not text.isdigit():
                continue
            post_id = int(text)
        if post_id > 0:
            ids.setdefault(post_id, None)
    return list(ids)


# ── Action table ─────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class BulkActionSpec:
    """A bulk action the processor knows how to run."""

    name: str
    label: str
    capability: Capability
    mutate: Callable[[PostRepository, int, str | None], bool]
    message: Callable[[int], str]
    needs_target: bool = False


def _delete(repo: PostRepository, post_id: int, target: str | None) -> bool:
    return repo.delete(post_id)


def _change_type(repo: PostRepository, post_id: int, target: str | None) -> bool:
    if not target:
        return False
    return repo.set_type(post_id, target)


BULK_ACTIONS: dict[str, BulkActionSpec] = {
    "change_type": BulkActionSpec(
        name="change_type",
        label="Change Post Type",
        capability=Capability.EDIT_POSTS,
        mutate=_change_type,
        message=change_type_message,
        needs_target=True,
    ),
    "delete": BulkActionSpec(
        name="delete",
        label="Delete Permanently",
        capability=Capability.DELETE_POSTS,
        mutate=_delete,
        message=delete_message,
    ),
}


def available_bulk_actions(user: User) -> list[BulkActionSpec]:
    """Bulk actions *user* may run, in display order."""
    return [spec for spec in BULK_ACTIONS.values() if user.can(spec.capability)]


# ── Processor ────────────────────────────────────────────────────────────


def process_bulk_action(
    ctx: OperationContext,
    request: BulkActionRequest,
) -> OperationResult[BulkActionOutcome | None]:
    """Run ``request.action`` against ``request.post_ids``.

    Args:
        ctx: Operation context; ``ctx.user`` is checked for the action's
            capability and the status message is queued on ``ctx.notices``.
        request: Action name, raw submitted ids and optional target type.

    Returns:
        ``data=None`` for an unknown or forbidden action, otherwise a
        :class:`BulkActionOutcome` whose ``affected`` counts records that
        were really deleted or updated.
    """
    timer = start_timer()
    spec = BULK_ACTIONS.get(request.action or "")
    if spec is None or not ctx.user.can(spec.capability):
        logger.debug(
            "bulk_action_ignored",
            action=request.action,
            user_id=ctx.user.id,
        )
        return OperationResult.ok(None, elapsed_ms=timer.elapsed_ms)

    ids = normalize_ids(request.post_ids)
    target = request.target_type if spec.needs_target else None

    affected = 0
    failed: list[int] = []
    # An invalid target turns change_type into a zero-change run.
    if not spec.needs_target or ctx.registry.is_valid_target(target):
        affected, failed = _apply(ctx, spec, ids, target)
    else:
        logger.info("bulk_action_invalid_target", action=spec.name, target_type=target)

    outcome = BulkActionOutcome(
        action=spec.name,
        affected=affected,
        message=spec.message(affected),
        requested=len(ids),
        target_type=target,
        failed_ids=failed,
        dry_run=ctx.dry_run,
    )
    ctx.notices.add(
        outcome.message,
        "success" if affected > 0 else "info",
        code=spec.name,
    )
    logger.info(
        "bulk_action_processed",
        action=spec.name,
        requested=len(ids),
        affected=affected,
        failed=len(failed),
        target_type=target,
        dry_run=ctx.dry_run,
        user_id=ctx.user.id,
    )
    return OperationResult.ok(outcome, elapsed_ms=timer.elapsed_ms)


def _apply(
    ctx: OperationContext,
    spec: BulkActionSpec,
    ids: list[int],
    target: str | None,
) -> tuple[int, list[int]]:
    repo = PostRepository(ctx.conn, ctx.tables)
    affected = 0
    failed: list[int] = []

    for post_id in ids:
        if ctx.dry_run:
            if repo.get(post_id) is not None:
                affected += 1
            continue
        try:
            changed = spec.mutate(repo, post_id, target)
            repo.commit()
        except RECORD_ERRORS as exc:
            repo.rollback()
            failed.append(post_id)
            logger.warning(
                "bulk_action_record_failed",
                action=spec.name,
                post_id=post_id,
                error=str(exc),
            )
            continue
        if changed:
            affected += 1

    return affected, failed


__all__ = [
    "BULK_ACTIONS",
    "BulkActionSpec",
    "available_bulk_actions",
    "change_type_message",
    "delete_message",
    "normalize_ids",
    "pluralize",
    "process_bulk_action",
]
