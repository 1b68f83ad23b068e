"""
Typed response objects for operations.

Each dataclass is the payload of one operation beyond the generic
:class:`~orphaned_data.ops.result.OperationResult` envelope.  Responses carry
only domain data: no HTTP status codes, no markup, no CLI formatting.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# ------------------------------------------------------------------ #
# Database responses
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class DatabaseInitResult:
    """Result payload for :func:`orphaned_data.ops.database.initialize_database`."""

    tables_created: list[str]
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class SeedDemoResult:
    """Result payload for :func:`orphaned_data.ops.database.seed_demo`."""

    user_id: int
    posts_created: int
    types: list[str] = field(default_factory=list)


# ------------------------------------------------------------------ #
# Orphan responses
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class OrphanedTypeSummary:
    """One orphaned type with its derived label and record count."""

    name: str
    label: str
    count: int = 0


@dataclass(slots=True)
class PostSummary:
    """Compact record representation for the listing screen."""

    id: int
    title: str = ""
    post_type: str = ""
    status: str = "publish"
    date: str = ""
    modified: str = ""
    parent: int = 0

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> PostSummary:
        return cls(
            id=int(row["ID"]),
            title=row.get("post_title") or "",
            post_type=row.get("post_type") or "",
            status=row.get("post_status") or "",
            date=str(row.get("post_date") or ""),
            modified=str(row.get("post_modified") or ""),
            parent=int(row.get("post_parent") or 0),
        )


# ------------------------------------------------------------------ #
# Bulk action responses
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class BulkActionOutcome:
    """Result payload for :func:`orphaned_data.ops.bulk.process_bulk_action`.

    Attributes:
        action: The action that ran (``"delete"`` or ``"change_type"``).
        affected: Records actually deleted or updated.
        message: Pluralised status line, e.g. ``"Deleted 3 posts."``.
        requested: Distinct valid ids submitted.
        target_type: Target of a ``change_type`` action.
        failed_ids: Ids whose mutation raised and was rolled back.
        dry_run: Whether the action was only simulated.
    """

    action: str
    affected: int
    message: str
    requested: int = 0
    target_type: str | None = None
    failed_ids: list[int] = field(default_factory=list)
    dry_run: bool = False
