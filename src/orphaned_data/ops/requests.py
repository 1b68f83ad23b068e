"""
Typed request objects for operations.

Each dataclass represents the *input* contract for a single operation
function.  Requests carry only transport-agnostic data: the admin routes
build them from query strings and form fields, the CLI from its options.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# ------------------------------------------------------------------ #
# Database operations
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class DatabaseInitRequest:
    """Request for :func:`orphaned_data.ops.database.initialize_database`.

    Attributes:
        backend: Backend of ``ctx.conn``; tables are only created on SQLite.
    """

    backend: str = "sqlite"


@dataclass(frozen=True, slots=True)
class SeedDemoRequest:
    """Request for :func:`orphaned_data.ops.database.seed_demo`.

    Attributes:
        orphaned_types: Type names to create records for; none of them
            should be registered.
        posts_per_type: Records created per type (orphaned and built-in).
        admin_login: Login of the administrator created when no user exists.
    """

    orphaned_types: tuple[str, ...] = ("old_plugin_event", "wpz-portfolio")
    posts_per_type: int = 3
    admin_login: str = "admin"


# ------------------------------------------------------------------ #
# Listing operations
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class ListOrphanedPostsRequest:
    """Request for :func:`orphaned_data.ops.orphans.list_orphaned_posts`.

    Attributes:
        type_filter: One orphaned type to restrict the listing to.  ``None``,
            ``"all"`` or a name that is not currently orphaned lists every
            orphaned type.
        orderby: ``"title"``, ``"type"`` or ``"date"``.
        order: ``"asc"`` or ``"desc"``.
        page: 1-based page number; clamped to the last page.
        per_page: Page size, already resolved from the user's preference.
    """

    type_filter: str | None = None
    orderby: str | None = None
    order: str | None = None
    page: int = 1
    per_page: int = 20


# ------------------------------------------------------------------ #
# Bulk actions
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class BulkActionRequest:
    """Request for :func:`orphaned_data.ops.bulk.process_bulk_action`.

    ``post_ids`` holds raw submitted values; anything that is not a positive
    integer is dropped by the processor.
    """

    action: str = "-1"
    post_ids: tuple[str | int, ...] = field(default_factory=tuple)
    target_type: str | None = None


# ------------------------------------------------------------------ #
# Preferences
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class SavePerPageRequest:
    """Request for :func:`orphaned_data.ops.preferences.save_per_page`."""

    value: str | int | None = None
