"""
The orphaned posts table.

Assembles a :class:`~orphaned_data.admin.table.ListTable` for records of
orphaned types:

==========  =============================================================
Column      Content
==========  =============================================================
(checkbox)  ``post[]`` = record id
Title       title or ``(no title)``, post states, "Delete Permanently"
Type        ``<select>``: current type label (disabled, hidden) followed
            by every public, non-orphaned type by singular name
Date        "Published" / "Scheduled" / "Last Modified" and the date
==========  =============================================================

Bulk actions come from :func:`orphaned_data.ops.bulk.available_bulk_actions`,
so the toolbar never offers an action the processor would ignore.  The
toolbar carries the ``target_type`` selector used by ``change_type``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any

from markupsafe import Markup

from orphaned_data.admin.table import BulkAction, Column, ListTable, RowAction, TableState
from orphaned_data.core.capabilities import Capability, User
from orphaned_data.core.types import TypeDefinition, TypeRegistry, label_from_name
from orphaned_data.ops.bulk import available_bulk_actions
from orphaned_data.ops.responses import PostSummary

NO_TITLE = "(no title)"
ZERO_DATE = "0000-00-00 00:00:00"

POST_STATES: dict[str, str] = {
    "draft": "Draft",
    "pending": "Pending",
    "private": "Private",
    "future": "Scheduled",
}


# ── Choices ──────────────────────────────────────────────────────────────


def target_type_choices(registry: TypeRegistry, orphaned: Sequence[str]) -> list[TypeDefinition]:
    """Types a record may be moved to: public, active and not orphaned."""
    excluded = set(orphaned)
    return [d for d in registry.public() if d.name not in excluded]


def _options(choices: Sequence[TypeDefinition], selected: str | None = None) -> Markup:
    parts = []
    for definition in choices:
        attr = Markup(" selected") if definition.name == selected else Markup("")
        parts.append(
            Markup('<option value="{}"{}>{}</option>').format(
                definition.name, attr, definition.singular_name
            )
        )
    return Markup("").join(parts)


# ── Cell renderers ───────────────────────────────────────────────────────


def render_title(post: PostSummary) -> Markup:
    title = post.title.strip() or NO_TITLE
    state = POST_STATES.get(post.status)
    states = Markup(' &mdash; <span class="post-state">{}</span>').format(state) if state else Markup("")
    return Markup('<strong><span class="row-title">{}</span>{}</strong>').format(title, states)


def make_type_renderer(choices: Sequence[TypeDefinition]):
    """Per-row type dropdown; choosing an option submits a ``change_type``."""
    options = _options(choices)

    def render_type(post: PostSummary) -> Markup:
        return Markup(
            '<select class="widefat" data-post-id="{}" aria-label="Change type of {}">'
            "<option selected disabled hidden>{}</option>{}</select>"
        ).format(
            post.id,
            post.title.strip() or NO_TITLE,
            label_from_name(post.post_type),
            options,
        )

    return render_type


def date_status(post: PostSummary) -> str:
    if post.status == "publish":
        return "Published"
    if post.status == "future":
        return "Scheduled"
    return "Last Modified"


def format_post_date(value: str) -> str:
    """``2024/01/15 at 4:43 pm``; ``Unpublished`` for an unset date."""
    if not value or value == ZERO_DATE:
        return "Unpublished"
    try:
        stamp = datetime.strptime(value[:19], "%Y-%m-%d %H:%M:%S")
    except ValueError:
        return value
    hour = stamp.hour % 12 or 12
    return f"{stamp:%Y/%m/%d} at {hour}:{stamp:%M} {'am' if stamp.hour < 12 else 'pm'}"


def render_date(post: PostSummary) -> Markup:
    return Markup("{}<br>{}").format(date_status(post), format_post_date(post.date))


# ── Toolbar ──────────────────────────────────────────────────────────────


def render_target_selector(
    choices: Sequence[TypeDefinition],
    *,
    selected_action: str | None = None,
    selected_target: str | None = None,
) -> Markup:
    """The bulk ``target_type`` selector, hidden unless ``change_type`` is chosen."""
    hidden = "" if selected_action == "change_type" else " hidden"
    return Markup(
        '<select name="target_type" class="bulkactions-post-type{}" aria-label="Target post type">'
        '<option value="">Select post type</option>{}</select>'
    ).format(hidden, _options(choices, selected_target))


# ── Table ────────────────────────────────────────────────────────────────


DELETE_ROW_ACTION = RowAction(
    name="delete",
    label="Delete Permanently",
    css_class="submitdelete",
    confirm="You are about to permanently delete this item.",
)


def build_orphaned_table(
    posts: Sequence[PostSummary],
    *,
    user: User,
    registry: TypeRegistry,
    orphaned: Sequence[str],
    base_url: str,
    total_items: int,
    per_page: int,
    current_page: int = 1,
    orderby: str | None = None,
    order: str | None = None,
    query: Mapping[str, Any] | None = None,
    selected_action: str | None = None,
    selected_target: str | None = None,
) -> ListTable:
    """Compose the listing table for one request."""
    choices = target_type_choices(registry, orphaned)
    columns = [
        Column("title", "Title", render_title, sort_key="title", css_class="column-title column-primary"),
        Column("type", "Type", make_type_renderer(choices), sort_key="type", css_class="post-type"),
        Column("date", "Date", render_date, sort_key="date", css_class="column-date"),
    ]
    row_actions = [DELETE_ROW_ACTION] if user.can(Capability.DELETE_POSTS) else []
    bulk_actions = [BulkAction(spec.name, spec.label) for spec in available_bulk_actions(user)]
    extras = Markup("")
    if any(action.name == "change_type" for action in bulk_actions):
        extras = render_target_selector(
            choices,
            selected_action=selected_action,
            selected_target=selected_target,
        )

    return ListTable(
        columns=columns,
        rows=posts,
        row_id=lambda post: post.id,
        state=TableState(
            base_url=base_url,
            total_items=total_items,
            per_page=per_page,
            current_page=current_page,
            orderby=orderby,
            order=order,
            default_orderby="date",
            default_order="desc",
            query=dict(query or {}),
        ),
        primary="title",
        row_actions=row_actions,
        bulk_actions=bulk_actions,
        toolbar_extras=extras,
        row_class=lambda post: f"type-{post.post_type} status-{post.status}",
        no_items="No orphaned posts found.",
    )


__all__ = [
    "DELETE_ROW_ACTION",
    "build_orphaned_table",
    "date_status",
    "format_post_date",
    "render_date",
    "render_target_selector",
    "render_title",
    "target_type_choices",
]
