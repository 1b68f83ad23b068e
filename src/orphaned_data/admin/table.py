"""
Generic tabular admin view.

A :class:`ListTable` is assembled from parts instead of being subclassed:

- :class:`Column` objects, each with its own cell renderer
- :class:`RowAction` providers, rendered under the primary column
- :class:`BulkAction` entries for the bulk-actions toolbar
- optional toolbar extras (extra markup placed next to the bulk selector)

The table itself holds no request state.  Everything it needs (current
sort, current page, base URL and query) is passed in as a
:class:`TableState`, and it produces plain view objects
(:class:`HeaderCell`, :class:`RenderedRow`, :class:`PageLinks`) that the
``admin/list_table.html`` template renders.

Example::

    table = ListTable(
        columns=[Column("title", "Title", render=lambda r: r.title, sort_key="title")],
        rows=items,
        row_id=lambda r: r.id,
        state=TableState(base_url="/admin/tools/x", total_items=42, per_page=20),
    )
    table.headers()   # header cells with sort URLs
    table.body()      # rendered rows

Tags:
    admin, list-table, composition
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlencode

from markupsafe import Markup, escape

CellRenderer = Callable[[Any], Markup | str]
RowActionFilter = Callable[[Any], bool]


def build_url(base_url: str, params: Mapping[str, Any]) -> str:
    """Append *params* to *base_url*, dropping ``None`` and empty values."""
    clean = {k: v for k, v in params.items() if v is not None and v != ""}
    if not clean:
        return base_url
    return f"{base_url}?{urlencode(clean)}"


# ── Parts ────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Column:
    """One table column.

    ``render`` receives the row object and returns cell HTML; plain strings
    are escaped, :class:`~markupsafe.Markup` is inserted as is.
    """

    key: str
    label: str
    render: CellRenderer
    sort_key: str | None = None
    css_class: str = ""


@dataclass(frozen=True, slots=True)
class RowAction:
    """An action link under the primary column of each row.

    A row action submits ``action=<name>`` and ``post[]=<row id>`` through a
    small per-row form, so it goes through the same handler as the bulk
    toolbar.
    """

    name: str
    label: str
    css_class: str = ""
    confirm: str | None = None
    applies: RowActionFilter | None = None


@dataclass(frozen=True, slots=True)
class BulkAction:
    """An option of the bulk-actions selector."""

    name: str
    label: str


@dataclass(frozen=True, slots=True)
class TableState:
    """Request-derived state: where the table lives and what it shows."""

    base_url: str
    total_items: int = 0
    per_page: int = 20
    current_page: int = 1
    orderby: str | None = None
    order: str | None = None
    default_orderby: str | None = None
    default_order: str = "desc"
    query: Mapping[str, Any] = field(default_factory=dict)

    @property
    def total_pages(self) -> int:
        if self.per_page <= 0:
            return 0
        return math.ceil(self.total_items / self.per_page)

    @property
    def effective_orderby(self) -> str | None:
        return self.orderby or self.default_orderby

    @property
    def effective_order(self) -> str:
        if self.order and self.order.lower() in ("asc", "desc"):
            return self.order.lower()
        return self.default_order

    def url(self, **overrides: Any) -> str:
        """The table URL with its current query, updated by *overrides*."""
        params = dict(self.query)
        params.update(overrides)
        return build_url(self.base_url, params)


# ── View objects ─────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class HeaderCell:
    key: str
    label: str
    css_class: str = ""
    sort_url: str | None = None
    sorted: bool = False
    direction: str = ""


@dataclass(frozen=True, slots=True)
class RenderedRowAction:
    name: str
    label: str
    form_id: str
    css_class: str = ""
    confirm: str | None = None


@dataclass(frozen=True, slots=True)
class RenderedRow:
    id: int
    cells: list[tuple[Column, Markup]]
    actions: list[RenderedRowAction]
    css_class: str = ""


@dataclass(frozen=True, slots=True)
class PageLinks:
    """First/previous/next/last links; ``None`` where a link is disabled."""

    current: int
    total_pages: int
    first: str | None = None
    prev: str | None = None
    next: str | None = None
    last: str | None = None


# ── Table ────────────────────────────────────────────────────────────────


@dataclass
class ListTable:
    """A composed admin list table.

    Attributes:
        columns: Data columns, in display order (the checkbox column is implicit).
        rows: Row objects passed to renderers.
        row_id: Returns the integer id of a row.
        state: Sort/page/URL state of the current request.
        primary: Key of the column that carries row actions.
        row_actions: Row action providers.
        bulk_actions: Options of the bulk selector, in display order.
        toolbar_extras: Markup appended to the bulk toolbar.
        checkbox_name: Form name of the row checkboxes.
        row_prefix: Prefix of each ``<tr>`` id.
        singular: Noun used for the item count, e.g. ``"item"``.
        no_items: Text shown when ``rows`` is empty.
    """

    columns: Sequence[Column]
    rows: Sequence[Any]
    row_id: Callable[[Any], int]
    state: TableState
    primary: str | None = None
    row_actions: Sequence[RowAction] = ()
    bulk_actions: Sequence[BulkAction] = ()
    toolbar_extras: Markup = field(default_factory=Markup)
    checkbox_name: str = "post[]"
    row_prefix: str = "post-"
    row_class: Callable[[Any], str] | None = None
    singular: str = "item"
    plural: str = "items"
    no_items: str = "No items found."

    def __post_init__(self) -> None:
        if self.primary is None and self.columns:
            self.primary = self.columns[0].key

    @property
    def column_count(self) -> int:
        """Columns including the checkbox column."""
        return len(self.columns) + 1

    def count_label(self) -> str:
        total = self.state.total_items
        return f"{total} {self.singular if total == 1 else self.plural}"

    def headers(self) -> list[HeaderCell]:
        """Header cells; sortable ones link to the toggled direction."""
        cells: list[HeaderCell] = []
        current = self.state.effective_orderby
        direction = self.state.effective_order
        for column in self.columns:
            if column.sort_key is None:
                cells.append(HeaderCell(column.key, column.label, column.css_class))
                continue
            is_sorted = column.sort_key == current
            if is_sorted:
                next_order = "asc" if direction == "desc" else "desc"
            else:
                next_order = "asc"
            cells.append(
                HeaderCell(
                    key=column.key,
                    label=column.label,
                    css_class=column.css_class,
                    sort_url=self.state.url(orderby=column.sort_key, order=next_order, paged=None),
                    sorted=is_sorted,
                    direction=direction if is_sorted else "",
                )
            )
        return cells

    def body(self) -> list[RenderedRow]:
        rendered: list[RenderedRow] = []
        for row in self.rows:
            row_id = self.row_id(row)
            cells = [(column, _to_markup(column.render(row))) for column in self.columns]
            rendered.append(
                RenderedRow(
                    id=row_id,
                    cells=cells,
                    actions=self._actions_for(row, row_id),
                    css_class=self.row_class(row) if self.row_class else "",
                )
            )
        return rendered

    def page_links(self) -> PageLinks:
        total_pages = self.state.total_pages
        current = min(max(1, self.state.current_page), max(1, total_pages))
        if total_pages <= 1:
            return PageLinks(current=current, total_pages=total_pages)

        def _page(n: int) -> str:
            return self.state.url(paged=n if n > 1 else None)

        return PageLinks(
            current=current,
            total_pages=total_pages,
            first=_page(1) if current > 2 else None,
            prev=_page(current - 1) if current > 1 else None,
            next=_page(current + 1) if current < total_pages else None,
            last=_page(total_pages) if current < total_pages - 1 else None,
        )

    def _actions_for(self, row: Any, row_id: int) -> list[RenderedRowAction]:
        return [
            RenderedRowAction(
                name=action.name,
                label=action.label,
                form_id=f"row-action-{action.name}-{row_id}",
                css_class=action.css_class,
                confirm=action.confirm,
            )
            for action in self.row_actions
            if action.applies is None or action.applies(row)
        ]


def _to_markup(value: Markup | str) -> Markup:
    if isinstance(value, Markup):
        return value
    return escape(value)


__all__ = [
    "BulkAction",
    "Column",
    "HeaderCell",
    "ListTable",
    "PageLinks",
    "RenderedRow",
    "RenderedRowAction",
    "RowAction",
    "TableState",
    "build_url",
]
