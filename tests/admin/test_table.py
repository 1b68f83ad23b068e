"""
Tests for the generic list table and the orphaned posts table.
"""

from __future__ import annotations

from markupsafe import Markup

from orphaned_data.admin.orphaned_table import (
    NO_TITLE,
    build_orphaned_table,
    date_status,
    format_post_date,
    render_target_selector,
    render_title,
    target_type_choices,
)
from orphaned_data.admin.table import Column, ListTable, RowAction, TableState, build_url
from orphaned_data.core.capabilities import User
from orphaned_data.core.types import TypeRegistry
from orphaned_data.ops.responses import PostSummary

ADMIN = User(id=1, login="admin", level=10)
SUBSCRIBER = User(id=3, login="sub", level=0)


def _post(**kwargs) -> PostSummary:
    defaults = {"id": 5, "title": "Legacy", "post_type": "old_event", "status": "publish", "date": "2024-01-15 16:43:00"}
    defaults.update(kwargs)
    return PostSummary(**defaults)


def _table(posts=(), *, user=ADMIN, total=None, page=1, per_page=20, **kwargs) -> ListTable:
    registry = TypeRegistry.with_builtins()
    registry.register_placeholder("old_event")
    return build_orphaned_table(
        list(posts),
        user=user,
        registry=registry,
        orphaned=["old_event"],
        base_url="/admin/tools/orphaned-data",
        total_items=len(posts) if total is None else total,
        per_page=per_page,
        current_page=page,
        **kwargs,
    )


class TestBuildUrl:
    def test_drops_empty_values(self):
        assert build_url("/x", {"a": "1", "b": None, "c": ""}) == "/x?a=1"

    def test_no_params(self):
        assert build_url("/x", {}) == "/x"


class TestListTable:
    def _generic(self, total=45, page=1, orderby=None, order=None) -> ListTable:
        return ListTable(
            columns=[
                Column("name", "Name", render=lambda r: r["name"], sort_key="name"),
                Column("note", "Note", render=lambda r: Markup("<em>{}</em>").format(r["note"])),
            ],
            rows=[{"id": 1, "name": "<b>x</b>", "note": "n"}],
            row_id=lambda r: r["id"],
            state=TableState(
                base_url="/t",
                total_items=total,
                per_page=20,
                current_page=page,
                orderby=orderby,
                order=order,
                query={"orphaned_type": "old_event"},
            ),
            row_actions=[RowAction("delete", "Delete", applies=lambda r: r["id"] != 1)],
        )

    def test_plain_strings_are_escaped(self):
        row = self._generic().body()[0]
        assert row.cells[0][1] == Markup("&lt;b&gt;x&lt;/b&gt;")
        assert row.cells[1][1] == Markup("<em>n</em>")

    def test_row_action_filter(self):
        assert self._generic().body()[0].actions == []

    def test_primary_defaults_to_first_column(self):
        assert self._generic().primary == "name"

    def test_sort_links_keep_query_and_toggle(self):
        headers = self._generic(orderby="name", order="asc").headers()
        assert headers[0].sorted is True
        assert headers[0].sort_url == "/t?orphaned_type=old_event&orderby=name&order=desc"
        assert headers[1].sort_url is None

    def test_unsorted_column_links_ascending(self):
        assert self._generic().headers()[0].sort_url.endswith("orderby=name&order=asc")

    def test_page_links_middle(self):
        links = self._generic(total=100, page=3).page_links()
        assert links.total_pages == 5
        assert links.first == "/t?orphaned_type=old_event"
        assert links.prev == "/t?orphaned_type=old_event&paged=2"
        assert links.next == "/t?orphaned_type=old_event&paged=4"
        assert links.last == "/t?orphaned_type=old_event&paged=5"

    def test_page_links_first_page(self):
        links = self._generic(total=45, page=1).page_links()
        assert links.first is None and links.prev is None
        assert links.next is not None

    def test_single_page_has_no_links(self):
        links = self._generic(total=3).page_links()
        assert (links.first, links.prev, links.next, links.last) == (None, None, None, None)

    def test_count_label(self):
        assert self._generic(total=1).count_label() == "1 item"
        assert self._generic(total=45).count_label() == "45 items"


class TestCellRenderers:
    def test_title_fallback_and_state(self):
        html = render_title(_post(title="  ", status="draft"))
        assert NO_TITLE in html
        assert "&mdash; <span class=\"post-state\">Draft</span>" in html

    def test_title_is_escaped(self):
        assert "&lt;script&gt;" in render_title(_post(title="<script>"))

    def test_date_status(self):
        assert date_status(_post(status="publish")) == "Published"
        assert date_status(_post(status="future")) == "Scheduled"
        assert date_status(_post(status="draft")) == "Last Modified"

    def test_format_post_date(self):
        assert format_post_date("2024-01-15 16:43:00") == "2024/01/15 at 4:43 pm"
        assert format_post_date("2024-01-15 00:05:00") == "2024/01/15 at 12:05 am"
        assert format_post_date("0000-00-00 00:00:00") == "Unpublished"


class TestOrphanedTable:
    def test_choices_exclude_orphaned_and_internal(self):
        registry = TypeRegistry.with_builtins(["product"])
        registry.register_placeholder("old_event")
        names = [d.name for d in target_type_choices(registry, ["old_event"])]
        assert names == ["post", "page", "attachment", "product"]

    def test_columns(self):
        table = _table([_post()])
        assert [c.key for c in table.columns] == ["title", "type", "date"]
        assert table.column_count == 4

    def test_type_dropdown(self):
        table = _table([_post()])
        cells = dict((column.key, html) for column, html in table.body()[0].cells)
        select = str(cells["type"])
        assert "<option selected disabled hidden>Old Event</option>" in select
        assert '<option value="post">Post</option>' in select
        assert '<option value="page">Page</option>' in select
        assert 'value="old_event"' not in select
        assert 'value="revision"' not in select

    def test_admin_actions(self):
        table = _table([_post()])
        assert [a.name for a in table.bulk_actions] == ["change_type", "delete"]
        row = table.body()[0]
        assert [(a.name, a.label, a.form_id) for a in row.actions] == [
            ("delete", "Delete Permanently", "row-action-delete-5")
        ]

    def test_subscriber_sees_no_actions(self):
        table = _table([_post()], user=SUBSCRIBER)
        assert table.bulk_actions == []
        assert table.body()[0].actions == []
        assert table.toolbar_extras == Markup("")

    def test_target_selector_hidden_until_change_type(self):
        assert 'class="bulkactions-post-type hidden"' in _table().toolbar_extras
        shown = _table(selected_action="change_type", selected_target="page").toolbar_extras
        assert 'class="bulkactions-post-type"' in shown
        assert '<option value="page" selected>Page</option>' in shown

    def test_target_selector_standalone(self):
        registry = TypeRegistry.with_builtins()
        html = render_target_selector(registry.public())
        assert 'name="target_type"' in html
        assert '<option value="">Select post type</option>' in html

    def test_row_class(self):
        row = _table([_post(status="draft")]).body()[0]
        assert row.css_class == "type-old_event status-draft"

    def test_default_sort_is_date_desc(self):
        headers = {h.key: h for h in _table([_post()]).headers()}
        assert headers["date"].sorted is True
        assert headers["date"].direction == "desc"
        assert "order=asc" in headers["date"].sort_url
