"""
Tests for orphan detection, summaries and the paged listing.
"""

from __future__ import annotations

import pytest

from orphaned_data.ops.orphans import (
    ALL_TYPES,
    list_orphaned_posts,
    list_orphaned_types,
    refresh_orphaned_types,
    resolve_type_filter,
)
from orphaned_data.ops.requests import ListOrphanedPostsRequest


class TestRefresh:
    def test_registers_placeholders(self, ctx, orphaned_posts):
        result = refresh_orphaned_types(ctx)
        assert result.success
        assert result.data == ["old_event", "wpz-portfolio"]
        assert [d.name for d in ctx.registry.placeholders()] == ["old_event", "wpz-portfolio"]

    def test_idempotent(self, ctx, orphaned_posts):
        first = refresh_orphaned_types(ctx).data
        second = refresh_orphaned_types(ctx).data
        assert first == second
        assert len(ctx.registry.placeholders()) == 2

    def test_nothing_orphaned(self, ctx, make_post):
        make_post("post")
        make_post("page")
        assert refresh_orphaned_types(ctx).data == []


class TestListOrphanedTypes:
    def test_summaries(self, ctx, orphaned_posts):
        summaries = list_orphaned_types(ctx).data
        assert [(s.name, s.label, s.count) for s in summaries] == [
            ("old_event", "Old Event", 3),
            ("wpz-portfolio", "Wpz Portfolio", 1),
        ]


class TestResolveTypeFilter:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(None, ALL_TYPES), ("", ALL_TYPES), ("all", ALL_TYPES), ("post", ALL_TYPES), ("old_event", "old_event")],
    )
    def test_resolution(self, value, expected):
        assert resolve_type_filter(value, ["old_event"]) == expected


class TestListOrphanedPosts:
    def test_lists_only_orphaned_records(self, ctx, orphaned_posts):
        result = list_orphaned_posts(ctx, ListOrphanedPostsRequest())
        assert result.success
        assert result.total == 4
        assert orphaned_posts["regular"] not in {p.id for p in result.data}

    def test_default_order_newest_first(self, ctx, orphaned_posts):
        result = list_orphaned_posts(ctx, ListOrphanedPostsRequest())
        assert result.data[0].id == orphaned_posts["wpz-portfolio"][0]

    def test_filter_by_type(self, ctx, orphaned_posts):
        result = list_orphaned_posts(ctx, ListOrphanedPostsRequest(type_filter="old_event"))
        assert result.total == 3
        assert {p.post_type for p in result.data} == {"old_event"}

    def test_non_orphaned_filter_lists_everything(self, ctx, orphaned_posts):
        result = list_orphaned_posts(ctx, ListOrphanedPostsRequest(type_filter="post"))
        assert result.total == 4

    def test_pagination(self, ctx, orphaned_posts):
        result = list_orphaned_posts(ctx, ListOrphanedPostsRequest(page=2, per_page=3))
        assert result.page == 2
        assert result.total_pages == 2
        assert len(result.data) == 1
        assert result.has_more is False

    def test_page_beyond_last_is_clamped(self, ctx, orphaned_posts):
        result = list_orphaned_posts(ctx, ListOrphanedPostsRequest(page=50, per_page=3))
        assert result.page == 2
        assert len(result.data) == 1

    def test_empty_listing(self, ctx, make_post):
        make_post("post")
        result = list_orphaned_posts(ctx, ListOrphanedPostsRequest(page=3))
        assert result.success
        assert result.total == 0
        assert result.page == 1
        assert result.data == []

    def test_summary_fields(self, ctx, orphaned_posts):
        result = list_orphaned_posts(ctx, ListOrphanedPostsRequest(orderby="title", order="asc"))
        first = result.data[0]
        assert first.title == ""
        assert first.post_type == "old_event"
        assert first.date == "2024-01-04 08:00:00"

    def test_storage_failure_is_reported(self, ctx, conn, orphaned_posts):
        conn.execute("DROP TABLE wp_posts")
        result = list_orphaned_posts(ctx, ListOrphanedPostsRequest())
        assert not result.success
        assert result.error.code == "INTERNAL"
