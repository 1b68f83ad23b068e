"""
End-to-end: a leftover type is detected, listed and moved back to ``post``.
"""

from __future__ import annotations

import re

from orphaned_data.core.repositories import PostRepository
from orphaned_data.ops.bulk import process_bulk_action
from orphaned_data.ops.orphans import list_orphaned_posts, refresh_orphaned_types
from orphaned_data.ops.requests import BulkActionRequest, ListOrphanedPostsRequest

PAGE = "/admin/tools/orphaned-data"


class TestOrphanRepairScenario:
    def test_ops_flow(self, ctx, conn, tables, make_post):
        make_post("post", "Regular")
        legacy = [make_post("old_plugin_event", f"Event {n}") for n in range(3)]
        make_post("page", "About")

        assert refresh_orphaned_types(ctx).data == ["old_plugin_event"]
        assert refresh_orphaned_types(ctx).data == ["old_plugin_event"]

        listing = list_orphaned_posts(ctx, ListOrphanedPostsRequest())
        assert sorted(p.id for p in listing.data) == legacy

        result = process_bulk_action(
            ctx,
            BulkActionRequest(action="change_type", post_ids=tuple(map(str, legacy)), target_type="post"),
        )
        assert result.data.affected == 3
        assert result.data.message == "Post type changed for 3 posts."

        repo = PostRepository(conn, tables)
        assert [repo.get(i)["post_type"] for i in legacy] == ["post"] * 3
        assert refresh_orphaned_types(ctx).data == []

    def test_http_flow(self, client, admin, make_post):
        make_post("post", "Regular")
        legacy = [make_post("old_plugin_event", f"Event {n}") for n in range(3)]
        make_post("page", "About")

        html = client.get(PAGE).text
        assert sorted(int(i) for i in re.findall(r'<tr id="post-(\d+)"', html)) == legacy
        assert "Old Plugin Event (3)" in html

        html = client.post(
            PAGE,
            data={"action": "change_type", "target_type": "post", "post[]": [str(i) for i in legacy]},
        ).text
        assert "Post type changed for 3 posts." in html
        assert "No orphaned posts found." in html
