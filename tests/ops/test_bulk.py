"""
Tests for the bulk action processor.
"""

from __future__ import annotations

import sqlite3

import pytest

from orphaned_data.core.capabilities import ANONYMOUS
from orphaned_data.core.repositories import PostRepository
from orphaned_data.ops import bulk
from orphaned_data.ops.bulk import (
    available_bulk_actions,
    change_type_message,
    delete_message,
    normalize_ids,
    process_bulk_action,
)
from orphaned_data.ops.orphans import refresh_orphaned_types
from orphaned_data.ops.requests import BulkActionRequest


def _types(conn, tables, ids):
    repo = PostRepository(conn, tables)
    return [(repo.get(i) or {}).get("post_type") for i in ids]


class TestMessages:
    @pytest.mark.parametrize(
        ("count", "text"),
        [(0, "Deleted 0 posts."), (1, "Deleted 1 post."), (2, "Deleted 2 posts.")],
    )
    def test_delete_message(self, count, text):
        assert delete_message(count) == text

    @pytest.mark.parametrize(
        ("count", "text"),
        [
            (0, "Post type changed for 0 posts."),
            (1, "Post type changed for 1 post."),
            (3, "Post type changed for 3 posts."),
        ],
    )
    def test_change_type_message(self, count, text):
        assert change_type_message(count) == text


class TestNormalizeIds:
    def test_drops_non_integers_and_duplicates(self):
        assert normalize_ids(["3", "abc", "3", " 7 ", "-1", "0", "2.5", 4, True]) == [3, 7, 4]

    def test_empty(self):
        assert normalize_ids([]) == []


class TestAvailableActions:
    def test_order_for_admin(self, admin):
        assert [a.name for a in available_bulk_actions(admin)] == ["change_type", "delete"]

    def test_no_edit_action(self, admin):
        assert "edit" not in {a.name for a in available_bulk_actions(admin)}

    def test_subscriber_gets_none(self, subscriber):
        assert available_bulk_actions(subscriber) == []


class TestDelete:
    def test_deletes_and_reports(self, ctx, conn, tables, orphaned_posts):
        ids = orphaned_posts["old_event"]
        result = process_bulk_action(ctx, BulkActionRequest(action="delete", post_ids=tuple(map(str, ids))))

        assert result.success
        outcome = result.data
        assert outcome.affected == 3
        assert outcome.message == "Deleted 3 posts."
        assert _types(conn, tables, ids) == [None, None, None]

    def test_singular_message_and_notice(self, ctx, orphaned_posts):
        post_id = orphaned_posts["wpz-portfolio"][0]
        process_bulk_action(ctx, BulkActionRequest(action="delete", post_ids=(str(post_id),)))
        notices = ctx.notices.drain()
        assert [(n.message, n.type, n.code) for n in notices] == [("Deleted 1 post.", "success", "delete")]

    def test_missing_ids_are_not_counted(self, ctx, orphaned_posts):
        post_id = orphaned_posts["wpz-portfolio"][0]
        result = process_bulk_action(
            ctx, BulkActionRequest(action="delete", post_ids=(str(post_id), "9999", str(post_id)))
        )
        assert result.data.affected == 1
        assert result.data.requested == 2

    def test_zero_deleted_is_info_notice(self, ctx):
        result = process_bulk_action(ctx, BulkActionRequest(action="delete", post_ids=("404",)))
        assert result.data.message == "Deleted 0 posts."
        assert ctx.notices.drain()[0].type == "info"

    def test_dry_run_changes_nothing(self, dry_ctx, conn, tables, orphaned_posts):
        ids = orphaned_posts["old_event"]
        result = process_bulk_action(dry_ctx, BulkActionRequest(action="delete", post_ids=tuple(ids)))
        assert result.data.affected == 3
        assert result.data.dry_run is True
        assert _types(conn, tables, ids) == ["old_event"] * 3


class TestChangeType:
    def test_changes_type(self, ctx, conn, tables, orphaned_posts):
        refresh_orphaned_types(ctx)
        ids = orphaned_posts["old_event"]
        result = process_bulk_action(
            ctx,
            BulkActionRequest(action="change_type", post_ids=tuple(map(str, ids)), target_type="page"),
        )
        assert result.data.affected == 3
        assert result.data.message == "Post type changed for 3 posts."
        assert result.data.target_type == "page"
        assert _types(conn, tables, ids) == ["page"] * 3

    @pytest.mark.parametrize("target", [None, "", "no_such_type", "revision", "old_event"])
    def test_invalid_target_changes_nothing(self, ctx, conn, tables, orphaned_posts, target):
        refresh_orphaned_types(ctx)
        ids = orphaned_posts["old_event"]
        result = process_bulk_action(
            ctx,
            BulkActionRequest(action="change_type", post_ids=tuple(map(str, ids)), target_type=target),
        )
        assert result.data.affected == 0
        assert result.data.message == "Post type changed for 0 posts."
        assert _types(conn, tables, ids) == ["old_event"] * 3

    @pytest.mark.parametrize("target", [None, ""])
    def test_mutation_without_target_is_refused(self, conn, tables, orphaned_posts, target):
        post_id = orphaned_posts["old_event"][0]
        repo = PostRepository(conn, tables)
        assert bulk.BULK_ACTIONS["change_type"].mutate(repo, post_id, target) is False
        assert _types(conn, tables, [post_id]) == ["old_event"]

    def test_orphan_disappears_after_retype(self, ctx, orphaned_posts):
        ids = orphaned_posts["wpz-portfolio"]
        assert "wpz-portfolio" in refresh_orphaned_types(ctx).data
        process_bulk_action(
            ctx, BulkActionRequest(action="change_type", post_ids=tuple(ids), target_type="post")
        )
        assert refresh_orphaned_types(ctx).data == ["old_event"]


class TestIgnoredActions:
    @pytest.mark.parametrize("action", ["-1", "", "edit", "trash", "DELETE"])
    def test_unknown_action_is_noop(self, ctx, conn, tables, orphaned_posts, action):
        ids = orphaned_posts["old_event"]
        result = process_bulk_action(ctx, BulkActionRequest(action=action, post_ids=tuple(ids)))
        assert result.success
        assert result.data is None
        assert len(ctx.notices) == 0
        assert _types(conn, tables, ids) == ["old_event"] * 3

    def test_forbidden_action_is_noop(self, ctx, conn, tables, subscriber, orphaned_posts):
        ctx.user = subscriber
        ids = orphaned_posts["old_event"]
        result = process_bulk_action(ctx, BulkActionRequest(action="delete", post_ids=tuple(ids)))
        assert result.data is None
        assert len(ctx.notices) == 0
        assert _types(conn, tables, ids) == ["old_event"] * 3

    def test_anonymous_is_noop(self, ctx, orphaned_posts):
        ctx.user = ANONYMOUS
        result = process_bulk_action(
            ctx, BulkActionRequest(action="delete", post_ids=tuple(orphaned_posts["old_event"]))
        )
        assert result.data is None


class TestPerRecordFailures:
    def test_failed_record_is_excluded(self, ctx, conn, tables, orphaned_posts, monkeypatch):
        ids = orphaned_posts["old_event"]
        poisoned = ids[1]
        real_delete = PostRepository.delete

        def flaky_delete(self, post_id):
            if post_id == poisoned:
                raise sqlite3.OperationalError("database is locked")
            return real_delete(self, post_id)

        monkeypatch.setattr(PostRepository, "delete", flaky_delete)
        result = process_bulk_action(ctx, BulkActionRequest(action="delete", post_ids=tuple(ids)))

        assert result.data.affected == 2
        assert result.data.failed_ids == [poisoned]
        assert result.data.message == "Deleted 2 posts."
        assert _types(conn, tables, ids) == [None, "old_event", None]

    def test_non_database_errors_propagate(self, ctx, orphaned_posts, monkeypatch):
        def broken(repo, post_id, target):
            raise RuntimeError("host failure")

        spec = bulk.BULK_ACTIONS["delete"]
        monkeypatch.setitem(
            bulk.BULK_ACTIONS,
            "delete",
            bulk.BulkActionSpec(
                name=spec.name,
                label=spec.label,
                capability=spec.capability,
                mutate=broken,
                message=spec.message,
            ),
        )
        with pytest.raises(RuntimeError):
            process_bulk_action(
                ctx, BulkActionRequest(action="delete", post_ids=tuple(orphaned_posts["old_event"]))
            )
