"""Post repository: reads and mutations on ``{prefix}posts``.

Tags:
    repository, posts
"""

from __future__ import annotations

from typing import Any

from orphaned_data.core.repository import BaseRepository

from ._helpers import PageSlice, _order_clause

SORT_COLUMNS: dict[str, str] = {
    "title": "post_title",
    "type": "post_type",
    "date": "post_date",
}

_LIST_COLUMNS = "ID, post_title, post_type, post_status, post_date, post_modified, post_parent"


class PostRepository(BaseRepository):
    """Queries over the posts table used by orphan detection and the list screen."""

    # -- reads -----------------------------------------------------------------

    def distinct_types(self) -> list[str]:
        """Distinct ``post_type`` values ordered by first occurrence (lowest ID)."""
        rows = self.query(
            f"SELECT post_type, MIN(ID) AS first_id FROM {self.tables.posts} "
            f"GROUP BY post_type ORDER BY first_id ASC"
        )
        return [r["post_type"] for r in rows]

    def count_by_type(self, types: list[str]) -> dict[str, int]:
        """Record counts for each of *types* (missing types count 0)."""
        if not types:
            return {}
        rows = self.query(
            f"SELECT post_type, COUNT(*) AS cnt FROM {self.tables.posts} "
            f"WHERE post_type IN ({self.ph(len(types))}) GROUP BY post_type",
            tuple(types),
        )
        counts = {t: 0 for t in types}
        for row in rows:
            counts[row["post_type"]] = int(row["cnt"])
        return counts

    def list_by_types(
        self,
        types: list[str],
        *,
        orderby: str | None = None,
        order: str | None = None,
        page: PageSlice | None = None,
    ) -> tuple[list[dict[str, Any]], int]:
        """List posts whose type is in *types*.  Returns ``(rows, total)``."""
        if not types:
            return [], 0
        page = page or PageSlice()
        where = f"post_type IN ({self.ph(len(types))})"
        params = tuple(types)

        total = self.scalar(
            f"SELECT COUNT(*) FROM {self.tables.posts} WHERE {where}",
            params,
        ) or 0

        order_sql = _order_clause(
            orderby, order, SORT_COLUMNS, default="date", tiebreaker="ID"
        )
        rows = self.query(
            f"SELECT {_LIST_COLUMNS} FROM {self.tables.posts} WHERE {where} "
            f"ORDER BY {order_sql} LIMIT ? OFFSET ?",
            (*params, page.limit, page.offset),
        )
        return rows, int(total)

    def get(self, post_id: int) -> dict[str, Any] | None:
        """Get a post by ID."""
        return self.query_one(
            f"SELECT {_LIST_COLUMNS} FROM {self.tables.posts} WHERE ID = ?",
            (post_id,),
        )

    # -- writes ----------------------------------------------------------------

    def create(self, data: dict[str, Any]) -> int | None:
        """Insert a post row and return its ID."""
        return self.insert(self.tables.posts, data)

    def set_type(self, post_id: int, post_type: str) -> bool:
        """Change the type of one post.  Returns whether a row was updated."""
        cursor = self.execute(
            f"UPDATE {self.tables.posts} SET post_type = ? WHERE ID = ?",
            (post_type, post_id),
        )
        return cursor.rowcount > 0

    def delete(self, post_id: int) -> bool:
        """Permanently delete one post with its meta, revisions, comments and
        term relationships.

        Other children are detached (``post_parent`` reset to 0).  Returns
        whether the post row itself was deleted.
        """
        revisions = [
            r["ID"]
            for r in self.query(
                f"SELECT ID FROM {self.tables.posts} "
                f"WHERE post_parent = ? AND post_type = 'revision'",
                (post_id,),
            )
        ]
        doomed = [post_id, *revisions]
        self.execute(
            f"DELETE FROM {self.tables.postmeta} WHERE post_id IN ({self.ph(len(doomed))})",
            tuple(doomed),
        )
        self._delete_comments(doomed)
        self.execute(
            f"DELETE FROM {self.tables.term_relationships} WHERE object_id IN ({self.ph(len(doomed))})",
            tuple(doomed),
        )
        if revisions:
            self.execute(
                f"DELETE FROM {self.tables.posts} WHERE ID IN ({self.ph(len(revisions))})",
                tuple(revisions),
            )
        self.execute(
            f"UPDATE {self.tables.posts} SET post_parent = 0 WHERE post_parent = ?",
            (post_id,),
        )
        cursor = self.execute(
            f"DELETE FROM {self.tables.posts} WHERE ID = ?",
            (post_id,),
        )
        return cursor.rowcount > 0

    def _delete_comments(self, post_ids: list[int]) -> None:
        comment_ids = [
            r["comment_ID"]
            for r in self.query(
                f"SELECT comment_ID FROM {self.tables.comments} "
                f"WHERE comment_post_ID IN ({self.ph(len(post_ids))})",
                tuple(post_ids),
            )
        ]
        if not comment_ids:
            return
        marks = self.ph(len(comment_ids))
        self.execute(
            f"DELETE FROM {self.tables.commentmeta} WHERE comment_id IN ({marks})",
            tuple(comment_ids),
        )
        self.execute(
            f"DELETE FROM {self.tables.comments} WHERE comment_ID IN ({marks})",
            tuple(comment_ids),
        )
