"""
WordPress-shaped tables read and written by orphaned-data.

Only the columns this tool touches are declared; a real WordPress database
has many more and works unchanged.  All table names carry the configured
prefix (``wp_`` by default)::

    {prefix}posts               ID, post_author, post_date, post_title,
                                post_status, post_name, post_modified,
                                post_parent, post_type
    {prefix}postmeta            meta_id, post_id, meta_key, meta_value
    {prefix}users               ID, user_login, display_name
    {prefix}usermeta            umeta_id, user_id, meta_key, meta_value
    {prefix}comments            comment_ID, comment_post_ID, comment_author,
                                comment_date, comment_content,
                                comment_approved, comment_parent
    {prefix}commentmeta         meta_id, comment_id, meta_key, meta_value
    {prefix}term_relationships  object_id, term_taxonomy_id, term_order

The DDL below is SQLite syntax and is only applied to SQLite databases;
a MySQL WordPress install already has these tables.
"""

from __future__ import annotations

from dataclasses import dataclass

from orphaned_data.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class TableNames:
    """Prefixed table names for one WordPress install."""

    prefix: str = "wp_"

    @property
    def posts(self) -> str:
        return f"{self.prefix}posts"

    @property
    def postmeta(self) -> str:
        return f"{self.prefix}postmeta"

    @property
    def users(self) -> str:
        return f"{self.prefix}users"

    @property
    def usermeta(self) -> str:
        return f"{self.prefix}usermeta"

    @property
    def comments(self) -> str:
        return f"{self.prefix}comments"

    @property
    def commentmeta(self) -> str:
        return f"{self.prefix}commentmeta"

    @property
    def term_relationships(self) -> str:
        return f"{self.prefix}term_relationships"

    def all(self) -> list[str]:
        return [
            self.posts,
            self.postmeta,
            self.users,
            self.usermeta,
            self.comments,
            self.commentmeta,
            self.term_relationships,
        ]


def schema_statements(tables: TableNames) -> list[str]:
    """Return idempotent ``CREATE ... IF NOT EXISTS`` statements."""
    return [
        f"""
        CREATE TABLE IF NOT EXISTS {tables.posts} (
            ID            INTEGER PRIMARY KEY AUTOINCREMENT,
            post_author   INTEGER NOT NULL DEFAULT 0,
            post_date     TEXT    NOT NULL DEFAULT '0000-00-00 00:00:00',
            post_title    TEXT    NOT NULL DEFAULT '',
            post_status   TEXT    NOT NULL DEFAULT 'publish',
            post_name     TEXT    NOT NULL DEFAULT '',
            post_modified TEXT    NOT NULL DEFAULT '0000-00-00 00:00:00',
            post_parent   INTEGER NOT NULL DEFAULT 0,
            post_type     TEXT    NOT NULL DEFAULT 'post'
        )
        """,
        f"""
        CREATE INDEX IF NOT EXISTS {tables.posts}_type_status_date
            ON {tables.posts} (post_type, post_status, post_date, ID)
        """,
        f"""
        CREATE TABLE IF NOT EXISTS {tables.postmeta} (
            meta_id    INTEGER PRIMARY KEY AUTOINCREMENT,
            post_id    INTEGER NOT NULL DEFAULT 0,
            meta_key   TEXT,
            meta_value TEXT
        )
        """,
        f"""
        CREATE INDEX IF NOT EXISTS {tables.postmeta}_post_id
            ON {tables.postmeta} (post_id)
        """,
        f"""
        CREATE TABLE IF NOT EXISTS {tables.users} (
            ID           INTEGER PRIMARY KEY AUTOINCREMENT,
            user_login   TEXT NOT NULL DEFAULT '',
            display_name TEXT NOT NULL DEFAULT ''
        )
        """,
        f"""
        CREATE TABLE IF NOT EXISTS {tables.usermeta} (
            umeta_id   INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id    INTEGER NOT NULL DEFAULT 0,
            meta_key   TEXT,
            meta_value TEXT
        )
        """,
        f"""
        CREATE INDEX IF NOT EXISTS {tables.usermeta}_user_key
            ON {tables.usermeta} (user_id, meta_key)
        """,
        f"""
        CREATE TABLE IF NOT EXISTS {tables.comments} (
            comment_ID       INTEGER PRIMARY KEY AUTOINCREMENT,
            comment_post_ID  INTEGER NOT NULL DEFAULT 0,
            comment_author   TEXT    NOT NULL DEFAULT '',
            comment_date     TEXT    NOT NULL DEFAULT '0000-00-00 00:00:00',
            comment_content  TEXT    NOT NULL DEFAULT '',
            comment_approved TEXT    NOT NULL DEFAULT '1',
            comment_parent   INTEGER NOT NULL DEFAULT 0
        )
        """,
        f"""
        CREATE INDEX IF NOT EXISTS {tables.comments}_post_id
            ON {tables.comments} (comment_post_ID)
        """,
        f"""
        CREATE TABLE IF NOT EXISTS {tables.commentmeta} (
            meta_id    INTEGER PRIMARY KEY AUTOINCREMENT,
            comment_id INTEGER NOT NULL DEFAULT 0,
            meta_key   TEXT,
            meta_value TEXT
        )
        """,
        f"""
        CREATE TABLE IF NOT EXISTS {tables.term_relationships} (
            object_id        INTEGER NOT NULL DEFAULT 0,
            term_taxonomy_id INTEGER NOT NULL DEFAULT 0,
            term_order       INTEGER NOT NULL DEFAULT 0,
            PRIMARY KEY (object_id, term_taxonomy_id)
        )
        """,
    ]


def apply_schema(conn, tables: TableNames) -> list[str]:
    """Create the tables on *conn* (SQLite only).  Returns the table names."""
    for statement in schema_statements(tables):
        conn.execute(statement)
    conn.commit()
    created = tables.all()
    logger.debug("schema_applied", tables=created)
    return created


__all__ = ["TableNames", "apply_schema", "schema_statements"]
