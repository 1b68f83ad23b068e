"""Base repository with prefix-aware database access.

Provides :class:`BaseRepository`, which pairs a
:class:`~orphaned_data.core.protocols.Connection` with the
:class:`~orphaned_data.core.schema.TableNames` of one WordPress install, so
domain repositories write portable qmark SQL against prefixed tables.

Architecture::

    ┌──────────────────────────────────────────────────────┐
    │                   BaseRepository                     │
    │                                                      │
    │   conn: Connection      ← core.protocols             │
    │   tables: TableNames    ← core.schema                │
    │                                                      │
    │   execute(sql, params)     → cursor                  │
    │   query(sql, params)       → list[dict]              │
    │   query_one(sql, params)   → dict | None             │
    │   insert(table, data)      → new row id              │
    └──────────────────────────────────────────────────────┘

Usage:
    >>> class MyRepo(BaseRepository):
    ...     def get_by_id(self, id: int):
    ...         return self.query_one(
    ...             f"SELECT * FROM {self.tables.posts} WHERE ID = ?",
    ...             (id,),
    ...         )
"""

from __future__ import annotations

from typing import Any

from orphaned_data.core.protocols import Connection
from orphaned_data.core.schema import TableNames


class BaseRepository:
    """Prefix-aware base class for data-access repositories.

    Parameters:
        conn: Any object satisfying the :class:`Connection` protocol.
        tables: Table names for the install; defaults to the ``wp_`` prefix.
    """

    def __init__(self, conn: Connection, tables: TableNames | None = None) -> None:
        self.conn = conn
        self.tables = tables or TableNames()

    # -- Convenience shortcuts ---------------------------------------------

    @staticmethod
    def ph(count: int) -> str:
        """Comma-separated qmark placeholders for ``IN (...)`` clauses."""
        return ", ".join("?" for _ in range(count))

    # -- Query helpers -----------------------------------------------------

    def execute(self, sql: str, params: tuple = ()) -> Any:
        """Execute a statement and return the raw cursor/result."""
        return self.conn.execute(sql, params)

    def query(self, sql: str, params: tuple = ()) -> list[dict[str, Any]]:
        """Execute a SELECT and return rows as dicts."""
        cursor = self.conn.execute(sql, params)
        rows = cursor.fetchall()
        if not rows:
            return []

        # sqlite3.Row and mapping rows
        if hasattr(rows[0], "keys"):
            return [dict(row) for row in rows]

        if getattr(cursor, "description", None):
            columns = [desc[0] for desc in cursor.description]
            return [dict(zip(columns, row, strict=False)) for row in rows]

        return [{i: v for i, v in enumerate(row)} for row in rows]

    def query_one(self, sql: str, params: tuple = ()) -> dict[str, Any] | None:
        """Execute a SELECT and return the first row as a dict (or None)."""
        results = self.query(sql, params)
        return results[0] if results else None

    def scalar(self, sql: str, params: tuple = ()) -> Any:
        """Execute a SELECT and return the first column of the first row."""
        row = self.conn.execute(sql, params).fetchone()
        if row is None:
            return None
        return row[0]

    # -- Write helpers -----------------------------------------------------

    def insert(self, table: str, data: dict[str, Any]) -> int | None:
        """Insert a single row from a dict and return its row id if known."""
        columns = list(data.keys())
        sql = f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({self.ph(len(columns))})"
        cursor = self.conn.execute(sql, tuple(data.values()))
        return getattr(cursor, "lastrowid", None)

    def commit(self) -> None:
        """Commit the current transaction."""
        self.conn.commit()

    def rollback(self) -> None:
        """Roll back the current transaction."""
        self.conn.rollback()


__all__ = ["BaseRepository"]
