"""
Structural protocols for database access.

Domain code depends on the *shape* of a connection, not on a driver.  Both
:class:`~orphaned_data.ops.sqlite_conn.SqliteConnection` and
:class:`~orphaned_data.core.orm.session.SAConnectionBridge` satisfy
:class:`Connection`, so repositories run unchanged on SQLite and on a live
WordPress MySQL database.

Placeholders are always qmark (``?``); the SQLAlchemy bridge rewrites them
to named parameters.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Connection(Protocol):
    """Minimal synchronous connection interface.

    ``execute`` returns an object exposing ``fetchone()``, ``fetchall()``,
    ``rowcount`` and ``description`` for the statement just run.
    """

    def execute(self, sql: str, params: tuple = ()) -> Any:
        """Execute SQL statement with optional parameters."""
        ...

    def executemany(self, sql: str, params: list[tuple]) -> Any:
        """Execute SQL statement for multiple parameter sets."""
        ...

    def fetchone(self) -> Any:
        """Fetch one row from last query."""
        ...

    def fetchall(self) -> list:
        """Fetch all rows from last query."""
        ...

    def commit(self) -> None:
        """Commit current transaction."""
        ...

    def rollback(self) -> None:
        """Rollback current transaction."""
        ...


__all__ = ["Connection"]
