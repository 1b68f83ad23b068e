"""Connection factory: create database connections from URL strings.

This is the single entry point for opening a database connection.

Supported URL forms
-------------------
==========================  ==========================================  ============
Form                        Example                                     Backend
==========================  ==========================================  ============
memory                      ``memory`` or ``:memory:`` or ``None``       SQLite RAM
sqlite URL                  ``sqlite:///path/to/file.db``                SQLite file
file path                   ``./data/wp.db``                             SQLite file
any SQLAlchemy URL          ``mysql+pymysql://wp:wp@localhost/wp``       SQLAlchemy
==========================  ==========================================  ============

Usage
-----
::

    conn, info = create_connection("sqlite:///wp.db", init_schema=True)
    print(info)
    # ConnectionInfo(backend='sqlite', persistent=True, path='/abs/wp.db')

Unlike a best-effort connector, a backend that cannot be reached raises
:class:`~orphaned_data.core.errors.DatabaseError`; there is no silent
fallback to an empty in-memory database.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from orphaned_data.core.errors import ConfigError, DatabaseError
from orphaned_data.core.logging import get_logger
from orphaned_data.core.schema import TableNames, apply_schema

logger = get_logger(__name__)


# ── ConnectionInfo ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class ConnectionInfo:
    """Metadata about a database connection."""

    backend: str
    """Backend identifier: ``"sqlite"`` or the SQLAlchemy dialect name."""

    persistent: bool
    """Whether data survives process exit."""

    url: str
    """The original URL or path used to create the connection."""

    resolved_path: str | None = None
    """For file-based SQLite, the resolved absolute path."""

    def __repr__(self) -> str:
        parts = [f"backend={self.backend!r}", f"persistent={self.persistent}"]
        if self.resolved_path:
            parts.append(f"path={self.resolved_path!r}")
        else:
            parts.append(f"url={self.url!r}")
        return f"ConnectionInfo({', '.join(parts)})"

    @property
    def is_sqlite(self) -> bool:
        return self.backend == "sqlite"


# ── Backends ─────────────────────────────────────────────────────────────


def _create_sqlite_memory() -> tuple[Any, ConnectionInfo]:
    from orphaned_data.ops.sqlite_conn import SqliteConnection

    conn = SqliteConnection(":memory:")
    return conn, ConnectionInfo(backend="sqlite", persistent=False, url=":memory:")


def _create_sqlite_file(path_str: str) -> tuple[Any, ConnectionInfo]:
    from orphaned_data.ops.sqlite_conn import SqliteConnection

    path = Path(path_str).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    resolved = str(path.resolve())

    conn = SqliteConnection(resolved)
    info = ConnectionInfo(
        backend="sqlite",
        persistent=True,
        url=path_str,
        resolved_path=resolved,
    )
    return conn, info


def _create_sqlalchemy(url: str) -> tuple[Any, ConnectionInfo]:
    """Open a session-backed connection for any SQLAlchemy URL."""
    from sqlalchemy.exc import SQLAlchemyError
    from sqlalchemy.orm import Session

    from orphaned_data.core.orm.session import SAConnectionBridge, create_engine_for_url

    try:
        engine = create_engine_for_url(url)
    except (SQLAlchemyError, ImportError) as exc:
        raise ConfigError(f"Invalid database URL: {exc}", cause=exc) from exc

    session = Session(bind=engine, expire_on_commit=False)
    conn = SAConnectionBridge(session)
    try:
        conn.execute("SELECT 1")
    except SQLAlchemyError as exc:
        session.close()
        raise DatabaseError(
            f"Cannot connect to database: {exc}",
            context={"url": engine.url.render_as_string(hide_password=True)},
            cause=exc,
        ) from exc
    info = ConnectionInfo(backend=engine.dialect.name, persistent=True, url=url)
    return conn, info


# ── URL parsing ──────────────────────────────────────────────────────────


def _parse_url(db: str | None) -> tuple[str, str]:
    """Parse a database URL into ``(scheme, target)``.

    ``scheme`` is one of ``"memory"``, ``"sqlite"``, ``"sqlalchemy"``,
    ``"file"``.
    """
    if db is None or db in ("", "memory", ":memory:"):
        return "memory", ":memory:"

    for prefix in ("sqlite:///", "sqlite://"):
        if db.startswith(prefix):
            path = db[len(prefix):]
            if not path or path == ":memory:":
                return "memory", ":memory:"
            return "sqlite", path

    if "://" in db:
        return "sqlalchemy", db

    return "file", db


# ── Main factory ─────────────────────────────────────────────────────────


def create_connection(
    db: str | None = None,
    *,
    table_prefix: str = "wp_",
    init_schema: bool = False,
) -> tuple[Any, ConnectionInfo]:
    """Create a database connection from a URL, path, or keyword.

    Parameters
    ----------
    db:
        Database URL, file path, or ``None``/``"memory"`` for in-memory SQLite.
    table_prefix:
        WordPress table prefix used when *init_schema* is set.
    init_schema:
        If ``True``, create the posts/users/usermeta tables (SQLite only,
        idempotent).

    Returns
    -------
    tuple[Connection, ConnectionInfo]
    """
    scheme, target = _parse_url(db)

    if scheme == "memory":
        conn, info = _create_sqlite_memory()
    elif scheme in ("sqlite", "file"):
        conn, info = _create_sqlite_file(target)
    else:
        conn, info = _create_sqlalchemy(target)

    if init_schema:
        if info.is_sqlite:
            apply_schema(conn, TableNames(table_prefix))
        else:
            logger.info("schema_init_skipped", backend=info.backend)

    return conn, info


__all__ = ["ConnectionInfo", "create_connection"]
