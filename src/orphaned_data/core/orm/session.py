"""SQLAlchemy engine factory and Connection bridge.

``SAConnectionBridge`` wraps a SQLAlchemy ``Session`` so that it satisfies
:class:`orphaned_data.core.protocols.Connection`.  Repositories keep writing
qmark SQL; the bridge rewrites ``?`` into ``:p0, :p1, ...`` for ``text()``.
This is how the tool talks to a live WordPress MySQL database.

Tags:
    orm, sqlalchemy, session, bridge, connection
"""

from __future__ import annotations

from collections.abc import Sequence
from functools import lru_cache
from typing import Any

from sqlalchemy import create_engine as _sa_create_engine
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session


@lru_cache(maxsize=8)
def create_engine_for_url(url: str, *, echo: bool = False) -> Engine:
    """Create (once per URL) a SQLAlchemy engine with pool pre-ping enabled."""
    return _sa_create_engine(url, echo=echo, pool_pre_ping=True)


def _rewrite_qmark(sql: str) -> str:
    """Rewrite positional ``?`` placeholders as ``:p0, :p1, ...``."""
    rewritten: list[str] = []
    idx = 0
    for ch in sql:
        if ch == "?":
            rewritten.append(f":p{idx}")
            idx += 1
        else:
            rewritten.append(ch)
    return "".join(rewritten)


class SAConnectionBridge:
    """Adapter that makes a SQLAlchemy ``Session`` look like ``Connection``.

    ``execute`` returns the bridge itself, which then exposes ``fetchone``,
    ``fetchall``, ``rowcount`` and ``description`` for the last statement.
    """

    def __init__(self, session: Session) -> None:
        self._session = session
        self._last_result: Any = None

    # --- execute / executemany ---

    def execute(self, sql: str, parameters: Sequence[Any] | None = None) -> SAConnectionBridge:
        if parameters:
            mapping = {f"p{i}": v for i, v in enumerate(parameters)}
            self._last_result = self._session.execute(text(_rewrite_qmark(sql)), mapping)
        else:
            self._last_result = self._session.execute(text(sql))
        return self

    def executemany(self, sql: str, seq_of_parameters: Sequence[Sequence[Any]]) -> SAConnectionBridge:
        for params in seq_of_parameters:
            self.execute(sql, params)
        return self

    # --- fetch ---

    def fetchone(self) -> tuple[Any, ...] | None:
        if self._last_result is None:
            return None
        row = self._last_result.fetchone()
        return tuple(row) if row is not None else None

    def fetchall(self) -> list[tuple[Any, ...]]:
        if self._last_result is None:
            return []
        return [tuple(r) for r in self._last_result.fetchall()]

    # --- transaction ---

    def commit(self) -> None:
        self._session.commit()

    def rollback(self) -> None:
        self._session.rollback()

    def close(self) -> None:
        self._session.close()

    # --- properties ---

    @property
    def rowcount(self) -> int:
        if self._last_result is None:
            return -1
        return self._last_result.rowcount

    @property
    def lastrowid(self) -> int | None:
        if self._last_result is None:
            return None
        return self._last_result.lastrowid

    @property
    def description(self) -> list[tuple[Any, ...]] | None:
        """DB-API 2.0 compatible description from the last result."""
        if self._last_result is None or not self._last_result.returns_rows:
            return None
        keys = list(self._last_result.keys())
        return [(k, None, None, None, None, None, None) for k in keys]

    @property
    def session(self) -> Session:
        return self._session
