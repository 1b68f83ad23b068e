"""
FastAPI dependency injection: shared singletons and per-request factories.

Usage in routers::

    from orphaned_data.api.deps import OpContext, Plugin

    @router.get("/things")
    def list_things(ctx: OpContext, plugin: Plugin):
        ...

Singletons (settings, plugin, templates) are created once; per-request
objects (connection, current user, OperationContext) carry request-scoped
state through the call chain instead of globals.

Tags:
    api, dependency-injection, OperationContext
"""

from __future__ import annotations

import uuid
from collections.abc import Generator
from functools import lru_cache
from typing import Annotated, Any

from fastapi import Depends, Request
from fastapi.templating import Jinja2Templates

from orphaned_data.api.settings import AdminSettings
from orphaned_data.core.capabilities import User
from orphaned_data.core.connection import create_connection
from orphaned_data.core.schema import TableNames
from orphaned_data.ops.context import OperationContext
from orphaned_data.ops.users import load_user
from orphaned_data.plugin import OrphanedDataPlugin

USER_HEADER = "X-User-Id"

# ── Singletons ───────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_settings() -> AdminSettings:
    """Cached settings, loaded once per process."""
    return AdminSettings()


def get_plugin(request: Request) -> OrphanedDataPlugin:
    """The plugin built by ``create_app``."""
    return request.app.state.plugin


def get_templates(request: Request) -> Jinja2Templates:
    return request.app.state.templates


# ── Database connection (per-request) ────────────────────────────────────


def get_connection(
    settings: Annotated[AdminSettings, Depends(get_settings)],
) -> Generator[Any, None, None]:
    """Yield a database connection for the request lifespan."""
    conn, _info = create_connection(settings.database_url, table_prefix=settings.table_prefix)
    try:
        yield conn
    finally:
        if hasattr(conn, "close"):
            conn.close()


# ── Current user (per-request) ───────────────────────────────────────────


def get_current_user(
    request: Request,
    conn: Annotated[Any, Depends(get_connection)],
    settings: Annotated[AdminSettings, Depends(get_settings)],
) -> User:
    """The acting user from ``X-User-Id``, else ``settings.default_user_id``."""
    user_id = request.headers.get(USER_HEADER, settings.default_user_id)
    return load_user(conn, TableNames(settings.table_prefix), user_id)


# ── Operation context (per-request) ──────────────────────────────────────


def get_operation_context(
    request: Request,
    conn: Annotated[Any, Depends(get_connection)],
    settings: Annotated[AdminSettings, Depends(get_settings)],
    plugin: Annotated[OrphanedDataPlugin, Depends(get_plugin)],
    user: Annotated[User, Depends(get_current_user)],
) -> OperationContext:
    """Build an :class:`OperationContext`, refresh placeholder types and
    keep the orphaned names on it."""
    request_id = getattr(request.state, "request_id", str(uuid.uuid4()))
    ctx = OperationContext(
        conn=conn,
        registry=plugin.registry,
        tables=TableNames(settings.table_prefix),
        user=user,
        request_id=request_id,
        caller="admin",
    )
    ctx.orphaned_types = plugin.refresh(ctx)
    return ctx


# ── Convenience type aliases ─────────────────────────────────────────────

Settings = Annotated[AdminSettings, Depends(get_settings)]
Conn = Annotated[Any, Depends(get_connection)]
CurrentUser = Annotated[User, Depends(get_current_user)]
OpContext = Annotated[OperationContext, Depends(get_operation_context)]
Plugin = Annotated[OrphanedDataPlugin, Depends(get_plugin)]
Templates = Annotated[Jinja2Templates, Depends(get_templates)]
