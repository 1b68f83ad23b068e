"""
FastAPI application factory.

``create_app()`` wires settings, logging, the plugin, templates, static
assets, middleware, routers and error handlers into a single ``FastAPI``
instance.  It is the single composition root: the rest of the codebase
never touches ``FastAPI`` directly.

Tags:
    api, app-factory, composition-root, FastAPI
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from orphaned_data import __version__
from orphaned_data.api.deps import get_settings
from orphaned_data.api.middleware.auth import AuthMiddleware
from orphaned_data.api.middleware.errors import (
    orphaned_data_error_handler,
    unhandled_exception_handler,
)
from orphaned_data.api.middleware.request_id import RequestIDMiddleware
from orphaned_data.api.middleware.timing import TimingMiddleware
from orphaned_data.api.settings import AdminSettings
from orphaned_data.core.connection import create_connection
from orphaned_data.core.errors import OrphanedDataError
from orphaned_data.core.logging import configure_logging, get_logger
from orphaned_data.plugin import OrphanedDataPlugin

_HERE = Path(__file__).parent
TEMPLATES_DIR = _HERE / "templates"
STATIC_DIR = _HERE / "static"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: create the WordPress tables on a SQLite database."""
    log = get_logger("orphaned_data.api")
    settings: AdminSettings = app.state.settings
    log.info("admin_server_starting", version=app.version, admin_prefix=settings.admin_prefix)

    conn = None
    try:
        conn, info = create_connection(
            settings.database_url,
            table_prefix=settings.table_prefix,
            init_schema=True,
        )
        log.info("database_initialized", backend=info.backend)
    except OrphanedDataError as exc:
        log.warning("database_auto_init_failed", **exc.to_dict())
    finally:
        if conn is not None and hasattr(conn, "close"):
            conn.close()

    yield
    log.info("admin_server_shutting_down")


def create_app(
    *,
    settings: AdminSettings | None = None,
    plugin: OrphanedDataPlugin | None = None,
) -> FastAPI:
    """Build and return a fully-configured FastAPI application.

    Parameters
    ----------
    settings : AdminSettings | None
        Override settings (useful for testing).  When ``None`` the cached
        singleton from :func:`get_settings` is used.
    plugin : OrphanedDataPlugin | None
        Override the plugin; by default one is built from *settings*.  This
        is the plugin's one-time initialisation for the process.
    """
    settings = settings or get_settings()
    configure_logging(level=settings.log_level, json_format=settings.json_logs)

    app = FastAPI(
        title="orphaned-data",
        version=__version__,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    plugin = plugin or OrphanedDataPlugin.from_settings(settings, admin_prefix=settings.admin_prefix)
    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    templates.env.globals["plugin"] = plugin
    templates.env.globals["version"] = __version__

    # Stash shared objects on app state for dependencies and handlers
    app.state.settings = settings
    app.state.plugin = plugin
    app.state.templates = templates

    # Override DI so endpoints use the provided settings
    app.dependency_overrides[get_settings] = lambda: settings

    # ── Middleware (outermost → innermost) ────────────────────────────
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(AuthMiddleware, api_key=settings.api_key)

    # ── Exception handlers ───────────────────────────────────────────
    app.add_exception_handler(OrphanedDataError, orphaned_data_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # ── Routers ──────────────────────────────────────────────────────
    from orphaned_data.api.routers import health, orphaned, tools

    app.include_router(health.router)
    app.include_router(tools.router, prefix=settings.admin_prefix)
    app.include_router(orphaned.router, prefix=settings.admin_prefix)

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    return app
