"""
Health probes.

GET /health        database check: counts rows in the posts table
GET /health/ready  same check, for readiness probes
GET /health/live   always 200 while the process runs

Both checked endpoints answer 503 with ``status: unhealthy`` when the
posts table cannot be read.
"""

from __future__ import annotations

import time
from typing import Any, Literal

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from orphaned_data import __version__
from orphaned_data.api.deps import Conn, Settings
from orphaned_data.core.logging import get_logger
from orphaned_data.core.repositories import PostRepository
from orphaned_data.core.schema import TableNames
from orphaned_data.ops.bulk import RECORD_ERRORS

logger = get_logger(__name__)

router = APIRouter(prefix="/health", tags=["health"])

Status = Literal["healthy", "unhealthy"]


class DatabaseCheck(BaseModel):
    status: Status
    posts: int | None = None
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    status: Status
    service: str = "orphaned-data"
    version: str = __version__
    checks: dict[str, DatabaseCheck]


def check_database(conn: Any, tables: TableNames) -> DatabaseCheck:
    """Count posts; any storage error marks the database unhealthy."""
    start = time.monotonic()
    try:
        total = PostRepository(conn, tables).scalar(f"SELECT COUNT(*) FROM {tables.posts}")
    except RECORD_ERRORS as exc:
        logger.warning("health_database_failed", error=str(exc))
        return DatabaseCheck(status="unhealthy", error=type(exc).__name__)
    return DatabaseCheck(
        status="healthy",
        posts=int(total or 0),
        latency_ms=round((time.monotonic() - start) * 1000, 2),
    )


def _respond(conn: Any, settings: Any) -> JSONResponse:
    database = check_database(conn, TableNames(settings.table_prefix))
    body = HealthResponse(status=database.status, checks={"database": database})
    code = 200 if database.status == "healthy" else 503
    return JSONResponse(content=body.model_dump(), status_code=code)


@router.get("", response_model=HealthResponse)
def health(conn: Conn, settings: Settings) -> JSONResponse:
    return _respond(conn, settings)


@router.get("/ready", response_model=HealthResponse)
def readiness(conn: Conn, settings: Settings) -> JSONResponse:
    return _respond(conn, settings)


@router.get("/live")
def liveness() -> dict[str, str]:
    return {"status": "alive"}
