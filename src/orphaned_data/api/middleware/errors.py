"""
Error handling: maps ops error codes and exceptions to HTML error pages.

Routes turn a failed :class:`~orphaned_data.ops.result.OperationResult` into
a page through :func:`error_page`; exception handlers registered by
:func:`~orphaned_data.api.app.create_app` do the same for
:class:`~orphaned_data.core.errors.OrphanedDataError` and for anything
unhandled.
"""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import HTMLResponse

from orphaned_data.core.errors import ErrorCategory, OrphanedDataError, PermissionDeniedError
from orphaned_data.core.logging import get_logger
from orphaned_data.ops.result import OperationError

logger = get_logger(__name__)

# ── Error code → HTTP status mapping ─────────────────────────────────────

ERROR_CODE_TO_STATUS: dict[str, int] = {
    "NOT_FOUND": 404,
    "INVALID_INPUT": 400,
    "FORBIDDEN": 403,
    "INTERNAL": 500,
}

CATEGORY_TO_STATUS: dict[ErrorCategory, int] = {
    ErrorCategory.AUTH: 403,
    ErrorCategory.VALIDATION: 400,
    ErrorCategory.DATABASE: 503,
    ErrorCategory.CONFIG: 500,
    ErrorCategory.INTERNAL: 500,
}


def status_for_error_code(code: str) -> int:
    """Resolve an ops error code to HTTP status, defaulting to 500."""
    return ERROR_CODE_TO_STATUS.get(code, 500)


def error_page(
    request: Request,
    *,
    status: int,
    title: str,
    detail: str = "",
) -> HTMLResponse:
    """Render ``error.html`` with *status*."""
    templates = request.app.state.templates
    return templates.TemplateResponse(
        request,
        "error.html",
        {"title": title, "detail": detail, "status": status},
        status_code=status,
    )


def operation_error_page(request: Request, error: OperationError | None) -> HTMLResponse:
    """Render a failed operation result."""
    if error is None:
        return error_page(request, status=500, title="Error")
    status = status_for_error_code(error.code)
    detail = error.message if status < 500 or request.app.state.settings.debug else ""
    return error_page(request, status=status, title="Error", detail=detail)


async def orphaned_data_error_handler(request: Request, exc: OrphanedDataError) -> HTMLResponse:
    """Render an :class:`OrphanedDataError` with the status of its category."""
    status = CATEGORY_TO_STATUS.get(exc.category, 500)
    if isinstance(exc, PermissionDeniedError):
        logger.info("permission_denied", capability=exc.capability, path=request.url.path)
        return error_page(request, status=status, title="Forbidden", detail=exc.message)

    logger.error("request_failed", path=request.url.path, **exc.to_dict())
    detail = exc.message if request.app.state.settings.debug else "The request could not be completed."
    return error_page(request, status=status, title="Error", detail=detail)


async def unhandled_exception_handler(request: Request, exc: Exception) -> HTMLResponse:
    """Catch-all for unhandled exceptions: a 500 page, detail only in debug."""
    logger.exception("unhandled_exception", path=request.url.path, error=str(exc))
    return error_page(
        request,
        status=500,
        title="Internal Server Error",
        detail=str(exc) if request.app.state.settings.debug else "An unexpected error occurred.",
    )
