"""Request-ID middleware: injects ``X-Request-ID`` on every request.

The id is stored on ``request.state`` and bound into the structlog
context, so every log line of the request carries it.

Tags:
    api, middleware, request-id, logging
"""

from __future__ import annotations

import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from orphaned_data.core.logging import bind_context, unbind_context


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach a unique request ID to every request/response cycle."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        request.state.request_id = request_id
        bind_context(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            unbind_context("request_id")
        response.headers["X-Request-ID"] = request_id
        return response
