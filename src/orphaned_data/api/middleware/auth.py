"""
API-key gate for the admin server.

When ``ORPHANED_DATA_API_KEY`` is set, every request must include a matching
``X-API-Key`` header (or ``?api_key=`` query param).  Unauthenticated
requests receive a 401 response.

Bypass paths (no key required):
  - ``/health*``
  - ``/static/*``
"""

from __future__ import annotations

import re

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

# Paths that never require authentication
_BYPASS_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"^/health"),
    re.compile(r"^/static/"),
]


def _is_bypass(path: str) -> bool:
    """Return True if *path* should skip authentication."""
    return any(p.search(path) for p in _BYPASS_PATTERNS)


class AuthMiddleware(BaseHTTPMiddleware):
    """Reject requests that lack a valid API key.

    If ``api_key`` is ``None`` (the default), authentication is disabled
    and all requests pass through.
    """

    def __init__(self, app: object, api_key: str | None = None) -> None:
        super().__init__(app)  # type: ignore[arg-type]
        self._api_key = api_key

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if self._api_key is None or _is_bypass(request.url.path):
            return await call_next(request)

        provided = request.headers.get("X-API-Key") or request.query_params.get("api_key")
        if provided != self._api_key:
            return PlainTextResponse(
                "Missing or invalid API key. Provide X-API-Key header.",
                status_code=401,
            )

        return await call_next(request)
