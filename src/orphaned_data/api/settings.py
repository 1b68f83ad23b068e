"""
Admin server settings.

Extends :class:`~orphaned_data.core.settings.OrphanedDataSettings` with the
knobs of the HTML transport: URL prefix, optional API key, the user acting
when a request names none, and the default page size.

All values can be overridden via environment variables prefixed with
``ORPHANED_DATA_``.
"""

from __future__ import annotations

from pydantic import Field, field_validator

from orphaned_data.core.settings import OrphanedDataSettings


class AdminSettings(OrphanedDataSettings):
    """Settings for the orphaned-data admin server.

    Order of precedence (highest → lowest):
        1. Environment variables (``ORPHANED_DATA_ADMIN_PREFIX``, etc.)
        2. ``.env`` file
        3. Defaults below
    """

    # ── Admin ────────────────────────────────────────────────────────────
    admin_prefix: str = Field(default="/admin", description="URL prefix of the admin screens")
    default_per_page: int = Field(default=20, ge=1, le=999, description="Page size without a stored preference")

    # ── Users ────────────────────────────────────────────────────────────
    default_user_id: int = Field(
        default=1,
        description="User acting when the request carries no X-User-Id header",
    )

    # ── Auth ─────────────────────────────────────────────────────────────
    api_key: str | None = Field(default=None, description="Optional API key for gating access")

    @field_validator("admin_prefix")
    @classmethod
    def _normalise_prefix(cls, value: str) -> str:
        value = "/" + value.strip("/")
        return "" if value == "/" else value
