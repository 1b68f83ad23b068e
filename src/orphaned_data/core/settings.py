"""Base settings shared by the admin server and the CLI.

Values are read from environment variables prefixed with
``ORPHANED_DATA_`` and from a ``.env`` file in the working directory::

    ORPHANED_DATA_DATABASE_URL=mysql+pymysql://wp:wp@localhost/wordpress
    ORPHANED_DATA_TABLE_PREFIX=wp_
    ORPHANED_DATA_REGISTERED_TYPES=product,event

``registered_types`` names the content types that are still registered by
active plugins or themes, in addition to the host's built-in types.  Any
``post_type`` found in the database that is in neither set is orphaned.

Tags:
    settings, configuration, pydantic
"""

from __future__ import annotations

import re
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

_PREFIX_RE = re.compile(r"^[A-Za-z0-9_]*$")
_TYPE_NAME_RE = re.compile(r"^[a-z0-9_-]{1,20}$")


class OrphanedDataSettings(BaseSettings):
    """Common settings for every orphaned-data entry point.

    Fields
    ──────
    host, port       : Bind address for the admin server
    debug            : Show exception detail on error pages
    log_level        : Structlog log level
    json_logs        : Force JSON (True) or console (False) log output
    database_url     : ``sqlite:///path.db``, ``:memory:`` or any SQLAlchemy URL
    table_prefix     : WordPress table prefix (``wp_``)
    registered_types : Extra public types still registered by active code
    """

    model_config = SettingsConfigDict(
        env_prefix="ORPHANED_DATA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Network ──────────────────────────────────────────────────
    host: str = "127.0.0.1"
    port: int = 8080

    # ── Observability ────────────────────────────────────────────
    debug: bool = False
    log_level: str = "INFO"
    json_logs: bool | None = None

    # ── Storage ──────────────────────────────────────────────────
    database_url: str = Field(
        default="sqlite:///orphaned_data.db",
        description="SQLite path/URL or SQLAlchemy connection URL",
    )
    table_prefix: str = Field(default="wp_", description="WordPress table prefix")

    # ── Type registry ────────────────────────────────────────────
    registered_types: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description="Content types registered by active plugins/themes",
    )

    @field_validator("table_prefix")
    @classmethod
    def _check_prefix(cls, value: str) -> str:
        if not _PREFIX_RE.match(value):
            raise ValueError("table_prefix may only contain letters, digits and underscores")
        return value

    @field_validator("registered_types", mode="before")
    @classmethod
    def _split_types(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = [part.strip() for part in value.split(",")]
        return value

    @field_validator("registered_types")
    @classmethod
    def _check_types(cls, value: list[str]) -> list[str]:
        names = [v for v in value if v]
        for name in names:
            if not _TYPE_NAME_RE.match(name):
                raise ValueError(f"invalid content type name: {name!r}")
        return list(dict.fromkeys(names))


__all__ = ["OrphanedDataSettings"]
