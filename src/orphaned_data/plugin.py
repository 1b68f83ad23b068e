"""
Plugin lifecycle: one-time setup, menu entry, toolbox card, asset scoping.

:class:`OrphanedDataPlugin` is created exactly once per process, by
:func:`~orphaned_data.api.app.create_app`.  Construction is the one-time
initialisation: it builds the type registry from the built-in types plus
the configured ``registered_types``.  Per-request work is limited to
:meth:`OrphanedDataPlugin.refresh`, which detects orphaned types and
registers placeholders for any that are new.

Architecture::

    create_app ──► OrphanedDataPlugin.from_settings()
                   ├── registry          TypeRegistry (built-ins + configured)
                   ├── menu_entries()    Tools ▸ Orphaned Data (edit_posts)
                   ├── toolbox_card()    card on the Tools index
                   └── assets_for()      orphaned-data.js on its own screen only

    request  ──► plugin.refresh(ctx) ──► ops.orphans.refresh_orphaned_types

Tags:
    plugin, lifecycle, menu, assets
"""

from __future__ import annotations

from dataclasses import dataclass

from markupsafe import Markup

from orphaned_data import __version__
from orphaned_data.core.capabilities import Capability, User
from orphaned_data.core.logging import get_logger
from orphaned_data.core.settings import OrphanedDataSettings
from orphaned_data.core.types import TypeRegistry
from orphaned_data.ops.context import OperationContext
from orphaned_data.ops.orphans import refresh_orphaned_types

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class MenuEntry:
    """A submenu entry of the admin navigation."""

    parent: str
    page_title: str
    menu_title: str
    capability: Capability
    slug: str
    url: str


@dataclass(frozen=True, slots=True)
class Asset:
    """A script included on one admin screen."""

    handle: str
    path: str
    version: str

    @property
    def url(self) -> str:
        return f"{self.path}?ver={self.version}"


@dataclass(frozen=True, slots=True)
class ToolboxCard:
    """A card on the Tools index page."""

    title: str
    body: Markup


class OrphanedDataPlugin:
    """Process-wide plugin state.

    Parameters
    ----------
    registry:
        The content type registry shared by every request.
    admin_prefix:
        URL prefix of the admin screens (``/admin``).
    static_prefix:
        URL prefix the static assets are mounted at.
    """

    SLUG = "orphaned-data"
    TITLE = "Orphaned Data"
    SCREEN_ID = "tools_page_orphaned-data"
    SCRIPT_HANDLE = "orphaned-data-js"

    def __init__(
        self,
        registry: TypeRegistry,
        *,
        admin_prefix: str = "/admin",
        static_prefix: str = "/static",
        version: str = __version__,
    ) -> None:
        self.registry = registry
        self.admin_prefix = admin_prefix.rstrip("/")
        self.static_prefix = static_prefix.rstrip("/")
        self.version = version
        logger.info(
            "plugin_initialized",
            version=version,
            registered_types=len(registry),
        )

    @classmethod
    def from_settings(cls, settings: OrphanedDataSettings, *, admin_prefix: str = "/admin") -> OrphanedDataPlugin:
        return cls(
            TypeRegistry.with_builtins(settings.registered_types),
            admin_prefix=admin_prefix,
        )

    # -- URLs ----------------------------------------------------------------

    @property
    def tools_url(self) -> str:
        return f"{self.admin_prefix}/tools"

    @property
    def page_url(self) -> str:
        return f"{self.tools_url}/{self.SLUG}"

    @property
    def screen_options_url(self) -> str:
        return f"{self.page_url}/screen-options"

    # -- Per-request -----------------------------------------------------------

    def refresh(self, ctx: OperationContext) -> list[str]:
        """Detect orphaned types and register placeholders for them."""
        return refresh_orphaned_types(ctx).data or []

    # -- Admin integration -----------------------------------------------------

    def menu_entries(self, user: User) -> list[MenuEntry]:
        """Navigation entries visible to *user*."""
        entry = MenuEntry(
            parent="tools",
            page_title=self.TITLE,
            menu_title=self.TITLE,
            capability=Capability.EDIT_POSTS,
            slug=self.SLUG,
            url=self.page_url,
        )
        return [entry] if user.can(entry.capability) else []

    def toolbox_card(self, user: User) -> ToolboxCard | None:
        """The Tools index card, for users who can reach the screen."""
        if not user.can(Capability.EDIT_POSTS):
            return None
        body = Markup(
            "If you want to repair orphaned data in WordPress (like posts from post "
            'types that no longer exist), use the <a href="{}">WPZOOM Orphaned Data Tool</a>.'
        ).format(self.page_url)
        return ToolboxCard(title=self.TITLE, body=body)

    def assets_for(self, screen_id: str | None) -> list[Asset]:
        """Scripts to include on *screen_id*; empty for every other screen."""
        if screen_id != self.SCREEN_ID:
            return []
        return [
            Asset(
                handle=self.SCRIPT_HANDLE,
                path=f"{self.static_prefix}/orphaned-data.js",
                version=self.version,
            )
        ]


__all__ = ["Asset", "MenuEntry", "OrphanedDataPlugin", "ToolboxCard"]
