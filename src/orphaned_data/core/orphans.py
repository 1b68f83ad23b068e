"""
Orphan type detection and placeholder registration.

An *orphaned type* is a ``post_type`` value present in the posts table that
no active definition in the :class:`~orphaned_data.core.types.TypeRegistry`
claims.  Once detected, each orphaned type gets an inert placeholder
definition so code that resolves types by name (labels, listing) works
without the original plugin.

Flow::

    PostRepository.distinct_types()      first-seen order
          │
          ▼
    drop names with an active definition
          │
          ▼
    drop EXCLUDED_TYPES                  host-internal names
          │
          ▼
    detect_orphaned_types() ──► register_placeholder_types()

Both steps are safe to repeat: detection ignores placeholders, and the
registrar skips names that already have a definition.
"""

from __future__ import annotations

from orphaned_data.core.errors import TypeRegistrationError
from orphaned_data.core.logging import get_logger
from orphaned_data.core.repositories import PostRepository
from orphaned_data.core.types import TypeRegistry

logger = get_logger(__name__)

PLUGIN_TYPE = "orphaned_data"

# Host-internal names that are never treated as orphaned, whether or not
# a definition is currently registered for them.
EXCLUDED_TYPES: frozenset[str] = frozenset(
    {
        "attachment",
        "custom_css",
        "customize_changeset",
        "nav_menu_item",
        "revision",
        "wpzoom",
        PLUGIN_TYPE,
    }
)


def find_orphaned_types(
    type_names: list[str],
    registry: TypeRegistry,
    *,
    excluded: frozenset[str] = EXCLUDED_TYPES,
) -> list[str]:
    """Filter *type_names* down to orphaned ones, keeping first-seen order."""
    orphaned: dict[str, None] = {}
    for name in type_names:
        if registry.exists(name, include_placeholders=False):
            continue
        if name in excluded:
            continue
        orphaned.setdefault(name, None)
    return list(orphaned)


def detect_orphaned_types(posts: PostRepository, registry: TypeRegistry) -> list[str]:
    """Return the orphaned type names present in the posts table."""
    orphaned = find_orphaned_types(posts.distinct_types(), registry)
    logger.debug("orphans_detected", count=len(orphaned), types=orphaned)
    return orphaned


def register_placeholder_types(registry: TypeRegistry, names: list[str]) -> list[str]:
    """Register a placeholder definition for each of *names*.

    Returns the names that were newly registered.  A name the registry
    rejects is logged and skipped; records of that type are still listed.
    """
    added: list[str] = []
    for name in names:
        try:
            if registry.register_placeholder(name):
                added.append(name)
        except TypeRegistrationError as exc:
            logger.warning("placeholder_rejected", type=name, error=exc.message)
            continue
    if added:
        logger.info("placeholder_registered", types=added)
    return added


__all__ = [
    "EXCLUDED_TYPES",
    "PLUGIN_TYPE",
    "detect_orphaned_types",
    "find_orphaned_types",
    "register_placeholder_types",
]
