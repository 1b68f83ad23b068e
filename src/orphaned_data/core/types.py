"""
Content type registry.

The in-process stand-in for the host framework's post-type registration.
A :class:`TypeRegistry` holds one :class:`TypeDefinition` per type name.  It
is seeded with the host's built-in types and with the types configured as
still registered by active plugins or themes; the orphan registrar then adds
inert *placeholder* definitions for types found only in the data.

Architecture::

    TypeRegistry
    ├── built-ins      post, page, attachment, revision, nav_menu_item, ...
    ├── configured     settings.registered_types (public)
    └── placeholders   one per orphaned type (non-public, no UI)

Lookups distinguish active definitions from placeholders so that orphan
detection returns the same answer before and after placeholders exist.

Tags:
    registry, content-types
"""

from __future__ import annotations

import re
import threading
from dataclasses import dataclass, replace

from orphaned_data.core.errors import TypeRegistrationError
from orphaned_data.core.logging import get_logger

logger = get_logger(__name__)

_NAME_RE = re.compile(r"^[a-z0-9_-]{1,20}$")


def label_from_name(name: str) -> str:
    """Derive a human label from a type name.

    Separators (``-`` and ``_``) become spaces, the result is trimmed, and
    the first letter of each word is uppercased.  The rest of each word is
    left alone, so ``"old_PLUGIN-event"`` becomes ``"Old PLUGIN Event"``.

    >>> label_from_name("old_plugin_event")
    'Old Plugin Event'
    """
    spaced = name.replace("-", " ").replace("_", " ").strip()
    return re.sub(r"(^|\s)(\S)", lambda m: m.group(1) + m.group(2).upper(), spaced)


@dataclass(frozen=True, slots=True)
class TypeDefinition:
    """A registered content type and its visibility flags."""

    name: str
    label: str
    singular_name: str
    public: bool = False
    exclude_from_search: bool = True
    publicly_queryable: bool = False
    show_ui: bool = False
    show_in_menu: bool = False
    show_in_nav_menus: bool = False
    show_in_admin_bar: bool = False
    show_in_rest: bool = False
    rewrite: bool = False
    query_var: bool = False
    can_export: bool = False
    builtin: bool = False
    placeholder: bool = False

    @classmethod
    def public_type(cls, name: str, label: str, singular_name: str, *, builtin: bool = False) -> TypeDefinition:
        """A fully visible type, as a plugin or theme would register it."""
        return cls(
            name=name,
            label=label,
            singular_name=singular_name,
            public=True,
            exclude_from_search=False,
            publicly_queryable=True,
            show_ui=True,
            show_in_menu=True,
            show_in_nav_menus=True,
            show_in_admin_bar=True,
            show_in_rest=True,
            rewrite=True,
            query_var=True,
            can_export=True,
            builtin=builtin,
        )

    @classmethod
    def internal_type(cls, name: str, label: str, singular_name: str) -> TypeDefinition:
        """A built-in, non-public type the host uses for its own records."""
        return cls(name=name, label=label, singular_name=singular_name, builtin=True)


BUILTIN_TYPES: tuple[TypeDefinition, ...] = (
    TypeDefinition.public_type("post", "Posts", "Post", builtin=True),
    TypeDefinition.public_type("page", "Pages", "Page", builtin=True),
    replace(
        TypeDefinition.public_type("attachment", "Media", "Media", builtin=True),
        show_in_nav_menus=False,
        rewrite=False,
    ),
    TypeDefinition.internal_type("revision", "Revisions", "Revision"),
    TypeDefinition.internal_type("nav_menu_item", "Navigation Menu Items", "Navigation Menu Item"),
    TypeDefinition.internal_type("custom_css", "Custom CSS", "Custom CSS"),
    TypeDefinition.internal_type("customize_changeset", "Changesets", "Changeset"),
    TypeDefinition.internal_type("oembed_cache", "oEmbed Responses", "oEmbed Response"),
    TypeDefinition.internal_type("user_request", "User Requests", "User Request"),
    TypeDefinition.internal_type("wp_block", "Reusable Blocks", "Reusable Block"),
    # Block themes and the site editor
    TypeDefinition.internal_type("wp_template", "Templates", "Template"),
    TypeDefinition.internal_type("wp_template_part", "Template Parts", "Template Part"),
    TypeDefinition.internal_type("wp_global_styles", "Global Styles", "Global Styles"),
    TypeDefinition.internal_type("wp_navigation", "Navigation Menus", "Navigation Menu"),
    TypeDefinition.internal_type("wp_font_family", "Font Families", "Font Family"),
    TypeDefinition.internal_type("wp_font_face", "Font Faces", "Font Face"),
)


class TypeRegistry:
    """Thread-safe registry of :class:`TypeDefinition` objects, keyed by name.

    Registration order is preserved; :meth:`all` and :meth:`public` return
    definitions in the order they were first registered.
    """

    def __init__(self, definitions: tuple[TypeDefinition, ...] | list[TypeDefinition] = ()) -> None:
        self._types: dict[str, TypeDefinition] = {}
        self._lock = threading.Lock()
        for definition in definitions:
            self.register(definition)

    @classmethod
    def with_builtins(cls, extra_types: list[str] | tuple[str, ...] = ()) -> TypeRegistry:
        """Create a registry holding the built-in types plus *extra_types*.

        Extra types are registered as public types with a label derived from
        the name.
        """
        registry = cls(BUILTIN_TYPES)
        for name in extra_types:
            label = label_from_name(name)
            registry.register(TypeDefinition.public_type(name, label, label))
        return registry

    # -- Registration ------------------------------------------------------

    def register(self, definition: TypeDefinition) -> TypeDefinition:
        """Register (or replace) a type definition and return it."""
        if not _NAME_RE.match(definition.name):
            raise TypeRegistrationError(
                f"Invalid content type name: {definition.name!r}",
                context={"type": definition.name},
            )
        with self._lock:
            self._types[definition.name] = definition
        return definition

    def register_placeholder(self, name: str) -> bool:
        """Register an inert placeholder for *name*.

        Returns ``True`` when a placeholder was added, ``False`` when *name*
        already has a definition (placeholder or active).
        """
        if not _NAME_RE.match(name):
            raise TypeRegistrationError(
                f"Invalid content type name: {name!r}",
                context={"type": name},
            )
        label = label_from_name(name)
        definition = TypeDefinition(
            name=name,
            label=label,
            singular_name=label,
            placeholder=True,
        )
        with self._lock:
            if name in self._types:
                return False
            self._types[name] = definition
        return True

    def unregister(self, name: str) -> None:
        """Remove a definition if present."""
        with self._lock:
            self._types.pop(name, None)

    # -- Lookup ------------------------------------------------------------

    def get(self, name: str) -> TypeDefinition | None:
        return self._types.get(name)

    def exists(self, name: str, *, include_placeholders: bool = True) -> bool:
        """Whether *name* is registered.

        With ``include_placeholders=False`` only active definitions count.
        """
        definition = self._types.get(name)
        if definition is None:
            return False
        return include_placeholders or not definition.placeholder

    def all(self) -> list[TypeDefinition]:
        return list(self._types.values())

    def public(self) -> list[TypeDefinition]:
        """Active, public definitions in registration order."""
        return [d for d in self._types.values() if d.public and not d.placeholder]

    def placeholders(self) -> list[TypeDefinition]:
        return [d for d in self._types.values() if d.placeholder]

    def is_valid_target(self, name: str | None) -> bool:
        """Whether records may be moved to *name*: registered, active and public."""
        if not name:
            return False
        definition = self._types.get(name)
        return definition is not None and definition.public and not definition.placeholder

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __len__(self) -> int:
        return len(self._types)


__all__ = ["BUILTIN_TYPES", "TypeDefinition", "TypeRegistry", "label_from_name"]
