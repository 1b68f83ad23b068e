"""
Tests for the content type registry and label derivation.
"""

from __future__ import annotations

import pytest

from orphaned_data.core.errors import TypeRegistrationError
from orphaned_data.core.types import TypeDefinition, TypeRegistry, label_from_name


class TestLabelFromName:
    @pytest.mark.parametrize(
        ("name", "label"),
        [
            ("old_plugin_event", "Old Plugin Event"),
            ("wpz-portfolio", "Wpz Portfolio"),
            ("event", "Event"),
            ("_private_thing_", "Private Thing"),
            ("old_PLUGIN-event", "Old PLUGIN Event"),
        ],
    )
    def test_derivation(self, name, label):
        assert label_from_name(name) == label

    def test_separators_become_spaces(self):
        assert "-" not in label_from_name("a-b_c")
        assert "_" not in label_from_name("a-b_c")


class TestBuiltins:
    def test_core_types_registered(self):
        registry = TypeRegistry.with_builtins()
        for name in ("post", "page", "attachment", "revision", "nav_menu_item"):
            assert name in registry

    def test_public_types_in_registration_order(self):
        registry = TypeRegistry.with_builtins()
        assert [d.name for d in registry.public()] == ["post", "page", "attachment"]

    def test_extra_types_are_public(self):
        registry = TypeRegistry.with_builtins(["product"])
        product = registry.get("product")
        assert product is not None
        assert product.public is True
        assert product.label == "Product"
        assert registry.is_valid_target("product")


class TestRegistration:
    def test_register_rejects_invalid_name(self):
        registry = TypeRegistry()
        with pytest.raises(TypeRegistrationError):
            registry.register(TypeDefinition(name="Not Valid!", label="x", singular_name="x"))

    def test_register_rejects_long_name(self):
        registry = TypeRegistry()
        with pytest.raises(TypeRegistrationError):
            registry.register_placeholder("a" * 21)

    def test_placeholder_is_inert(self):
        registry = TypeRegistry()
        assert registry.register_placeholder("old_event") is True
        definition = registry.get("old_event")
        assert definition is not None
        assert definition.placeholder is True
        assert definition.label == "Old Event"
        assert definition.singular_name == "Old Event"
        assert not any(
            [
                definition.public,
                definition.publicly_queryable,
                definition.show_ui,
                definition.show_in_menu,
                definition.show_in_nav_menus,
                definition.show_in_admin_bar,
                definition.show_in_rest,
                definition.rewrite,
                definition.query_var,
                definition.can_export,
            ]
        )
        assert definition.exclude_from_search is True

    def test_placeholder_registration_is_idempotent(self):
        registry = TypeRegistry()
        assert registry.register_placeholder("old_event") is True
        assert registry.register_placeholder("old_event") is False
        assert len(registry.placeholders()) == 1

    def test_placeholder_never_replaces_active_definition(self):
        registry = TypeRegistry.with_builtins()
        assert registry.register_placeholder("post") is False
        assert registry.get("post").placeholder is False

    def test_unregister(self):
        registry = TypeRegistry.with_builtins()
        registry.unregister("page")
        assert "page" not in registry
        registry.unregister("page")


class TestLookup:
    def test_exists_excluding_placeholders(self):
        registry = TypeRegistry.with_builtins()
        registry.register_placeholder("old_event")
        assert registry.exists("old_event") is True
        assert registry.exists("old_event", include_placeholders=False) is False
        assert registry.exists("post", include_placeholders=False) is True

    @pytest.mark.parametrize(
        ("name", "valid"),
        [
            ("post", True),
            ("page", True),
            ("revision", False),
            ("old_event", False),
            ("missing", False),
            ("", False),
            (None, False),
        ],
    )
    def test_is_valid_target(self, name, valid):
        registry = TypeRegistry.with_builtins()
        registry.register_placeholder("old_event")
        assert registry.is_valid_target(name) is valid
