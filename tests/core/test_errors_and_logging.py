"""
Tests for the error hierarchy and structured logging setup.
"""

from __future__ import annotations

import io
import json

from orphaned_data.core.capabilities import ANONYMOUS, Capability, User
from orphaned_data.core.errors import (
    ConfigError,
    DatabaseError,
    ErrorCategory,
    OrphanedDataError,
    PermissionDeniedError,
)
from orphaned_data.core.logging import bind_context, clear_context, configure_logging, get_logger


class TestErrors:
    def test_default_categories(self):
        assert ConfigError("x").category is ErrorCategory.CONFIG
        assert DatabaseError("x").category is ErrorCategory.DATABASE
        assert PermissionDeniedError("edit_posts").category is ErrorCategory.AUTH
        assert OrphanedDataError("x").category is ErrorCategory.INTERNAL

    def test_to_dict_includes_context_and_cause(self):
        cause = ValueError("bad")
        err = DatabaseError("down", cause=cause).with_context(table="wp_posts")
        d = err.to_dict()
        assert d["error_type"] == "DatabaseError"
        assert d["context"] == {"table": "wp_posts"}
        assert d["cause"] == "ValueError: bad"
        assert err.__cause__ is cause

    def test_permission_denied_message(self):
        err = PermissionDeniedError("edit_posts")
        assert err.capability == "edit_posts"
        assert err.message == "Sorry, you are not allowed to access this page."


class TestCapabilities:
    def test_anonymous_has_nothing(self):
        assert not any(ANONYMOUS.can(cap) for cap in Capability)

    def test_levels(self):
        contributor = User(id=2, level=1)
        admin = User(id=1, level=10)
        assert contributor.can(Capability.EDIT_POSTS)
        assert contributor.can("delete_posts")
        assert not contributor.can(Capability.MANAGE_OPTIONS)
        assert admin.can(Capability.MANAGE_OPTIONS)

    def test_unknown_capability(self):
        assert User(id=1, level=10).can("launch_rockets") is False


class TestLogging:
    def teardown_method(self):
        clear_context()

    def test_json_output_carries_context(self):
        stream = io.StringIO()
        configure_logging(level="INFO", json_format=True, service="test-svc", stream=stream)
        bind_context(request_id="req-1")
        get_logger("tests").info("orphans_detected", count=2)

        line = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert line["event"] == "orphans_detected"
        assert line["count"] == 2
        assert line["request_id"] == "req-1"
        assert line["service"] == "test-svc"
        assert line["level"] == "info"

    def test_level_filtering(self):
        stream = io.StringIO()
        configure_logging(level="WARNING", json_format=True, stream=stream)
        get_logger("tests").info("hidden")
        assert stream.getvalue() == ""
