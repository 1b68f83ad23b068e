"""
Shared pytest fixtures for orphaned-data tests.

This module provides:
- An in-memory SQLite connection with the WordPress tables applied
- Users at administrator, contributor and subscriber level
- A ``make_post`` factory for inserting records of any type
- An admin app wired to the shared connection, plus a ``TestClient``

Usage::

    def test_something(ctx, make_post):
        post_id = make_post("old_event", "Legacy")
        ...
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Any

import pytest
from fastapi.testclient import TestClient

from orphaned_data.api.app import create_app
from orphaned_data.api.deps import get_connection
from orphaned_data.api.settings import AdminSettings
from orphaned_data.core.capabilities import User
from orphaned_data.core.repositories import PostRepository, UserRepository
from orphaned_data.core.schema import TableNames, apply_schema
from orphaned_data.core.types import TypeRegistry
from orphaned_data.ops.context import OperationContext
from orphaned_data.ops.sqlite_conn import SqliteConnection

# =============================================================================
# Markers
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark HTTP and CLI tests as integration, everything else as unit."""
    for item in items:
        path = str(item.fspath)
        if "/api/" in path or "/cli/" in path:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Database
# =============================================================================


@pytest.fixture()
def tables() -> TableNames:
    return TableNames("wp_")


@pytest.fixture()
def conn(tables: TableNames) -> Generator[SqliteConnection, None, None]:
    """In-memory SQLite connection holding empty WordPress tables."""
    connection = SqliteConnection(":memory:")
    apply_schema(connection, tables)
    yield connection
    connection.close()


@pytest.fixture()
def registry() -> TypeRegistry:
    return TypeRegistry.with_builtins()


# =============================================================================
# Users
# =============================================================================


def _create_user(conn: SqliteConnection, tables: TableNames, login: str, level: int) -> User:
    users = UserRepository(conn, tables)
    user_id = users.create_user(login, level=level, display_name=login.title())
    users.commit()
    user = users.get_user(user_id)
    assert user is not None
    return user


@pytest.fixture()
def admin(conn: SqliteConnection, tables: TableNames) -> User:
    """Administrator (level 10); always user ID 1."""
    return _create_user(conn, tables, "admin", 10)


@pytest.fixture()
def contributor(conn: SqliteConnection, tables: TableNames, admin: User) -> User:
    """Contributor (level 1): can edit and delete posts, cannot manage options."""
    return _create_user(conn, tables, "contributor", 1)


@pytest.fixture()
def subscriber(conn: SqliteConnection, tables: TableNames, admin: User) -> User:
    """Subscriber (level 0): no capabilities on the screen."""
    return _create_user(conn, tables, "subscriber", 0)


# =============================================================================
# Posts
# =============================================================================

PostFactory = Callable[..., int]


@pytest.fixture()
def make_post(conn: SqliteConnection, tables: TableNames) -> PostFactory:
    """Factory inserting one committed record and returning its ID."""
    posts = PostRepository(conn, tables)

    def _make(
        post_type: str,
        title: str = "Untitled",
        *,
        status: str = "publish",
        date: str = "2024-01-15 16:43:00",
        parent: int = 0,
    ) -> int:
        post_id = posts.create(
            {
                "post_title": title,
                "post_type": post_type,
                "post_status": status,
                "post_date": date,
                "post_modified": date,
                "post_parent": parent,
            }
        )
        posts.commit()
        assert post_id is not None
        return post_id

    return _make


@pytest.fixture()
def orphaned_posts(make_post: PostFactory) -> dict[str, Any]:
    """One regular post plus four records of two orphaned types.

    Dates ascend with insertion order, so the default date-descending
    listing shows the newest record first.
    """
    regular = make_post("post", "Hello world", date="2024-01-01 08:00:00")
    events = [
        make_post("old_event", "Event A", date="2024-01-02 08:00:00"),
        make_post("old_event", "Event B", status="draft", date="2024-01-03 08:00:00"),
        make_post("old_event", "", date="2024-01-04 08:00:00"),
    ]
    portfolio = make_post("wpz-portfolio", "Portfolio item", date="2024-01-05 08:00:00")
    return {"regular": regular, "old_event": events, "wpz-portfolio": [portfolio]}


# =============================================================================
# Operation contexts
# =============================================================================


@pytest.fixture()
def ctx(conn: SqliteConnection, tables: TableNames, registry: TypeRegistry, admin: User) -> OperationContext:
    """OperationContext acting as the administrator."""
    return OperationContext(conn=conn, registry=registry, tables=tables, user=admin, caller="test")


@pytest.fixture()
def dry_ctx(conn: SqliteConnection, tables: TableNames, registry: TypeRegistry, admin: User) -> OperationContext:
    """Administrator context with ``dry_run=True``."""
    return OperationContext(
        conn=conn,
        registry=registry,
        tables=tables,
        user=admin,
        caller="test",
        dry_run=True,
    )


# =============================================================================
# Admin app
# =============================================================================


@pytest.fixture()
def settings() -> AdminSettings:
    return AdminSettings(
        _env_file=None,
        database_url="sqlite:///:memory:",
        log_level="WARNING",
        json_logs=True,
    )


@pytest.fixture()
def app(conn: SqliteConnection, settings: AdminSettings):
    """Admin app whose requests all share the ``conn`` fixture."""
    application = create_app(settings=settings)

    def _shared_connection() -> Generator[SqliteConnection, None, None]:
        yield conn

    application.dependency_overrides[get_connection] = _shared_connection
    return application


@pytest.fixture()
def client(app) -> TestClient:
    return TestClient(app)
