"""User lookup shared by the admin server and the CLI."""

from __future__ import annotations

from orphaned_data.core.capabilities import ANONYMOUS, User
from orphaned_data.core.logging import get_logger
from orphaned_data.core.protocols import Connection
from orphaned_data.core.repositories import UserRepository
from orphaned_data.core.schema import TableNames

logger = get_logger(__name__)


def load_user(conn: Connection, tables: TableNames, user_id: int | str | None) -> User:
    """Load the acting user, or :data:`ANONYMOUS` when the id is unknown.

    An anonymous user holds no capabilities, so every capability check
    made on its behalf fails closed.
    """
    try:
        uid = int(str(user_id).strip()) if user_id is not None else 0
    except ValueError:
        uid = 0
    if uid <= 0:
        return ANONYMOUS
    user = UserRepository(conn, tables).get_user(uid)
    if user is None:
        logger.debug("user_not_found", user_id=uid)
        return ANONYMOUS
    return user
