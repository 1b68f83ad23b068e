"""User repository: ``{prefix}users`` and ``{prefix}usermeta``.

Tags:
    repository, users, usermeta
"""

from __future__ import annotations

from typing import Any

from orphaned_data.core.capabilities import User
from orphaned_data.core.repository import BaseRepository


class UserRepository(BaseRepository):
    """Users, their level, and per-user preferences stored as usermeta."""

    @property
    def level_key(self) -> str:
        return f"{self.tables.prefix}user_level"

    def get_user(self, user_id: int) -> User | None:
        """Load a user with its level, or ``None`` when the ID is unknown."""
        row = self.query_one(
            f"SELECT ID, user_login, display_name FROM {self.tables.users} WHERE ID = ?",
            (user_id,),
        )
        if row is None:
            return None
        raw_level = self.get_meta(user_id, self.level_key)
        try:
            level = int(raw_level) if raw_level is not None else 0
        except ValueError:
            level = 0
        return User(
            id=int(row["ID"]),
            login=row["user_login"] or "",
            display_name=row["display_name"] or "",
            level=level,
        )

    def create_user(self, login: str, *, level: int = 0, display_name: str = "") -> int:
        """Insert a user and its level meta.  Returns the new user ID."""
        user_id = self.insert(
            self.tables.users,
            {"user_login": login, "display_name": display_name or login},
        )
        if user_id is None:
            user_id = self.scalar(
                f"SELECT MAX(ID) FROM {self.tables.users} WHERE user_login = ?",
                (login,),
            )
        self.set_meta(int(user_id), self.level_key, str(level))
        return int(user_id)

    # -- usermeta --------------------------------------------------------------

    def get_meta(self, user_id: int, key: str) -> str | None:
        """Return the first value stored for *key*, or ``None``."""
        value: Any = self.scalar(
            f"SELECT meta_value FROM {self.tables.usermeta} "
            f"WHERE user_id = ? AND meta_key = ? ORDER BY umeta_id LIMIT 1",
            (user_id, key),
        )
        return None if value is None else str(value)

    def set_meta(self, user_id: int, key: str, value: str) -> None:
        """Create or update a usermeta value."""
        cursor = self.execute(
            f"UPDATE {self.tables.usermeta} SET meta_value = ? "
            f"WHERE user_id = ? AND meta_key = ?",
            (value, user_id, key),
        )
        if cursor.rowcount <= 0:
            self.insert(
                self.tables.usermeta,
                {"user_id": user_id, "meta_key": key, "meta_value": value},
            )
