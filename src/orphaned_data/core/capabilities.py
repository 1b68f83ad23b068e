"""
Users and capabilities.

WordPress stores a numeric ``{prefix}user_level`` usermeta row for every
user (0 subscriber, 1 contributor, 2 author, 7 editor, 10 administrator).
Capabilities checked by the admin screens are derived from that level.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Capability(str, Enum):
    """Capabilities checked by orphaned-data."""

    EDIT_POSTS = "edit_posts"
    DELETE_POSTS = "delete_posts"
    MANAGE_OPTIONS = "manage_options"


# Minimum user_level granting each capability
CAPABILITY_LEVELS: dict[Capability, int] = {
    Capability.EDIT_POSTS: 1,
    Capability.DELETE_POSTS: 1,
    Capability.MANAGE_OPTIONS: 8,
}


@dataclass(frozen=True, slots=True)
class User:
    """The user acting on an admin request."""

    id: int
    login: str = ""
    display_name: str = ""
    level: int = -1

    @property
    def exists(self) -> bool:
        return self.id > 0

    def can(self, capability: Capability | str) -> bool:
        """Whether this user holds *capability*."""
        if not self.exists:
            return False
        try:
            cap = Capability(capability)
        except ValueError:
            return False
        return self.level >= CAPABILITY_LEVELS[cap]


ANONYMOUS = User(id=0)


__all__ = ["ANONYMOUS", "CAPABILITY_LEVELS", "Capability", "User"]
