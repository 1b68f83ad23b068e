"""Domain repositories over the WordPress tables."""

from orphaned_data.core.repositories._helpers import PageSlice
from orphaned_data.core.repositories.posts import SORT_COLUMNS, PostRepository
from orphaned_data.core.repositories.users import UserRepository

__all__ = ["SORT_COLUMNS", "PageSlice", "PostRepository", "UserRepository"]
