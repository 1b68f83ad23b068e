"""SQLAlchemy bridge for non-SQLite databases."""

from orphaned_data.core.orm.session import SAConnectionBridge, create_engine_for_url

__all__ = ["SAConnectionBridge", "create_engine_for_url"]
