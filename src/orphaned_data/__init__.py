"""
orphaned-data: find and repair content records whose type no longer exists.

Records in a WordPress-shaped ``posts`` table keep their ``post_type`` after
the plugin or theme that registered the type is removed.  This package
detects those orphaned types, registers inert placeholder definitions for
them, and serves an admin screen to delete the records or move them to a
valid type.
"""

__version__ = "1.0.0"
