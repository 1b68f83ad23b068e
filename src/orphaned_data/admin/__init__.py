"""Admin screen building blocks: the generic list table and its orphaned-posts composition."""
