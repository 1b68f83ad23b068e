"""Command-line interface: ``orphaned-data``."""
