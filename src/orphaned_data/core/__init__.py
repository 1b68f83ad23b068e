"""Core primitives: settings, logging, storage access, and the type registry."""
