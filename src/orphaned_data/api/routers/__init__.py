"""HTML routers of the admin server."""
