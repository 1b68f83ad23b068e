"""Cross-cutting HTTP concerns: request ids, timing, API-key auth and error pages."""
