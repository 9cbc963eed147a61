"""Infrastructure: cache and persistence bindings."""
