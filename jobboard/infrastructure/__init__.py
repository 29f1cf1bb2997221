"""Infrastructure: cache, persistence, security."""
