"""Job board backend: identity synchronization and tag-based cache invalidation."""
