"""Tag store protocol (DIP). Injected into both read and write paths.

Write paths call mark_stale(tag) after a mutation; read paths ask for the
current tag versions to decide whether a cached computation is still
fresh. Implementations: RedisTagStore (shared across processes) and
InMemoryTagStore (single process, tests).
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class TagVersion:
    """Current state of one tag: a counter bumped on every mark_stale, plus the last profile used."""

    version: int
    profile: str | None = None


class TagStore(Protocol):
    """Protocol for tag-based invalidation backends."""

    async def mark_stale(self, tag: str, profile: str | None = None) -> None:
        """Mark every cached result filed under tag as stale.

        Idempotent in observable effect: results cached before either call
        are stale after one call or after two.

        Args:
            tag: Tag string (use jobboard.infrastructure.cache.tags builders).
            profile: Optional freshness-profile hint for entries cached under
                the tag from now on.
        """
        ...

    async def get_versions(self, tags: Sequence[str]) -> dict[str, TagVersion]:
        """Return the current version of each tag (never-invalidated tags are version 0).

        Returns an empty dict when the backend cannot answer (callers must
        then treat cached results as unusable).
        """
        ...

    async def get(self, key: str) -> Any:
        """Return a cached value or None."""
        ...

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Store a JSON-serializable value with optional TTL in seconds."""
        ...
