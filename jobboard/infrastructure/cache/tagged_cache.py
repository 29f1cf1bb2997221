"""Tag-aware read cache.

A read path files a computation under a cache key plus a set of tags.
The stored entry carries a snapshot of each tag's version; when any tag
has been marked stale since, the snapshot no longer matches and the
entry is recomputed. Versions are read before computing, so a mutation
that lands mid-computation leaves a snapshot that is already outdated.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any, TypeVar

from jobboard.core.constants import CACHE_KEY_ENTRY, CACHE_KEY_SEP
from jobboard.infrastructure.cache.tag_store import TagStore, TagVersion

logger = logging.getLogger(__name__)

T = TypeVar("T")


def entry_key(key: str) -> str:
    return f"{CACHE_KEY_ENTRY}{CACHE_KEY_SEP}{key}"


class TaggedCache:
    """Caches JSON-serializable results of async computations under tags."""

    def __init__(
        self,
        store: TagStore,
        profile_ttls: Mapping[str, int],
        default_profile: str = "default",
    ) -> None:
        self.store = store
        self.profile_ttls = dict(profile_ttls)
        self.default_profile = default_profile

    def ttl_for(self, versions: Mapping[str, TagVersion]) -> int:
        """Smallest TTL among the profiles last used to invalidate the tags."""
        default_ttl = self.profile_ttls[self.default_profile]
        ttls = [
            self.profile_ttls.get(v.profile or self.default_profile, default_ttl)
            for v in versions.values()
        ]
        return min(ttls, default=default_ttl)

    async def get_or_compute(
        self,
        key: str,
        tags: Sequence[str],
        compute: Callable[[], Awaitable[T]],
    ) -> T:
        """Return the cached value for key if all its tags are unchanged, else compute and store it."""
        tags = list(dict.fromkeys(tags))
        versions = await self.store.get_versions(tags)
        if len(versions) != len(tags):
            # Store cannot answer: never serve or write possibly-stale entries.
            return await compute()
        snapshot = {tag: v.version for tag, v in versions.items()}
        cached: Any = await self.store.get(entry_key(key))
        if isinstance(cached, dict) and cached.get("tags") == snapshot:
            return cached["value"]
        value = await compute()
        await self.store.set(
            entry_key(key),
            {"tags": snapshot, "value": value},
            ttl=self.ttl_for(versions),
        )
        return value
