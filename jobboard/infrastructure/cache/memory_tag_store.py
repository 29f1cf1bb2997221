"""Process-local TagStore. Used when Redis is disabled and in tests."""

from __future__ import annotations

import copy
import time
from collections.abc import Callable, Sequence
from typing import Any

from jobboard.infrastructure.cache.tag_store import TagVersion

# Expired entries are swept once per this many writes.
SWEEP_EVERY_WRITES = 256


class InMemoryTagStore:
    """TagStore backed by dicts.

    State is one counter and last profile per tag plus the cached entries;
    entries past their TTL are dropped on read and by a periodic sweep.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._versions: dict[str, int] = {}
        self._profiles: dict[str, str] = {}
        self._entries: dict[str, tuple[Any, float | None]] = {}
        self._writes = 0

    async def mark_stale(self, tag: str, profile: str | None = None) -> None:
        self._versions[tag] = self._versions.get(tag, 0) + 1
        if profile is not None:
            self._profiles[tag] = profile

    async def get_versions(self, tags: Sequence[str]) -> dict[str, TagVersion]:
        return {
            tag: TagVersion(self._versions.get(tag, 0), self._profiles.get(tag))
            for tag in tags
        }

    async def get(self, key: str) -> Any:
        item = self._entries.get(key)
        if item is None:
            return None
        value, expires_at = item
        if expires_at is not None and expires_at <= self._clock():
            del self._entries[key]
            return None
        return copy.deepcopy(value)

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        now = self._clock()
        self._writes += 1
        if self._writes % SWEEP_EVERY_WRITES == 0:
            self._sweep(now)
        self._entries[key] = (copy.deepcopy(value), now + ttl if ttl else None)

    def _sweep(self, now: float) -> None:
        expired = [
            key
            for key, (_, expires_at) in self._entries.items()
            if expires_at is not None and expires_at <= now
        ]
        for key in expired:
            del self._entries[key]

    @property
    def entry_count(self) -> int:
        return len(self._entries)
