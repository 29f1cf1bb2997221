"""Redis-backed tag store shared by all worker processes.

Each tag has an integer version under ``tagver:<tag>`` (INCR on every
invalidation) and its last freshness profile in the ``tagprofile`` hash.
Cached values live under plain keys with a TTL. Redis outages degrade to
"nothing cached": reads return None/empty, writes are dropped with a log.
mark_stale is the exception: it raises after a failed reconnect so the
caller can log the lost invalidation signal.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any

import redis.asyncio as redis

from jobboard.core.config import Settings, get_settings
from jobboard.core.constants import (
    CACHE_KEY_SEP,
    CACHE_KEY_TAG_PROFILES,
    CACHE_KEY_TAG_VERSION,
)
from jobboard.infrastructure.cache.tag_store import TagVersion

logger = logging.getLogger(__name__)


def tag_version_key(tag: str) -> str:
    """Redis key holding the version counter for a tag."""
    return f"{CACHE_KEY_TAG_VERSION}{CACHE_KEY_SEP}{tag}"


class RedisTagStore:
    """Async Redis TagStore. Call connect() at startup and disconnect() at shutdown."""

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            redis_client: Optional Redis client for testing or DI; when given
                the store is considered connected.
            settings: Optional settings (defaults to get_settings()).
        """
        self.redis = redis_client
        self.settings = settings or get_settings()
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Establish the Redis connection. Leaves the store unavailable on failure."""
        if self.redis is not None:
            return
        try:
            self.redis = redis.Redis(
                host=self.settings.redis_host,
                port=self.settings.redis_port,
                db=self.settings.redis_db,
                password=(
                    self.settings.redis_password.get_secret_value()
                    if self.settings.redis_password
                    else None
                ),
                decode_responses=True,
                socket_connect_timeout=5,
                socket_keepalive=True,
            )
            await self.redis.ping()
            self._connected = True
            logger.info(
                "Redis tag store connected: %s:%s",
                self.settings.redis_host,
                self.settings.redis_port,
            )
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning("Redis connection failed: %s. Tag cache disabled.", e)
            self._connected = False
            self.redis = None

    async def disconnect(self) -> None:
        """Close the Redis connection."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis tag store disconnected")

    async def _reconnect(self) -> bool:
        """Drop the current client and connect again. Returns True if reconnected."""
        if self.redis is not None:
            try:
                await self.redis.aclose()
            except redis.RedisError:
                pass
        self.redis = None
        self._connected = False
        await self.connect()
        return self._connected

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    async def _bump(self, tag: str, profile: str | None) -> None:
        assert self.redis is not None
        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.incr(tag_version_key(tag))
            if profile is not None:
                pipe.hset(CACHE_KEY_TAG_PROFILES, tag, profile)
            await pipe.execute()

    async def mark_stale(self, tag: str, profile: str | None = None) -> None:
        """Bump the tag version so every entry snapshotting an older version misses.

        Raises:
            redis.RedisError: If Redis stays unreachable after one reconnect.
        """
        if not self.is_available():
            if not await self._reconnect():
                raise redis.ConnectionError(
                    f"Redis unavailable; could not mark tag {tag!r} stale"
                )
        try:
            await self._bump(tag, profile)
        except (redis.ConnectionError, redis.TimeoutError):
            if not await self._reconnect():
                raise
            await self._bump(tag, profile)
        logger.debug("Tag STALE: %s (profile=%s)", tag, profile)

    async def get_versions(self, tags: Sequence[str]) -> dict[str, TagVersion]:
        """Return current versions; empty dict when Redis cannot answer."""
        if not tags or not self.is_available() or self.redis is None:
            return {}
        try:
            async with self.redis.pipeline(transaction=False) as pipe:
                pipe.mget([tag_version_key(t) for t in tags])
                pipe.hmget(CACHE_KEY_TAG_PROFILES, list(tags))
                raw_versions, raw_profiles = await pipe.execute()
        except redis.RedisError:
            logger.warning("Tag version lookup failed for %s", list(tags), exc_info=True)
            return {}
        return {
            tag: TagVersion(int(version or 0), profile)
            for tag, version, profile in zip(tags, raw_versions, raw_profiles)
        }

    async def get(self, key: str) -> Any | None:
        """Return cached value (JSON-deserialized) or None if missing/unavailable."""
        if not self.is_available() or self.redis is None:
            return None
        try:
            value = await self.redis.get(key)
        except redis.RedisError:
            logger.warning("Cache get failed for key %s", key, exc_info=True)
            return None
        if value is None:
            logger.debug("Cache MISS: %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return json.loads(value)

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Store value (JSON-serialized) with optional TTL; dropped when unavailable."""
        if not self.is_available() or self.redis is None:
            return
        try:
            serialized = json.dumps(value)
            if ttl:
                await self.redis.setex(key, ttl, serialized)
            else:
                await self.redis.set(key, serialized)
            logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
        except redis.RedisError:
            logger.warning("Cache set failed for key %s", key, exc_info=True)
