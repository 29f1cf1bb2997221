"""Cache: tag builders, tag stores, tagged read cache and invalidation.

Read paths attach tags (tags.py / entities) to cached computations via
TaggedCache; write paths call revalidate() after committing.
"""

from jobboard.infrastructure.cache.invalidation import PARENT_KINDS, revalidate, tags_for
from jobboard.infrastructure.cache.invalidator import TagCacheInvalidator
from jobboard.infrastructure.cache.memory_tag_store import InMemoryTagStore
from jobboard.infrastructure.cache.redis_tag_store import RedisTagStore
from jobboard.infrastructure.cache.tag_store import TagStore, TagVersion
from jobboard.infrastructure.cache.tagged_cache import TaggedCache
from jobboard.infrastructure.cache.tags import get_global_tag, get_id_tag, get_scoped_tag

__all__ = [
    "InMemoryTagStore",
    "PARENT_KINDS",
    "RedisTagStore",
    "TagCacheInvalidator",
    "TagStore",
    "TagVersion",
    "TaggedCache",
    "get_global_tag",
    "get_id_tag",
    "get_scoped_tag",
    "revalidate",
    "tags_for",
]
