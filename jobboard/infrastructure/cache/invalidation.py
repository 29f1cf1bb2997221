"""Fan-out tag invalidation for entity mutations.

Any write path (webhook workflow, job listing service) calls revalidate()
after its transaction commits. Invalidation is best-effort: a failed
signal is logged and skipped, never raised, because correctness lives in
the database and a stale cache heals on the next invalidation or expiry.
"""

from __future__ import annotations

import logging

from jobboard.domain.enums import CacheTagKind
from jobboard.domain.exceptions import InvalidArgumentException
from jobboard.infrastructure.cache.tag_store import TagStore
from jobboard.infrastructure.cache.tags import get_global_tag, get_id_tag, get_scoped_tag
from jobboard.shared.telemetry.tracing import traced

logger = logging.getLogger(__name__)

# Kinds whose reads are also cached per owning parent (scoped tags).
PARENT_KINDS: dict[CacheTagKind, CacheTagKind] = {
    CacheTagKind.JOB_LISTINGS: CacheTagKind.ORGANIZATIONS,
    CacheTagKind.JOB_LISTING_APPLICATIONS: CacheTagKind.JOB_LISTINGS,
    CacheTagKind.ORGANIZATION_USER_SETTINGS: CacheTagKind.ORGANIZATIONS,
}


def tags_for(
    kind: CacheTagKind,
    entity_id: str | None = None,
    parent_id: str | None = None,
) -> list[str]:
    """Return the tags to invalidate, in order: global, id, parent scope.

    Raises:
        InvalidArgumentException: If parent_id is given for a kind without a parent,
            or entity_id / parent_id is an empty string.
    """
    tags = [get_global_tag(kind)]
    if entity_id is not None:
        tags.append(get_id_tag(kind, entity_id))
    if parent_id is not None:
        parent_kind = PARENT_KINDS.get(CacheTagKind(kind))
        if parent_kind is None:
            raise InvalidArgumentException(
                "parent_id", f"{CacheTagKind(kind).value} has no parent scope"
            )
        tags.append(get_scoped_tag(kind, parent_kind, parent_id))
    return tags


async def mark_tags_stale(
    store: TagStore | None,
    tags: list[str],
    profile: str | None = None,
) -> list[str]:
    """Mark each tag stale; return the tags whose signal was delivered."""
    if store is None:
        return []
    delivered: list[str] = []
    for tag in tags:
        try:
            await store.mark_stale(tag, profile)
        except Exception:
            logger.exception("Cache invalidation failed for tag %s; entries may stay stale", tag)
            continue
        delivered.append(tag)
    return delivered


@traced("cache.revalidate")
async def revalidate(
    store: TagStore | None,
    kind: CacheTagKind,
    *,
    entity_id: str | None = None,
    parent_id: str | None = None,
    profile: str | None = None,
) -> list[str]:
    """Invalidate the global, id and (if parent_id) parent-scoped tags of kind.

    Safe to repeat: invalidating an already-fresh tag twice has the same
    observable effect as once.

    Args:
        store: Tag store; None means caching is disabled (no-op).
        kind: Entity kind that changed.
        entity_id: Id of the changed row (omit for bulk changes).
        parent_id: Id of the owning parent row, for kinds in PARENT_KINDS.
        profile: Optional freshness-profile hint forwarded to the store.

    Returns:
        Tags whose invalidation signal was delivered.
    """
    tags = tags_for(kind, entity_id, parent_id)
    delivered = await mark_tags_stale(store, tags, profile)
    logger.debug("Revalidated %s: %s", CacheTagKind(kind).value, delivered)
    return delivered
