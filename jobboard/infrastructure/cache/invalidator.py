"""ICacheInvalidator over a TagStore: which tags each entity mutation stales."""

from __future__ import annotations

from jobboard.domain.enums import CacheTagKind
from jobboard.infrastructure.cache.entities import (
    get_job_listing_organization_tag,
    revalidate_job_listing_cache,
    revalidate_organization_cache,
    revalidate_user_cache,
    revalidate_user_notification_settings_cache,
)
from jobboard.infrastructure.cache.invalidation import mark_tags_stale
from jobboard.infrastructure.cache.tag_store import TagStore
from jobboard.infrastructure.cache.tags import get_global_tag


class TagCacheInvalidator:
    """Implements ICacheInvalidator. A None store disables invalidation."""

    def __init__(self, store: TagStore | None, profile: str | None = None) -> None:
        self.store = store
        self.profile = profile

    async def user_changed(self, user_id: str, *, deleted: bool = False) -> list[str]:
        tags = await revalidate_user_cache(self.store, user_id, self.profile)
        tags += await revalidate_user_notification_settings_cache(
            self.store, user_id, self.profile
        )
        if deleted:
            # Applications and per-organization settings of the user were cascade-deleted.
            tags += await mark_tags_stale(
                self.store,
                [
                    get_global_tag(CacheTagKind.JOB_LISTING_APPLICATIONS),
                    get_global_tag(CacheTagKind.ORGANIZATION_USER_SETTINGS),
                ],
                self.profile,
            )
        return tags

    async def organization_changed(
        self, organization_id: str, *, deleted: bool = False
    ) -> list[str]:
        tags = await revalidate_organization_cache(
            self.store, organization_id, self.profile
        )
        if deleted:
            tags += await mark_tags_stale(
                self.store,
                [
                    get_global_tag(CacheTagKind.JOB_LISTINGS),
                    get_job_listing_organization_tag(organization_id),
                    get_global_tag(CacheTagKind.ORGANIZATION_USER_SETTINGS),
                ],
                self.profile,
            )
        return tags

    async def job_listing_changed(
        self, job_listing_id: str, organization_id: str
    ) -> list[str]:
        return await revalidate_job_listing_cache(
            self.store,
            job_listing_id=job_listing_id,
            organization_id=organization_id,
            profile=self.profile,
        )
