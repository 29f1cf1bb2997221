"""Cache tags for job listings (global, per organization, per listing)."""

from jobboard.domain.enums import CacheTagKind
from jobboard.infrastructure.cache.invalidation import revalidate
from jobboard.infrastructure.cache.tag_store import TagStore
from jobboard.infrastructure.cache.tags import get_global_tag, get_id_tag, get_scoped_tag


def get_job_listing_global_tag() -> str:
    return get_global_tag(CacheTagKind.JOB_LISTINGS)


def get_job_listing_organization_tag(organization_id: str) -> str:
    return get_scoped_tag(
        CacheTagKind.JOB_LISTINGS, CacheTagKind.ORGANIZATIONS, organization_id
    )


def get_job_listing_id_tag(job_listing_id: str) -> str:
    return get_id_tag(CacheTagKind.JOB_LISTINGS, job_listing_id)


async def revalidate_job_listing_cache(
    store: TagStore | None,
    *,
    job_listing_id: str,
    organization_id: str,
    profile: str | None = None,
) -> list[str]:
    return await revalidate(
        store,
        CacheTagKind.JOB_LISTINGS,
        entity_id=job_listing_id,
        parent_id=organization_id,
        profile=profile,
    )
