"""Cache tags for job listing applications (keyed "<jobListingId>-<userId>")."""

from jobboard.domain.enums import CacheTagKind
from jobboard.infrastructure.cache.invalidation import revalidate
from jobboard.infrastructure.cache.tag_store import TagStore
from jobboard.infrastructure.cache.tags import get_global_tag, get_id_tag, get_scoped_tag


def application_id(job_listing_id: str, user_id: str) -> str:
    return f"{job_listing_id}-{user_id}"


def get_job_listing_application_global_tag() -> str:
    return get_global_tag(CacheTagKind.JOB_LISTING_APPLICATIONS)


def get_job_listing_application_job_listing_tag(job_listing_id: str) -> str:
    return get_scoped_tag(
        CacheTagKind.JOB_LISTING_APPLICATIONS, CacheTagKind.JOB_LISTINGS, job_listing_id
    )


def get_job_listing_application_id_tag(job_listing_id: str, user_id: str) -> str:
    return get_id_tag(
        CacheTagKind.JOB_LISTING_APPLICATIONS, application_id(job_listing_id, user_id)
    )


async def revalidate_job_listing_application_cache(
    store: TagStore | None,
    *,
    job_listing_id: str,
    user_id: str,
    profile: str | None = None,
) -> list[str]:
    return await revalidate(
        store,
        CacheTagKind.JOB_LISTING_APPLICATIONS,
        entity_id=application_id(job_listing_id, user_id),
        parent_id=job_listing_id,
        profile=profile,
    )
