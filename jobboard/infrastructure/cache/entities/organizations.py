"""Cache tags for organizations."""

from jobboard.domain.enums import CacheTagKind
from jobboard.infrastructure.cache.invalidation import revalidate
from jobboard.infrastructure.cache.tag_store import TagStore
from jobboard.infrastructure.cache.tags import get_global_tag, get_id_tag


def get_organization_global_tag() -> str:
    return get_global_tag(CacheTagKind.ORGANIZATIONS)


def get_organization_id_tag(organization_id: str) -> str:
    return get_id_tag(CacheTagKind.ORGANIZATIONS, organization_id)


async def revalidate_organization_cache(
    store: TagStore | None, organization_id: str, profile: str | None = None
) -> list[str]:
    return await revalidate(
        store, CacheTagKind.ORGANIZATIONS, entity_id=organization_id, profile=profile
    )
