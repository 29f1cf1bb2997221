"""Cache tags for user notification settings (one row per user, keyed by user id)."""

from jobboard.domain.enums import CacheTagKind
from jobboard.infrastructure.cache.invalidation import revalidate
from jobboard.infrastructure.cache.tag_store import TagStore
from jobboard.infrastructure.cache.tags import get_global_tag, get_id_tag


def get_user_notification_settings_global_tag() -> str:
    return get_global_tag(CacheTagKind.USER_NOTIFICATION_SETTINGS)


def get_user_notification_settings_id_tag(user_id: str) -> str:
    return get_id_tag(CacheTagKind.USER_NOTIFICATION_SETTINGS, user_id)


async def revalidate_user_notification_settings_cache(
    store: TagStore | None, user_id: str, profile: str | None = None
) -> list[str]:
    return await revalidate(
        store, CacheTagKind.USER_NOTIFICATION_SETTINGS, entity_id=user_id, profile=profile
    )
