"""Per-entity cache tag helpers: tag getters for read paths, revalidate_* for write paths."""

from jobboard.infrastructure.cache.entities.job_listing_applications import (
    get_job_listing_application_global_tag,
    get_job_listing_application_id_tag,
    get_job_listing_application_job_listing_tag,
    revalidate_job_listing_application_cache,
)
from jobboard.infrastructure.cache.entities.job_listings import (
    get_job_listing_global_tag,
    get_job_listing_id_tag,
    get_job_listing_organization_tag,
    revalidate_job_listing_cache,
)
from jobboard.infrastructure.cache.entities.organizations import (
    get_organization_global_tag,
    get_organization_id_tag,
    revalidate_organization_cache,
)
from jobboard.infrastructure.cache.entities.user_notification_settings import (
    get_user_notification_settings_global_tag,
    get_user_notification_settings_id_tag,
    revalidate_user_notification_settings_cache,
)
from jobboard.infrastructure.cache.entities.users import (
    get_user_global_tag,
    get_user_id_tag,
    revalidate_user_cache,
)

__all__ = [
    "get_job_listing_application_global_tag",
    "get_job_listing_application_id_tag",
    "get_job_listing_application_job_listing_tag",
    "get_job_listing_global_tag",
    "get_job_listing_id_tag",
    "get_job_listing_organization_tag",
    "get_organization_global_tag",
    "get_organization_id_tag",
    "get_user_global_tag",
    "get_user_id_tag",
    "get_user_notification_settings_global_tag",
    "get_user_notification_settings_id_tag",
    "revalidate_job_listing_application_cache",
    "revalidate_job_listing_cache",
    "revalidate_organization_cache",
    "revalidate_user_cache",
    "revalidate_user_notification_settings_cache",
]
