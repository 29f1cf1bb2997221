"""Persistence models: ORM entities and mixins."""

from jobboard.infrastructure.persistence.models.job_listing import JobListing
from jobboard.infrastructure.persistence.models.job_listing_application import (
    JobListingApplication,
)
from jobboard.infrastructure.persistence.models.mixins import (
    CuidMixin,
    ExternalIdMixin,
    TimestampMixin,
)
from jobboard.infrastructure.persistence.models.organization import Organization
from jobboard.infrastructure.persistence.models.organization_user_settings import (
    OrganizationUserSettings,
)
from jobboard.infrastructure.persistence.models.user import User
from jobboard.infrastructure.persistence.models.user_notification_settings import (
    UserNotificationSettings,
)

__all__ = [
    "CuidMixin",
    "ExternalIdMixin",
    "JobListing",
    "JobListingApplication",
    "Organization",
    "OrganizationUserSettings",
    "TimestampMixin",
    "User",
    "UserNotificationSettings",
]
