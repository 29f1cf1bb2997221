"""Persistence repositories. Re-exports for dependency injection."""

from jobboard.infrastructure.persistence.repositories.base import BaseRepository
from jobboard.infrastructure.persistence.repositories.job_listing_repo import (
    JobListingRepository,
)
from jobboard.infrastructure.persistence.repositories.organization_repo import (
    OrganizationRepository,
)
from jobboard.infrastructure.persistence.repositories.user_notification_settings_repo import (
    UserNotificationSettingsRepository,
)
from jobboard.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "BaseRepository",
    "JobListingRepository",
    "OrganizationRepository",
    "UserNotificationSettingsRepository",
    "UserRepository",
]
