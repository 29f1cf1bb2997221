"""Application ports (Protocols) implemented by infrastructure."""

from jobboard.application.interfaces.repositories import (
    IdentityRepositories,
    IdentityTransactionFactory,
    IJobListingRepository,
    IOrganizationRepository,
    IUserNotificationSettingsRepository,
    IUserRepository,
    JobListingTransactionFactory,
)
from jobboard.application.interfaces.services import ICacheInvalidator

__all__ = [
    "ICacheInvalidator",
    "IdentityRepositories",
    "IdentityTransactionFactory",
    "IJobListingRepository",
    "IOrganizationRepository",
    "IUserNotificationSettingsRepository",
    "IUserRepository",
    "JobListingTransactionFactory",
]
