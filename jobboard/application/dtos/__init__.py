"""Application DTOs (no dependency on ORM or HTTP)."""

from jobboard.application.dtos.identity import (
    DeletedIdentity,
    IdentityEvent,
    OrganizationData,
    UserData,
)
from jobboard.application.dtos.job_listing import JobListingData, JobListingResult
from jobboard.application.dtos.sync import SyncAction, SyncResult, SyncState

__all__ = [
    "DeletedIdentity",
    "IdentityEvent",
    "JobListingData",
    "JobListingResult",
    "OrganizationData",
    "SyncAction",
    "SyncResult",
    "SyncState",
    "UserData",
]
