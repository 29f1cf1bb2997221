"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from jobboard.application.dtos.identity import OrganizationData, UserData
    from jobboard.application.dtos.job_listing import JobListingData, JobListingResult


class IUserRepository(Protocol):
    """Users keyed by the identity provider's id."""

    async def exists(self, user_id: str) -> bool:
        """Return True if a row with this id exists."""

    async def insert_if_absent(self, data: UserData) -> bool:
        """Insert the user; return False (no error) if the id already exists.

        Backed by the primary-key constraint, so of two concurrent inserts
        of the same id exactly one returns True.
        """

    async def update_fields(self, data: UserData) -> bool:
        """Overwrite name, email, image_url, updated_at; return False if no row matched."""

    async def delete_by_id(self, user_id: str) -> bool:
        """Delete the user (dependent rows cascade); return False if no row matched."""


class IOrganizationRepository(Protocol):
    """Organizations keyed by the identity provider's id."""

    async def exists(self, organization_id: str) -> bool:
        """Return True if a row with this id exists."""

    async def insert_if_absent(self, data: OrganizationData) -> bool:
        """Insert the organization; return False if the id already exists."""

    async def update_fields(self, data: OrganizationData) -> bool:
        """Overwrite name, image_url, updated_at; return False if no row matched."""

    async def delete_by_id(self, organization_id: str) -> bool:
        """Delete the organization (job listings cascade); return False if no row matched."""


class IUserNotificationSettingsRepository(Protocol):
    """Notification settings, exactly one row per user."""

    async def insert_if_absent(self, user_id: str) -> bool:
        """Insert default settings for user_id; return False if they already exist."""


class IJobListingRepository(Protocol):
    """Job listings owned by organizations."""

    async def get_for_organization(
        self, job_listing_id: str, organization_id: str
    ) -> JobListingResult | None:
        """Return the listing if it belongs to the organization."""

    async def list_for_organization(self, organization_id: str) -> list[JobListingResult]:
        """Return all listings of an organization (newest first)."""

    async def create(
        self, organization_id: str, data: JobListingData
    ) -> JobListingResult:
        """Insert a draft listing."""

    async def update(
        self, job_listing_id: str, organization_id: str, data: JobListingData
    ) -> JobListingResult | None:
        """Overwrite editable fields; None if not found in the organization."""

    async def set_status(
        self,
        job_listing_id: str,
        organization_id: str,
        status: str,
        posted_at: datetime | None,
    ) -> JobListingResult | None:
        """Change publication status; None if not found in the organization."""

    async def delete(self, job_listing_id: str, organization_id: str) -> bool:
        """Delete; False if not found in the organization."""


@dataclass
class IdentityRepositories:
    """Repositories sharing one transaction."""

    users: IUserRepository
    organizations: IOrganizationRepository
    notification_settings: IUserNotificationSettingsRepository


# Opens a fresh transaction per call: commits on clean exit, rolls back on error.
IdentityTransactionFactory = Callable[
    [], AbstractAsyncContextManager[IdentityRepositories]
]
JobListingTransactionFactory = Callable[
    [], AbstractAsyncContextManager[IJobListingRepository]
]
