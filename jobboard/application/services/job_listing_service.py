"""Job listing writes for employers: commit, then revalidate the listing's cache tags."""

from __future__ import annotations

from jobboard.application.dtos.job_listing import JobListingData, JobListingResult
from jobboard.application.interfaces.repositories import JobListingTransactionFactory
from jobboard.application.interfaces.services import ICacheInvalidator
from jobboard.domain.enums import JobListingStatus
from jobboard.domain.exceptions import ResourceNotFoundException
from jobboard.shared.telemetry.logging import get_logger
from jobboard.shared.utils.datetime import utc_now

logger = get_logger(__name__)


class JobListingService:
    """Create, edit, publish and delete job listings of one organization.

    Every write commits first; only then are the global, organization and
    id tags of the listing marked stale.
    """

    def __init__(
        self,
        transactions: JobListingTransactionFactory,
        invalidator: ICacheInvalidator,
    ) -> None:
        self.transactions = transactions
        self.invalidator = invalidator

    async def get(self, job_listing_id: str, organization_id: str) -> JobListingResult:
        async with self.transactions() as repo:
            listing = await repo.get_for_organization(job_listing_id, organization_id)
        if listing is None:
            raise ResourceNotFoundException("job_listing", job_listing_id)
        return listing

    async def list_for_organization(self, organization_id: str) -> list[JobListingResult]:
        async with self.transactions() as repo:
            return await repo.list_for_organization(organization_id)

    async def list_published(self, organization_id: str) -> list[JobListingResult]:
        """Listings job seekers may see: published ones, featured first, newest first."""
        listings = await self.list_for_organization(organization_id)
        published = [j for j in listings if j.status is JobListingStatus.PUBLISHED]
        return sorted(published, key=lambda j: not j.is_featured)

    async def get_published(
        self, job_listing_id: str, organization_id: str
    ) -> JobListingResult:
        listing = await self.get(job_listing_id, organization_id)
        if listing.status is not JobListingStatus.PUBLISHED:
            raise ResourceNotFoundException("job_listing", job_listing_id)
        return listing

    async def create(
        self, organization_id: str, data: JobListingData
    ) -> JobListingResult:
        async with self.transactions() as repo:
            listing = await repo.create(organization_id, data)
        await self.invalidator.job_listing_changed(listing.id, organization_id)
        logger.info("Job listing %s created for organization %s", listing.id, organization_id)
        return listing

    async def update(
        self, job_listing_id: str, organization_id: str, data: JobListingData
    ) -> JobListingResult:
        async with self.transactions() as repo:
            listing = await repo.update(job_listing_id, organization_id, data)
        if listing is None:
            raise ResourceNotFoundException("job_listing", job_listing_id)
        await self.invalidator.job_listing_changed(job_listing_id, organization_id)
        return listing

    async def set_status(
        self, job_listing_id: str, organization_id: str, status: JobListingStatus
    ) -> JobListingResult:
        """Change status; the first publication stamps posted_at."""
        async with self.transactions() as repo:
            current = await repo.get_for_organization(job_listing_id, organization_id)
            if current is None:
                raise ResourceNotFoundException("job_listing", job_listing_id)
            posted_at = None
            if status is JobListingStatus.PUBLISHED and current.posted_at is None:
                posted_at = utc_now()
            listing = await repo.set_status(
                job_listing_id, organization_id, status.value, posted_at
            )
        if listing is None:
            raise ResourceNotFoundException("job_listing", job_listing_id)
        await self.invalidator.job_listing_changed(job_listing_id, organization_id)
        return listing

    async def delete(self, job_listing_id: str, organization_id: str) -> None:
        async with self.transactions() as repo:
            deleted = await repo.delete(job_listing_id, organization_id)
        if not deleted:
            raise ResourceNotFoundException("job_listing", job_listing_id)
        await self.invalidator.job_listing_changed(job_listing_id, organization_id)
        logger.info("Job listing %s deleted", job_listing_id)
