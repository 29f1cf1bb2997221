"""Application services."""

from jobboard.application.services.job_listing_service import JobListingService

__all__ = ["JobListingService"]
