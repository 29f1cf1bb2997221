"""Public job listing reads for job seekers.

Only published listings are visible. Reads go through the tagged cache,
so employer writes and organization deletions show up on the next request.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from jobboard.api.v1.dependencies import get_job_listing_service
from jobboard.application.services.job_listing_service import JobListingService
from jobboard.schemas.job_listing import JobListingResponse

router = APIRouter()


@router.get(
    "/{organization_id}/job-listings",
    response_model=list[JobListingResponse],
)
async def list_job_listings(
    organization_id: str,
    service: Annotated[JobListingService, Depends(get_job_listing_service)],
) -> list[JobListingResponse]:
    listings = await service.list_published(organization_id)
    return [JobListingResponse.model_validate(j) for j in listings]


@router.get(
    "/{organization_id}/job-listings/{job_listing_id}",
    response_model=JobListingResponse,
)
async def get_job_listing(
    organization_id: str,
    job_listing_id: str,
    service: Annotated[JobListingService, Depends(get_job_listing_service)],
) -> JobListingResponse:
    """Return one published listing; 404 for drafts, delisted or unknown ids."""
    listing = await service.get_published(job_listing_id, organization_id)
    return JobListingResponse.model_validate(listing)
