"""Public job listing reads."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from jobboard.api.v1.dependencies import get_job_listing_service
from jobboard.application.dtos.job_listing import JobListingResult
from jobboard.application.services.job_listing_service import JobListingService
from jobboard.domain.enums import (
    ExperienceLevel,
    JobListingStatus,
    JobListingType,
    LocationRequirement,
)
from jobboard.infrastructure.cache.invalidator import TagCacheInvalidator
from jobboard.infrastructure.cache.memory_tag_store import InMemoryTagStore
from jobboard.main import create_app


def _listing(
    listing_id: str,
    status: JobListingStatus = JobListingStatus.PUBLISHED,
    is_featured: bool = False,
) -> JobListingResult:
    return JobListingResult(
        id=listing_id,
        organization_id="org_1",
        title=f"Role {listing_id}",
        description="Details.",
        experience_level=ExperienceLevel.MID_LEVEL,
        location_requirement=LocationRequirement.IN_OFFICE,
        type=JobListingType.FULL_TIME,
        status=status,
        wage=1200,
        wage_interval=None,
        city="Kampala",
        district=None,
        is_featured=is_featured,
        posted_at=None,
    )


@pytest.fixture
def listing_repo() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
async def listings_client(listing_repo: AsyncMock) -> AsyncIterator[AsyncClient]:
    @asynccontextmanager
    async def transactions():
        yield listing_repo

    service = JobListingService(transactions, TagCacheInvalidator(InMemoryTagStore()))
    app = create_app()
    app.dependency_overrides[get_job_listing_service] = lambda: service
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def test_list_shows_published_featured_first(
    listings_client: AsyncClient, listing_repo: AsyncMock
) -> None:
    listing_repo.list_for_organization = AsyncMock(
        return_value=[
            _listing("jl1"),
            _listing("jl2", status=JobListingStatus.DRAFT),
            _listing("jl3", is_featured=True),
            _listing("jl4", status=JobListingStatus.DELISTED),
        ]
    )
    response = await listings_client.get("/api/v1/organizations/org_1/job-listings")
    assert response.status_code == 200
    assert [j["id"] for j in response.json()] == ["jl3", "jl1"]
    listing_repo.list_for_organization.assert_awaited_once_with("org_1")


async def test_get_published_listing(
    listings_client: AsyncClient, listing_repo: AsyncMock
) -> None:
    listing_repo.get_for_organization = AsyncMock(return_value=_listing("jl1"))
    response = await listings_client.get("/api/v1/organizations/org_1/job-listings/jl1")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "published"
    assert body["location_requirement"] == "in-office"


async def test_draft_listing_is_not_found(
    listings_client: AsyncClient, listing_repo: AsyncMock
) -> None:
    listing_repo.get_for_organization = AsyncMock(
        return_value=_listing("jl2", status=JobListingStatus.DRAFT)
    )
    response = await listings_client.get("/api/v1/organizations/org_1/job-listings/jl2")
    assert response.status_code == 404
    assert response.json()["error"] == "RESOURCE_NOT_FOUND"


async def test_unknown_listing_is_not_found(
    listings_client: AsyncClient, listing_repo: AsyncMock
) -> None:
    listing_repo.get_for_organization = AsyncMock(return_value=None)
    response = await listings_client.get("/api/v1/organizations/org_1/job-listings/nope")
    assert response.status_code == 404
