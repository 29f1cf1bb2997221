"""JobListingService unit tests with a mocked repository."""

from contextlib import asynccontextmanager
from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from jobboard.application.dtos.job_listing import JobListingData, JobListingResult
from jobboard.application.services.job_listing_service import JobListingService
from jobboard.domain.enums import (
    ExperienceLevel,
    JobListingStatus,
    JobListingType,
    LocationRequirement,
)
from jobboard.domain.exceptions import ResourceNotFoundException
from jobboard.infrastructure.cache.invalidator import TagCacheInvalidator


def _data() -> JobListingData:
    return JobListingData(
        title="Data Analyst",
        description="Dashboards.",
        experience_level=ExperienceLevel.JUNIOR,
        location_requirement=LocationRequirement.REMOTE,
        type=JobListingType.CONTRACT,
    )


def _result(posted_at: datetime | None = None, status=JobListingStatus.DRAFT) -> JobListingResult:
    return JobListingResult(
        id="jl1",
        organization_id="org_1",
        title="Data Analyst",
        description="Dashboards.",
        experience_level=ExperienceLevel.JUNIOR,
        location_requirement=LocationRequirement.REMOTE,
        type=JobListingType.CONTRACT,
        status=status,
        wage=None,
        wage_interval=None,
        city=None,
        district=None,
        is_featured=False,
        posted_at=posted_at,
    )


@pytest.fixture
def service_mocks(tag_store):
    """JobListingService over an AsyncMock repository and a recording tag store."""
    repo = AsyncMock()
    events: list[str] = []

    @asynccontextmanager
    async def transactions():
        events.append("begin")
        yield repo
        events.append("commit")

    store = tag_store
    service = JobListingService(transactions, TagCacheInvalidator(store))
    return service, repo, store, events


async def test_create_invalidates_listing_tags(service_mocks) -> None:
    service, repo, store, _ = service_mocks
    repo.create = AsyncMock(return_value=_result())

    listing = await service.create("org_1", _data())

    assert listing.id == "jl1"
    repo.create.assert_awaited_once_with("org_1", _data())
    assert [tag for tag, _ in store.stale_calls] == [
        "global:jobListings",
        "id:jobListings-jl1",
        "organizations:org_1-jobListings",
    ]


async def test_invalidation_happens_after_commit(service_mocks) -> None:
    service, repo, store, events = service_mocks

    async def create(*args, **kwargs):
        assert store.stale_calls == []
        return _result()

    repo.create = AsyncMock(side_effect=create)
    await service.create("org_1", _data())
    assert events == ["begin", "commit"]
    assert store.stale_calls


async def test_update_missing_raises_not_found(service_mocks) -> None:
    service, repo, store, _ = service_mocks
    repo.update = AsyncMock(return_value=None)
    with pytest.raises(ResourceNotFoundException):
        await service.update("jl404", "org_1", _data())
    assert store.stale_calls == []


async def test_first_publish_sets_posted_at(service_mocks) -> None:
    service, repo, _, _ = service_mocks
    repo.get_for_organization = AsyncMock(return_value=_result())
    repo.set_status = AsyncMock(return_value=_result(status=JobListingStatus.PUBLISHED))

    await service.set_status("jl1", "org_1", JobListingStatus.PUBLISHED)

    args = repo.set_status.await_args.args
    assert args[:3] == ("jl1", "org_1", "published")
    assert isinstance(args[3], datetime)


async def test_republish_keeps_posted_at(service_mocks) -> None:
    service, repo, _, _ = service_mocks
    posted = datetime(2025, 1, 1, tzinfo=UTC)
    repo.get_for_organization = AsyncMock(return_value=_result(posted_at=posted))
    repo.set_status = AsyncMock(return_value=_result(posted_at=posted))

    await service.set_status("jl1", "org_1", JobListingStatus.PUBLISHED)

    assert repo.set_status.await_args.args[3] is None


async def test_delete_invalidates(service_mocks) -> None:
    service, repo, store, _ = service_mocks
    repo.delete = AsyncMock(return_value=True)
    await service.delete("jl1", "org_1")
    assert "organizations:org_1-jobListings" in store.stale_tags


async def test_delete_missing_raises(service_mocks) -> None:
    service, repo, _, _ = service_mocks
    repo.delete = AsyncMock(return_value=False)
    with pytest.raises(ResourceNotFoundException):
        await service.delete("jl1", "org_1")


async def test_get_missing_raises(service_mocks) -> None:
    service, repo, _, _ = service_mocks
    repo.get_for_organization = AsyncMock(return_value=None)
    with pytest.raises(ResourceNotFoundException) as exc_info:
        await service.get("jl1", "org_1")
    assert exc_info.value.details["resource_type"] == "job_listing"
