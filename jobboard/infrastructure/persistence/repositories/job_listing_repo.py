"""Job listing repository with tag-aware read caching. Returns application DTOs."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.application.dtos.job_listing import JobListingData, JobListingResult
from jobboard.domain.enums import (
    ExperienceLevel,
    JobListingStatus,
    JobListingType,
    LocationRequirement,
    WageInterval,
)
from jobboard.infrastructure.cache.entities.job_listings import (
    get_job_listing_id_tag,
    get_job_listing_organization_tag,
)
from jobboard.infrastructure.cache.tagged_cache import TaggedCache
from jobboard.infrastructure.persistence.models import JobListing
from jobboard.infrastructure.persistence.repositories.base import BaseRepository


def _job_listing_to_result(j: JobListing) -> JobListingResult:
    """Map ORM JobListing to application JobListingResult."""
    return JobListingResult(
        id=j.id,
        organization_id=j.organization_id,
        title=j.title,
        description=j.description,
        experience_level=j.experience_level,
        location_requirement=j.location_requirement,
        type=j.type,
        status=j.status,
        wage=j.wage,
        wage_interval=j.wage_interval,
        city=j.city,
        district=j.district,
        is_featured=j.is_featured,
        posted_at=j.posted_at,
    )


def _result_to_dict(r: JobListingResult) -> dict[str, Any]:
    return {
        "id": r.id,
        "organization_id": r.organization_id,
        "title": r.title,
        "description": r.description,
        "experience_level": r.experience_level.value,
        "location_requirement": r.location_requirement.value,
        "type": r.type.value,
        "status": r.status.value,
        "wage": r.wage,
        "wage_interval": r.wage_interval.value if r.wage_interval else None,
        "city": r.city,
        "district": r.district,
        "is_featured": r.is_featured,
        "posted_at": r.posted_at.isoformat() if r.posted_at else None,
    }


def _result_from_dict(d: dict[str, Any]) -> JobListingResult:
    """Build a JobListingResult from a cache dict (enum values, ISO datetimes)."""
    return JobListingResult(
        id=d["id"],
        organization_id=d["organization_id"],
        title=d["title"],
        description=d["description"],
        experience_level=ExperienceLevel(d["experience_level"]),
        location_requirement=LocationRequirement(d["location_requirement"]),
        type=JobListingType(d["type"]),
        status=JobListingStatus(d["status"]),
        wage=d["wage"],
        wage_interval=WageInterval(d["wage_interval"]) if d["wage_interval"] else None,
        city=d["city"],
        district=d["district"],
        is_featured=d["is_featured"],
        posted_at=datetime.fromisoformat(d["posted_at"]) if d["posted_at"] else None,
    )


class JobListingRepository(BaseRepository[JobListing]):
    """Implements IJobListingRepository. Optional TaggedCache for organization-scoped reads.

    Reads are filed under the listing's id tag and the organization's
    job-listing scope tag; JobListingService revalidates both after writes.
    """

    def __init__(self, db: AsyncSession, cache: TaggedCache | None = None) -> None:
        super().__init__(db, JobListing)
        self.cache = cache

    async def _get_entity(
        self, job_listing_id: str, organization_id: str
    ) -> JobListing | None:
        result = await self.db.execute(
            select(JobListing).where(
                JobListing.id == job_listing_id,
                JobListing.organization_id == organization_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_for_organization(
        self, job_listing_id: str, organization_id: str
    ) -> JobListingResult | None:
        async def load() -> dict[str, Any] | None:
            entity = await self._get_entity(job_listing_id, organization_id)
            return _result_to_dict(_job_listing_to_result(entity)) if entity else None

        if self.cache is None:
            data = await load()
        else:
            data = await self.cache.get_or_compute(
                f"job_listing:{organization_id}:{job_listing_id}",
                [
                    get_job_listing_id_tag(job_listing_id),
                    get_job_listing_organization_tag(organization_id),
                ],
                load,
            )
        return _result_from_dict(data) if data else None

    async def list_for_organization(self, organization_id: str) -> list[JobListingResult]:
        async def load() -> list[dict[str, Any]]:
            result = await self.db.execute(
                select(JobListing)
                .where(JobListing.organization_id == organization_id)
                .order_by(JobListing.created_at.desc())
            )
            return [
                _result_to_dict(_job_listing_to_result(j)) for j in result.scalars().all()
            ]

        if self.cache is None:
            rows = await load()
        else:
            rows = await self.cache.get_or_compute(
                f"job_listings:{organization_id}",
                [get_job_listing_organization_tag(organization_id)],
                load,
            )
        return [_result_from_dict(r) for r in rows]

    async def create(
        self, organization_id: str, data: JobListingData
    ) -> JobListingResult:
        entity = JobListing(
            organization_id=organization_id,
            status=JobListingStatus.DRAFT,
            **_editable_fields(data),
        )
        self.db.add(entity)
        await self.db.flush()
        await self.db.refresh(entity)
        return _job_listing_to_result(entity)

    async def update(
        self, job_listing_id: str, organization_id: str, data: JobListingData
    ) -> JobListingResult | None:
        entity = await self._get_entity(job_listing_id, organization_id)
        if entity is None:
            return None
        for key, value in _editable_fields(data).items():
            setattr(entity, key, value)
        await self.db.flush()
        await self.db.refresh(entity)
        return _job_listing_to_result(entity)

    async def set_status(
        self,
        job_listing_id: str,
        organization_id: str,
        status: str,
        posted_at: datetime | None,
    ) -> JobListingResult | None:
        entity = await self._get_entity(job_listing_id, organization_id)
        if entity is None:
            return None
        entity.status = JobListingStatus(status)
        if posted_at is not None:
            entity.posted_at = posted_at
        await self.db.flush()
        await self.db.refresh(entity)
        return _job_listing_to_result(entity)

    async def delete(self, job_listing_id: str, organization_id: str) -> bool:
        entity = await self._get_entity(job_listing_id, organization_id)
        if entity is None:
            return False
        await self.db.delete(entity)
        await self.db.flush()
        return True


def _editable_fields(data: JobListingData) -> dict[str, Any]:
    return {
        "title": data.title,
        "description": data.description,
        "experience_level": data.experience_level,
        "location_requirement": data.location_requirement,
        "type": data.type,
        "wage": data.wage,
        "wage_interval": data.wage_interval,
        "city": data.city,
        "district": data.district,
    }
