"""DTOs for job listing use cases."""

from dataclasses import dataclass
from datetime import datetime

from jobboard.domain.enums import (
    ExperienceLevel,
    JobListingStatus,
    JobListingType,
    LocationRequirement,
    WageInterval,
)


@dataclass(frozen=True)
class JobListingData:
    """Validated job listing fields supplied by an employer."""

    title: str
    description: str
    experience_level: ExperienceLevel
    location_requirement: LocationRequirement
    type: JobListingType
    wage: int | None = None
    wage_interval: WageInterval | None = None
    city: str | None = None
    district: str | None = None


@dataclass(frozen=True)
class JobListingResult:
    """Job listing read-model."""

    id: str
    organization_id: str
    title: str
    description: str
    experience_level: ExperienceLevel
    location_requirement: LocationRequirement
    type: JobListingType
    status: JobListingStatus
    wage: int | None
    wage_interval: WageInterval | None
    city: str | None
    district: str | None
    is_featured: bool
    posted_at: datetime | None
