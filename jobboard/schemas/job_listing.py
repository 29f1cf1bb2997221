"""Job listing API schemas."""

from datetime import datetime

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

from jobboard.application.dtos.job_listing import JobListingData
from jobboard.domain.enums import (
    ExperienceLevel,
    JobListingStatus,
    JobListingType,
    LocationRequirement,
    WageInterval,
)


class JobListingCreate(BaseModel):
    """Employer input for creating or editing a job listing.

    Blank city/district become None. On-site and hybrid listings need a
    location (reported on ``district``); remote listings drop any location.
    """

    title: str = Field(..., min_length=1, description="Title is required")
    description: str = Field(..., min_length=1, description="Description is required")
    experience_level: ExperienceLevel
    location_requirement: LocationRequirement
    type: JobListingType
    wage: int | None = Field(default=None, ge=1)
    wage_interval: WageInterval | None = None
    city: str | None = None
    # Declared after city and location_requirement: its validator reads both.
    district: str | None = Field(default=None, validate_default=True)

    @field_validator("title", "description")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("city", "district", mode="before")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if isinstance(v, str) and v.strip() == "":
            return None
        return v

    @field_validator("district")
    @classmethod
    def require_location(cls, v: str | None, info: ValidationInfo) -> str | None:
        requirement = info.data.get("location_requirement")
        if requirement is None or requirement is LocationRequirement.REMOTE:
            return v
        if v is None and info.data.get("city") is None:
            raise ValueError("District is required for on-site/hybrid jobs")
        return v

    @model_validator(mode="after")
    def clear_remote_location(self) -> "JobListingCreate":
        if self.location_requirement is LocationRequirement.REMOTE:
            self.city = None
            self.district = None
        return self

    def to_data(self) -> JobListingData:
        return JobListingData(
            title=self.title,
            description=self.description,
            experience_level=self.experience_level,
            location_requirement=self.location_requirement,
            type=self.type,
            wage=self.wage,
            wage_interval=self.wage_interval,
            city=self.city,
            district=self.district,
        )


class JobListingResponse(BaseModel):
    """Job listing in get/list responses."""

    model_config = ConfigDict(from_attributes=True)

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
