"""Job listing ORM model (owned by an organization)."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from jobboard.domain.enums import (
    ExperienceLevel,
    JobListingStatus,
    JobListingType,
    LocationRequirement,
    WageInterval,
)
from jobboard.infrastructure.persistence.database import Base
from jobboard.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


def pg_enum(enum_cls: type, name: str) -> Enum:
    """Postgres enum storing member values (e.g. "in-office"), not names."""
    return Enum(enum_cls, name=name, values_callable=lambda e: [m.value for m in e])


class JobListing(CuidMixin, TimestampMixin, Base):
    """Table: job_listings. Cascade-deleted with the owning organization."""

    __tablename__ = "job_listings"

    organization_id: Mapped[str] = mapped_column(
        String, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    wage: Mapped[int | None] = mapped_column(Integer, nullable=True)
    wage_interval: Mapped[WageInterval | None] = mapped_column(
        pg_enum(WageInterval, "job_listings_wage_interval"), nullable=True
    )
    city: Mapped[str | None] = mapped_column(String, nullable=True)
    district: Mapped[str | None] = mapped_column(String, nullable=True)
    is_featured: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false"), default=False
    )
    location_requirement: Mapped[LocationRequirement] = mapped_column(
        pg_enum(LocationRequirement, "job_listings_location_requirement"), nullable=False
    )
    experience_level: Mapped[ExperienceLevel] = mapped_column(
        pg_enum(ExperienceLevel, "job_listings_experience_level"), nullable=False
    )
    status: Mapped[JobListingStatus] = mapped_column(
        pg_enum(JobListingStatus, "job_listings_status"),
        nullable=False,
        default=JobListingStatus.DRAFT,
        server_default=JobListingStatus.DRAFT.value,
    )
    type: Mapped[JobListingType] = mapped_column(
        pg_enum(JobListingType, "job_listings_type"), nullable=False
    )
    posted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (
        Index("idx_job_listings_district", "district"),
        Index("idx_job_listings_region", "city"),
        Index("idx_job_listings_status", "status"),
        Index("idx_job_listings_org_id", "organization_id"),
        Index("idx_job_listings_posted_at", "posted_at"),
        Index("idx_job_listings_status_district", "status", "district"),
        Index("idx_job_listings_status_posted", "status", "posted_at"),
    )
