"""Job listing application ORM model (one per user per listing)."""

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from jobboard.domain.enums import ApplicationStage
from jobboard.infrastructure.persistence.database import Base
from jobboard.infrastructure.persistence.models.job_listing import pg_enum
from jobboard.infrastructure.persistence.models.mixins import TimestampMixin


class JobListingApplication(TimestampMixin, Base):
    """Table: job_listing_applications. Composite key (job_listing_id, user_id)."""

    __tablename__ = "job_listing_applications"

    job_listing_id: Mapped[str] = mapped_column(
        String, ForeignKey("job_listings.id", ondelete="CASCADE"), primary_key=True
    )
    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    cover_letter: Mapped[str | None] = mapped_column(Text, nullable=True)
    resume_url: Mapped[str] = mapped_column(Text, nullable=False)
    rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
    stage: Mapped[ApplicationStage] = mapped_column(
        pg_enum(ApplicationStage, "job_listing_applications_stages"),
        nullable=False,
        default=ApplicationStage.APPLIED,
        server_default=ApplicationStage.APPLIED.value,
    )

    __table_args__ = (
        CheckConstraint("rating >= 0 AND rating <= 5", name="rating_check"),
    )
