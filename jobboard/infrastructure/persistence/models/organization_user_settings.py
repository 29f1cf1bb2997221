"""Per (user, organization) settings for employers."""

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from jobboard.infrastructure.persistence.database import Base
from jobboard.infrastructure.persistence.models.mixins import TimestampMixin


class OrganizationUserSettings(TimestampMixin, Base):
    """Table: organization_user_settings. Deleted with either the user or the organization."""

    __tablename__ = "organization_user_settings"

    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    organization_id: Mapped[str] = mapped_column(
        String, ForeignKey("organizations.id", ondelete="CASCADE"), primary_key=True
    )
    new_application_email_notifications: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false")
    )
    minimum_rating: Mapped[int | None] = mapped_column(Integer, nullable=True)

    __table_args__ = (
        CheckConstraint(
            "minimum_rating IS NULL OR (minimum_rating >= 1 AND minimum_rating <= 5)",
            name="minimum_rating_check",
        ),
    )
