"""Per-user notification settings (one row per user, created with the user)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobboard.infrastructure.persistence.database import Base
from jobboard.infrastructure.persistence.models.mixins import TimestampMixin

if TYPE_CHECKING:
    from jobboard.infrastructure.persistence.models.user import User


class UserNotificationSettings(TimestampMixin, Base):
    """Table: user_notification_settings. Primary key is the owning user's id."""

    __tablename__ = "user_notification_settings"

    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    new_job_email_notifications: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false")
    )
    ai_prompt: Mapped[str | None] = mapped_column(Text, nullable=True)

    user: Mapped[User] = relationship(back_populates="notification_settings")
