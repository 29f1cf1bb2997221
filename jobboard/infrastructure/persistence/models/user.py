"""User ORM model: local projection of an identity-provider user."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobboard.infrastructure.persistence.database import Base
from jobboard.infrastructure.persistence.models.mixins import ExternalIdMixin, TimestampMixin

if TYPE_CHECKING:
    from jobboard.infrastructure.persistence.models.user_notification_settings import (
        UserNotificationSettings,
    )


class User(ExternalIdMixin, TimestampMixin, Base):
    """User. Table: users. Rows are owned by the identity webhook workflow."""

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String, nullable=False)
    image_url: Mapped[str | None] = mapped_column(String, nullable=True)
    email: Mapped[str] = mapped_column(String, nullable=False, index=True)

    notification_settings: Mapped[UserNotificationSettings | None] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        uselist=False,
    )
