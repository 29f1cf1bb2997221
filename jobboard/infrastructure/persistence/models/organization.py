"""Organization ORM model: local projection of an identity-provider organization."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from jobboard.infrastructure.persistence.database import Base
from jobboard.infrastructure.persistence.models.mixins import ExternalIdMixin, TimestampMixin


class Organization(ExternalIdMixin, TimestampMixin, Base):
    """Organization. Table: organizations. Deleting one cascades to its job listings."""

    __tablename__ = "organizations"

    name: Mapped[str] = mapped_column(String, nullable=False)
    image_url: Mapped[str | None] = mapped_column(String, nullable=True)
