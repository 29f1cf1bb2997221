"""Base repository: primary-key lookups and idempotent single-row writes."""

from typing import Any, Generic, TypeVar

from sqlalchemy import delete, exists, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Repository over one model with a single-column primary key ``id``.

    Writes are single statements so their outcome (inserted / matched /
    deleted) comes from the database, not from a prior read.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def exists(self, entity_id: str) -> bool:
        """Return True if a record with this primary key exists."""
        model: Any = self.model
        result = await self.db.execute(select(exists().where(model.id == entity_id)))
        return bool(result.scalar())

    async def _insert_ignoring_conflict(self, values: dict[str, Any]) -> bool:
        """INSERT ... ON CONFLICT (id) DO NOTHING; True if a row was inserted.

        The primary-key constraint is what makes concurrent duplicate
        inserts safe; callers' existence checks are only a fast path.
        """
        model: Any = self.model
        stmt = (
            insert(self.model)
            .values(**values)
            .on_conflict_do_nothing(index_elements=[model.id])
            .returning(model.id)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def _update_by_id(self, entity_id: str, values: dict[str, Any]) -> bool:
        """UPDATE by primary key; True if a row matched."""
        model: Any = self.model
        stmt = (
            update(self.model)
            .where(model.id == entity_id)
            .values(**values)
            .returning(model.id)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def _delete_by_id(self, entity_id: str) -> bool:
        """DELETE by primary key; True if a row was deleted."""
        model: Any = self.model
        stmt = delete(self.model).where(model.id == entity_id).returning(model.id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none() is not None
