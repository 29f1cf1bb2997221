"""User repository (identity-provider projection)."""

from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.application.dtos.identity import UserData
from jobboard.infrastructure.persistence.models import User
from jobboard.infrastructure.persistence.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Implements IUserRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def insert_if_absent(self, data: UserData) -> bool:
        return await self._insert_ignoring_conflict(
            {
                "id": data.id,
                "name": data.name,
                "email": data.email,
                "image_url": data.image_url,
                "created_at": data.created_at,
                "updated_at": data.updated_at,
            }
        )

    async def update_fields(self, data: UserData) -> bool:
        return await self._update_by_id(
            data.id,
            {
                "name": data.name,
                "email": data.email,
                "image_url": data.image_url,
                "updated_at": data.updated_at,
            },
        )

    async def delete_by_id(self, user_id: str) -> bool:
        return await self._delete_by_id(user_id)
