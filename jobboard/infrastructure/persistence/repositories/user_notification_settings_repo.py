"""Notification settings repository (one row per user)."""

from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.infrastructure.persistence.models import UserNotificationSettings


class UserNotificationSettingsRepository:
    """Implements IUserNotificationSettingsRepository."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def insert_if_absent(self, user_id: str) -> bool:
        stmt = (
            insert(UserNotificationSettings)
            .values(user_id=user_id)
            .on_conflict_do_nothing(index_elements=[UserNotificationSettings.user_id])
            .returning(UserNotificationSettings.user_id)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def get(self, user_id: str) -> UserNotificationSettings | None:
        return await self.db.get(UserNotificationSettings, user_id)
