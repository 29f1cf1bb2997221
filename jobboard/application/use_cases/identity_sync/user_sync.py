"""User lifecycle handlers. A user owns exactly one notification settings row."""

from __future__ import annotations

from jobboard.application.dtos.identity import UserData
from jobboard.application.interfaces.repositories import IdentityRepositories
from jobboard.application.use_cases.identity_sync.base import IdentitySyncHandler
from jobboard.domain.enums import IdentityEntity


class UserSyncHandler(IdentitySyncHandler[UserData]):
    entity = IdentityEntity.USER

    def _entity_id(self, data: UserData) -> str:
        return data.id

    async def _exists(self, repos: IdentityRepositories, entity_id: str) -> bool:
        return await repos.users.exists(entity_id)

    async def _insert(self, repos: IdentityRepositories, data: UserData) -> bool:
        if not await repos.users.insert_if_absent(data):
            return False
        await repos.notification_settings.insert_if_absent(data.id)
        return True

    async def _ensure_dependents(self, repos: IdentityRepositories, entity_id: str) -> None:
        await repos.notification_settings.insert_if_absent(entity_id)

    async def _update(self, repos: IdentityRepositories, data: UserData) -> bool:
        return await repos.users.update_fields(data)

    async def _delete(self, repos: IdentityRepositories, entity_id: str) -> bool:
        return await repos.users.delete_by_id(entity_id)

    async def _invalidate(self, entity_id: str, *, deleted: bool) -> list[str]:
        return await self.invalidator.user_changed(entity_id, deleted=deleted)
