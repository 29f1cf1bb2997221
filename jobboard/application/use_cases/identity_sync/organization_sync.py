"""Organization lifecycle handlers. Organizations have no rows created alongside them."""

from __future__ import annotations

from jobboard.application.dtos.identity import OrganizationData
from jobboard.application.interfaces.repositories import IdentityRepositories
from jobboard.application.use_cases.identity_sync.base import IdentitySyncHandler
from jobboard.domain.enums import IdentityEntity


class OrganizationSyncHandler(IdentitySyncHandler[OrganizationData]):
    entity = IdentityEntity.ORGANIZATION

    def _entity_id(self, data: OrganizationData) -> str:
        return data.id

    async def _exists(self, repos: IdentityRepositories, entity_id: str) -> bool:
        return await repos.organizations.exists(entity_id)

    async def _insert(self, repos: IdentityRepositories, data: OrganizationData) -> bool:
        return await repos.organizations.insert_if_absent(data)

    async def _ensure_dependents(self, repos: IdentityRepositories, entity_id: str) -> None:
        return None

    async def _update(self, repos: IdentityRepositories, data: OrganizationData) -> bool:
        return await repos.organizations.update_fields(data)

    async def _delete(self, repos: IdentityRepositories, entity_id: str) -> bool:
        return await repos.organizations.delete_by_id(entity_id)

    async def _invalidate(self, entity_id: str, *, deleted: bool) -> list[str]:
        return await self.invalidator.organization_changed(entity_id, deleted=deleted)
