"""Organization repository (identity-provider projection)."""

from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.application.dtos.identity import OrganizationData
from jobboard.infrastructure.persistence.models import Organization
from jobboard.infrastructure.persistence.repositories.base import BaseRepository


class OrganizationRepository(BaseRepository[Organization]):
    """Implements IOrganizationRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Organization)

    async def insert_if_absent(self, data: OrganizationData) -> bool:
        return await self._insert_ignoring_conflict(
            {
                "id": data.id,
                "name": data.name,
                "image_url": data.image_url,
                "created_at": data.created_at,
                "updated_at": data.updated_at,
            }
        )

    async def update_fields(self, data: OrganizationData) -> bool:
        return await self._update_by_id(
            data.id,
            {
                "name": data.name,
                "image_url": data.image_url,
                "updated_at": data.updated_at,
            },
        )

    async def delete_by_id(self, organization_id: str) -> bool:
        return await self._delete_by_id(organization_id)
