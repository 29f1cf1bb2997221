"""Service interfaces (ports) for the application layer."""

from typing import Protocol


class ICacheInvalidator(Protocol):
    """Marks cached reads stale after a committed write.

    Implementations never raise for delivery failures; they return the
    tags whose invalidation signal was delivered.
    """

    async def user_changed(self, user_id: str, *, deleted: bool = False) -> list[str]:
        """Invalidate caches of a user and its notification settings."""

    async def organization_changed(
        self, organization_id: str, *, deleted: bool = False
    ) -> list[str]:
        """Invalidate caches of an organization (and its job listings when deleted)."""

    async def job_listing_changed(
        self, job_listing_id: str, organization_id: str
    ) -> list[str]:
        """Invalidate the global, organization-scoped and id tags of a job listing."""
