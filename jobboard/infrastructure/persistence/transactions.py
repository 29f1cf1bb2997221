"""Transaction factories binding repositories to one session per unit of work.

Each call opens a fresh session and transaction; nothing is held between
calls, so a retried workflow step always starts from committed state.
"""

from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from jobboard.application.interfaces.repositories import IdentityRepositories
from jobboard.infrastructure.cache.tagged_cache import TaggedCache
from jobboard.infrastructure.persistence.repositories import (
    JobListingRepository,
    OrganizationRepository,
    UserNotificationSettingsRepository,
    UserRepository,
)


def sql_identity_transactions(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[], AbstractAsyncContextManager[IdentityRepositories]]:
    """Return an IdentityTransactionFactory over session_factory."""

    @asynccontextmanager
    async def transaction() -> AsyncIterator[IdentityRepositories]:
        async with session_factory() as session:
            async with session.begin():
                yield IdentityRepositories(
                    users=UserRepository(session),
                    organizations=OrganizationRepository(session),
                    notification_settings=UserNotificationSettingsRepository(session),
                )

    return transaction


def sql_job_listing_transactions(
    session_factory: async_sessionmaker[AsyncSession],
    cache: TaggedCache | None = None,
) -> Callable[[], AbstractAsyncContextManager[JobListingRepository]]:
    """Return a JobListingTransactionFactory over session_factory."""

    @asynccontextmanager
    async def transaction() -> AsyncIterator[JobListingRepository]:
        async with session_factory() as session:
            async with session.begin():
                yield JobListingRepository(session, cache)

    return transaction
