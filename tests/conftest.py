"""Pytest configuration and fixtures for jobboard.

HTTP tests run the app in-process (httpx ASGITransport) with the
identity workflow wired to in-memory fakes. DB-dependent fixtures use
jobboard.infrastructure.persistence.database and skip without Postgres.
"""

from __future__ import annotations

import copy
from collections.abc import AsyncIterator, Callable, Iterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.application.dtos.identity import OrganizationData, UserData
from jobboard.application.interfaces.repositories import IdentityRepositories
from jobboard.application.use_cases.identity_sync import (
    IdentityEventDispatcher,
    OrganizationSyncHandler,
    StepRunner,
    UserSyncHandler,
)
from jobboard.core.config import get_settings
from jobboard.domain.enums import UpdateMissingPolicy
from jobboard.infrastructure.cache.invalidator import TagCacheInvalidator
from jobboard.infrastructure.cache.memory_tag_store import InMemoryTagStore
from jobboard.infrastructure.persistence import database
from jobboard.schemas.identity_events import parse_identity_event

TEST_WEBHOOK_SECRET = "whsec_dGVzdC13ZWJob29rLXNlY3JldC0xMjM0NTY3OA=="


# ---- In-memory identity storage ----


@dataclass
class _Tables:
    users: dict[str, UserData] = field(default_factory=dict)
    organizations: dict[str, OrganizationData] = field(default_factory=dict)
    notification_settings: set[str] = field(default_factory=set)
    writes: int = 0


class FakeUserRepository:
    def __init__(self, db: FakeIdentityDatabase, tables: _Tables) -> None:
        self.db = db
        self.tables = tables

    async def exists(self, user_id: str) -> bool:
        if self.db.hide_existing:
            return False
        return user_id in self.tables.users

    async def insert_if_absent(self, data: UserData) -> bool:
        if data.id in self.tables.users:
            return False
        self.tables.users[data.id] = data
        self.tables.writes += 1
        return True

    async def update_fields(self, data: UserData) -> bool:
        if data.id not in self.tables.users:
            return False
        current = self.tables.users[data.id]
        self.tables.users[data.id] = UserData(
            id=data.id,
            name=data.name,
            email=data.email,
            image_url=data.image_url,
            created_at=current.created_at,
            updated_at=data.updated_at,
        )
        self.tables.writes += 1
        return True

    async def delete_by_id(self, user_id: str) -> bool:
        if self.tables.users.pop(user_id, None) is None:
            return False
        self.tables.notification_settings.discard(user_id)
        self.tables.writes += 1
        return True


class FakeOrganizationRepository:
    def __init__(self, db: FakeIdentityDatabase, tables: _Tables) -> None:
        self.db = db
        self.tables = tables

    async def exists(self, organization_id: str) -> bool:
        if self.db.hide_existing:
            return False
        return organization_id in self.tables.organizations

    async def insert_if_absent(self, data: OrganizationData) -> bool:
        if data.id in self.tables.organizations:
            return False
        self.tables.organizations[data.id] = data
        self.tables.writes += 1
        return True

    async def update_fields(self, data: OrganizationData) -> bool:
        if data.id not in self.tables.organizations:
            return False
        self.tables.organizations[data.id] = data
        self.tables.writes += 1
        return True

    async def delete_by_id(self, organization_id: str) -> bool:
        if self.tables.organizations.pop(organization_id, None) is None:
            return False
        self.tables.writes += 1
        return True


class FakeNotificationSettingsRepository:
    def __init__(self, tables: _Tables) -> None:
        self.tables = tables

    async def insert_if_absent(self, user_id: str) -> bool:
        if user_id in self.tables.notification_settings:
            return False
        self.tables.notification_settings.add(user_id)
        self.tables.writes += 1
        return True


class FakeIdentityDatabase:
    """Transactional in-memory stand-in for the identity tables.

    Each transaction works on a copy that replaces the committed state
    only when the block exits cleanly.

    Attributes:
        fail_next: Number of upcoming transactions that fail with ConnectionError.
        hide_existing: Make exists() report False (simulates losing the
            check-then-insert race to a concurrent delivery).
    """

    def __init__(self) -> None:
        self.committed = _Tables()
        self.fail_next = 0
        self.hide_existing = False
        self.transactions_opened = 0

    @property
    def users(self) -> dict[str, UserData]:
        return self.committed.users

    @property
    def organizations(self) -> dict[str, OrganizationData]:
        return self.committed.organizations

    @property
    def notification_settings(self) -> set[str]:
        return self.committed.notification_settings

    @property
    def writes(self) -> int:
        return self.committed.writes

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[IdentityRepositories]:
        self.transactions_opened += 1
        if self.fail_next:
            self.fail_next -= 1
            raise ConnectionError("database unreachable")
        staged = copy.deepcopy(self.committed)
        yield IdentityRepositories(
            users=FakeUserRepository(self, staged),
            organizations=FakeOrganizationRepository(self, staged),
            notification_settings=FakeNotificationSettingsRepository(staged),
        )
        self.committed = staged


class RecordingTagStore(InMemoryTagStore):
    """InMemoryTagStore that records every mark_stale call as (tag, profile)."""

    def __init__(self) -> None:
        super().__init__()
        self.stale_calls: list[tuple[str, str | None]] = []

    async def mark_stale(self, tag: str, profile: str | None = None) -> None:
        await super().mark_stale(tag, profile)
        self.stale_calls.append((tag, profile))

    @property
    def stale_tags(self) -> set[str]:
        return {tag for tag, _ in self.stale_calls}

    def clear(self) -> None:
        self.stale_calls.clear()


async def _no_sleep(_: float) -> None:
    return None


def build_dispatcher(
    db: FakeIdentityDatabase,
    store: InMemoryTagStore | None,
    policy: UpdateMissingPolicy = UpdateMissingPolicy.UPSERT,
    max_attempts: int = 3,
) -> IdentityEventDispatcher:
    invalidator = TagCacheInvalidator(store)
    steps = StepRunner(max_attempts=max_attempts, backoff_seconds=0, sleep=_no_sleep)
    return IdentityEventDispatcher(
        parse_event=parse_identity_event,
        users=UserSyncHandler(db.transaction, invalidator, steps, policy),
        organizations=OrganizationSyncHandler(db.transaction, invalidator, steps, policy),
    )


@pytest.fixture
def identity_db() -> FakeIdentityDatabase:
    return FakeIdentityDatabase()


@pytest.fixture
def tag_store() -> RecordingTagStore:
    return RecordingTagStore()


@pytest.fixture
def dispatcher(
    identity_db: FakeIdentityDatabase, tag_store: InMemoryTagStore
) -> IdentityEventDispatcher:
    """Dispatcher over in-memory storage and tag store (upsert policy, no backoff)."""
    return build_dispatcher(identity_db, tag_store)


@pytest.fixture
def make_dispatcher(
    identity_db: FakeIdentityDatabase, tag_store: InMemoryTagStore
) -> Callable[..., IdentityEventDispatcher]:
    """Build a dispatcher over the shared fakes with a chosen policy or attempt limit."""

    def make(
        policy: UpdateMissingPolicy = UpdateMissingPolicy.UPSERT, max_attempts: int = 3
    ) -> IdentityEventDispatcher:
        return build_dispatcher(identity_db, tag_store, policy, max_attempts)

    return make


def user_event(
    event_type: str = "user.created",
    user_id: str = "user_1",
    first_name: str | None = "Ada",
    last_name: str | None = "Lovelace",
    email: str = "ada@example.com",
    primary: bool = True,
    created_at: int = 1_700_000_000_000,
    updated_at: int = 1_700_000_100_000,
) -> dict:
    """Provider-shaped user webhook body."""
    return {
        "type": event_type,
        "object": "event",
        "data": {
            "id": user_id,
            "first_name": first_name,
            "last_name": last_name,
            "image_url": "https://img.example.com/ada.png",
            "email_addresses": [
                {"id": "idn_other", "email_address": "other@example.com"},
                {"id": "idn_primary", "email_address": email},
            ],
            "primary_email_address_id": "idn_primary" if primary else "idn_missing",
            "created_at": created_at,
            "updated_at": updated_at,
        },
    }


def organization_event(
    event_type: str = "organization.created",
    organization_id: str = "org_1",
    name: str = "Acme",
) -> dict:
    return {
        "type": event_type,
        "data": {
            "id": organization_id,
            "name": name,
            "image_url": None,
            "created_at": 1_700_000_000_000,
            "updated_at": 1_700_000_000_000,
        },
    }


def deleted_event(event_type: str = "user.deleted", entity_id: str | None = "user_1") -> dict:
    data: dict = {"deleted": True, "object": event_type.split(".")[0]}
    if entity_id is not None:
        data["id"] = entity_id
    return {"type": event_type, "data": data}


@pytest.fixture
def make_user_event() -> Callable[..., dict]:
    return user_event


@pytest.fixture
def make_organization_event() -> Callable[..., dict]:
    return organization_event


@pytest.fixture
def make_deleted_event() -> Callable[..., dict]:
    return deleted_event


# ---- HTTP ----


@pytest.fixture
def webhook_secret(monkeypatch: pytest.MonkeyPatch) -> Iterator[str]:
    """Configure IDENTITY_WEBHOOK_SECRET for the duration of a test."""
    monkeypatch.setenv("IDENTITY_WEBHOOK_SECRET", TEST_WEBHOOK_SECRET)
    get_settings.cache_clear()
    yield TEST_WEBHOOK_SECRET
    monkeypatch.delenv("IDENTITY_WEBHOOK_SECRET", raising=False)
    get_settings.cache_clear()


@pytest.fixture
async def client(dispatcher: IdentityEventDispatcher) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against a fresh app whose webhook uses the in-memory dispatcher."""
    from jobboard.api.v1.dependencies import get_identity_dispatcher
    from jobboard.core.limiter import limiter
    from jobboard.main import create_app

    app = create_app()
    app.dependency_overrides[get_identity_dispatcher] = lambda: dispatcher
    limiter.reset()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# ---- Database ----


@pytest.fixture
async def db_session() -> AsyncIterator[AsyncSession]:
    """Database session for repository/integration tests. Rolls back after test.

    Requires DATABASE_URL (or DB_* parts) and a migrated schema. Skips when
    Postgres is not configured; run without DB via: pytest -m 'not requires_db'.
    """
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        pytest.skip(
            "Postgres not configured: set DATABASE_URL, then run: alembic upgrade head"
        )
    async with database.AsyncSessionLocal() as session:
        yield session
        await session.rollback()
