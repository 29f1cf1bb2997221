"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the identity sync workflow and job listing
service. Everything is built from infrastructure implementations here;
routes depend only on these dependencies, not on infra directly.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request
from sqlalchemy.exc import InterfaceError, OperationalError

from jobboard.application.interfaces.repositories import (
    IdentityTransactionFactory,
    JobListingTransactionFactory,
)
from jobboard.application.interfaces.services import ICacheInvalidator
from jobboard.application.services.job_listing_service import JobListingService
from jobboard.application.use_cases.identity_sync import (
    IdentityEventDispatcher,
    OrganizationSyncHandler,
    StepRunner,
    UserSyncHandler,
)
from jobboard.core.config import get_settings
from jobboard.infrastructure.cache.invalidator import TagCacheInvalidator
from jobboard.infrastructure.cache.tag_store import TagStore
from jobboard.infrastructure.cache.tagged_cache import TaggedCache
from jobboard.infrastructure.persistence.database import get_session_factory
from jobboard.infrastructure.persistence.transactions import (
    sql_identity_transactions,
    sql_job_listing_transactions,
)
from jobboard.infrastructure.security.webhook_signature import verify_webhook_signature
from jobboard.schemas.identity_events import parse_identity_event

# Errors worth another attempt at a workflow step (connection-level failures).
SQL_RETRY_ON: tuple[type[BaseException], ...] = (
    OperationalError,
    InterfaceError,
    ConnectionError,
    TimeoutError,
)


# ---- Cache ----


def get_tag_store(request: Request) -> TagStore | None:
    """Tag store created at startup (None outside the app lifespan)."""
    return getattr(request.app.state, "tag_store", None)


def get_cache_invalidator(
    store: Annotated[TagStore | None, Depends(get_tag_store)],
) -> ICacheInvalidator:
    return TagCacheInvalidator(store)


def get_tagged_cache(
    store: Annotated[TagStore | None, Depends(get_tag_store)],
) -> TaggedCache | None:
    if store is None:
        return None
    settings = get_settings()
    return TaggedCache(
        store, settings.cache_profile_ttls, settings.cache_default_profile
    )


# ---- Identity sync ----


async def verify_identity_webhook(request: Request) -> bytes:
    """Return the raw body once its signature checks out.

    Raises 503 if no signing secret is configured and
    WebhookSignatureException (401) on a bad or stale signature.
    """
    settings = get_settings()
    if not settings.identity_webhook_secret:
        raise HTTPException(
            status_code=503,
            detail="Identity webhook is not configured (IDENTITY_WEBHOOK_SECRET is not set).",
        )
    body = await request.body()
    verify_webhook_signature(
        body,
        request.headers,
        settings.identity_webhook_secret.get_secret_value(),
        tolerance_seconds=settings.webhook_tolerance_seconds,
    )
    return body


def get_identity_transactions() -> IdentityTransactionFactory:
    return sql_identity_transactions(get_session_factory())


def get_step_runner() -> StepRunner:
    settings = get_settings()
    return StepRunner(
        max_attempts=settings.sync_step_max_attempts,
        backoff_seconds=settings.sync_step_backoff_seconds,
        retry_on=SQL_RETRY_ON,
    )


def get_identity_dispatcher(
    transactions: Annotated[IdentityTransactionFactory, Depends(get_identity_transactions)],
    invalidator: Annotated[ICacheInvalidator, Depends(get_cache_invalidator)],
    steps: Annotated[StepRunner, Depends(get_step_runner)],
) -> IdentityEventDispatcher:
    policy = get_settings().sync_update_missing_policy
    return IdentityEventDispatcher(
        parse_event=parse_identity_event,
        users=UserSyncHandler(transactions, invalidator, steps, policy),
        organizations=OrganizationSyncHandler(transactions, invalidator, steps, policy),
    )


# ---- Job listings ----


def get_job_listing_transactions(
    cache: Annotated[TaggedCache | None, Depends(get_tagged_cache)],
) -> JobListingTransactionFactory:
    return sql_job_listing_transactions(get_session_factory(), cache)


def get_job_listing_service(
    transactions: Annotated[
        JobListingTransactionFactory, Depends(get_job_listing_transactions)
    ],
    invalidator: Annotated[ICacheInvalidator, Depends(get_cache_invalidator)],
) -> JobListingService:
    return JobListingService(transactions, invalidator)
