"""Shared reconcile-then-invalidate flow for identity entities."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from jobboard.application.dtos.sync import SyncAction, SyncResult, SyncState
from jobboard.application.interfaces.repositories import (
    IdentityRepositories,
    IdentityTransactionFactory,
)
from jobboard.application.interfaces.services import ICacheInvalidator
from jobboard.application.use_cases.identity_sync.steps import StepRunner
from jobboard.domain.enums import IdentityEntity, UpdateMissingPolicy
from jobboard.shared.telemetry.logging import get_logger

DataT = TypeVar("DataT")

logger = get_logger(__name__)


class IdentitySyncHandler(ABC, Generic[DataT]):
    """Created/updated/deleted handlers for one identity entity.

    Reconciliation runs in one transaction per step attempt; cache
    invalidation runs after that transaction has committed and never
    fails the event. Every handler is safe to re-run with the same input.
    """

    entity: IdentityEntity

    def __init__(
        self,
        transactions: IdentityTransactionFactory,
        invalidator: ICacheInvalidator,
        steps: StepRunner,
        update_missing_policy: UpdateMissingPolicy = UpdateMissingPolicy.UPSERT,
    ) -> None:
        self.transactions = transactions
        self.invalidator = invalidator
        self.steps = steps
        self.update_missing_policy = update_missing_policy

    @abstractmethod
    def _entity_id(self, data: DataT) -> str: ...

    @abstractmethod
    async def _exists(self, repos: IdentityRepositories, entity_id: str) -> bool: ...

    @abstractmethod
    async def _insert(self, repos: IdentityRepositories, data: DataT) -> bool:
        """Insert the row and its dependents; False if the id already existed."""

    @abstractmethod
    async def _ensure_dependents(self, repos: IdentityRepositories, entity_id: str) -> None: ...

    @abstractmethod
    async def _update(self, repos: IdentityRepositories, data: DataT) -> bool: ...

    @abstractmethod
    async def _delete(self, repos: IdentityRepositories, entity_id: str) -> bool: ...

    @abstractmethod
    async def _invalidate(self, entity_id: str, *, deleted: bool) -> list[str]: ...

    def _event_type(self, phase: str) -> str:
        return f"{self.entity.value}.{phase}"

    async def created(self, data: DataT) -> SyncResult:
        entity_id = self._entity_id(data)

        async def reconcile() -> SyncAction:
            async with self.transactions() as repos:
                # Fast path only. The primary-key constraint behind _insert is
                # what keeps concurrent duplicate deliveries to a single row.
                if not await self._exists(repos, entity_id) and await self._insert(
                    repos, data
                ):
                    return SyncAction.CREATED
                await self._ensure_dependents(repos, entity_id)
                return SyncAction.NOOP

        action = await self.steps.run(f"create-{self.entity.value}", reconcile)
        return await self._finish(self._event_type("created"), entity_id, action)

    async def updated(self, data: DataT) -> SyncResult:
        entity_id = self._entity_id(data)

        async def reconcile() -> SyncAction:
            async with self.transactions() as repos:
                if await self._update(repos, data):
                    return SyncAction.UPDATED
                if self.update_missing_policy is UpdateMissingPolicy.REJECT:
                    logger.warning(
                        "%s.updated for unknown id %s skipped (update_missing_policy=reject)",
                        self.entity.value,
                        entity_id,
                    )
                    return SyncAction.SKIPPED
                if await self._insert(repos, data):
                    return SyncAction.UPSERTED
                # A concurrent create committed between our update and insert.
                await self._update(repos, data)
                await self._ensure_dependents(repos, entity_id)
                return SyncAction.UPDATED

        action = await self.steps.run(f"update-{self.entity.value}", reconcile)
        return await self._finish(self._event_type("updated"), entity_id, action)

    async def deleted(self, entity_id: str) -> SyncResult:
        async def reconcile() -> SyncAction:
            async with self.transactions() as repos:
                if await self._delete(repos, entity_id):
                    return SyncAction.DELETED
                return SyncAction.NOOP

        action = await self.steps.run(f"delete-{self.entity.value}", reconcile)
        return await self._finish(
            self._event_type("deleted"), entity_id, action, deleted=True
        )

    async def _finish(
        self,
        event_type: str,
        entity_id: str,
        action: SyncAction,
        *,
        deleted: bool = False,
    ) -> SyncResult:
        logger.info(
            "%s %s: %s (%s)", event_type, entity_id, SyncState.RECONCILED.value, action.value
        )
        tags: list[str] = []
        if action is not SyncAction.SKIPPED:
            tags = await self._invalidate(entity_id, deleted=deleted)
            logger.debug(
                "%s %s: %s %s",
                event_type,
                entity_id,
                SyncState.CACHE_INVALIDATED.value,
                tags,
            )
        return SyncResult(
            event_type=event_type,
            entity_id=entity_id,
            state=SyncState.DONE,
            action=action,
            invalidated_tags=tuple(tags),
        )
