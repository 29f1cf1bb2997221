"""Routes validated identity events to the handler for (entity, lifecycle phase)."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from jobboard.application.dtos.identity import (
    DeletedIdentity,
    IdentityEvent,
    OrganizationData,
    UserData,
)
from jobboard.application.dtos.sync import SyncResult, SyncState
from jobboard.application.use_cases.identity_sync.organization_sync import (
    OrganizationSyncHandler,
)
from jobboard.application.use_cases.identity_sync.user_sync import UserSyncHandler
from jobboard.domain.enums import IdentityEventType
from jobboard.domain.exceptions import ValidationException
from jobboard.shared.telemetry.logging import get_logger
from jobboard.shared.telemetry.tracing import add_span_attributes, traced

logger = get_logger(__name__)

EventParser = Callable[[Any], IdentityEvent | None]


class IdentityEventDispatcher:
    """Entry point of the synchronization workflow for one raw event.

    received -> validated -> reconciled -> cache_invalidated -> done,
    or received -> rejected when the payload fails validation.
    """

    def __init__(
        self,
        parse_event: EventParser,
        users: UserSyncHandler,
        organizations: OrganizationSyncHandler,
    ) -> None:
        self.parse_event = parse_event
        self.users = users
        self.organizations = organizations
        self._handlers: dict[
            IdentityEventType, Callable[[Any], Awaitable[SyncResult]]
        ] = {
            IdentityEventType.USER_CREATED: users.created,
            IdentityEventType.USER_UPDATED: users.updated,
            IdentityEventType.USER_DELETED: users.deleted,
            IdentityEventType.ORGANIZATION_CREATED: organizations.created,
            IdentityEventType.ORGANIZATION_UPDATED: organizations.updated,
            IdentityEventType.ORGANIZATION_DELETED: organizations.deleted,
        }

    @traced("identity_sync.dispatch")
    async def dispatch(self, payload: Any) -> SyncResult | None:
        """Validate and process one raw webhook payload.

        Returns:
            The SyncResult, or None if the event type is not handled.

        Raises:
            ValidationException: Payload rejected (permanent; do not redeliver).
            TransientInfrastructureException: Storage unreachable after retries.
        """
        event_type = payload.get("type") if isinstance(payload, dict) else None
        logger.debug("Identity event %s: %s", event_type, SyncState.RECEIVED.value)
        try:
            event = self.parse_event(payload)
        except ValidationException as exc:
            logger.warning(
                "Identity event %s: %s: %s %s",
                event_type,
                SyncState.REJECTED.value,
                exc.message,
                exc.details,
            )
            raise
        if event is None:
            logger.info("Ignoring unhandled identity event type %s", event_type)
            return None

        add_span_attributes(event_type=event.type.value, entity_id=event.entity_id)
        logger.debug(
            "Identity event %s %s: %s",
            event.type.value,
            event.entity_id,
            SyncState.VALIDATED.value,
        )
        return await self.handle(event)

    async def handle(self, event: IdentityEvent) -> SyncResult:
        """Process an already validated event."""
        handler = self._handlers[event.type]
        if isinstance(event.data, DeletedIdentity):
            result = await handler(event.data.id)
        elif isinstance(event.data, UserData | OrganizationData):
            result = await handler(event.data)
        else:
            raise ValidationException(
                f"Unexpected data for {event.type.value}", field="data"
            )
        logger.info(
            "Identity event %s %s: %s (%s)",
            result.event_type,
            result.entity_id,
            result.state.value,
            result.action.value,
        )
        return result
