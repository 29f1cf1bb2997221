"""Outcome of processing one identity event."""

from dataclasses import dataclass, field
from enum import Enum


class SyncState(str, Enum):
    """Per-event processing state. REJECTED is terminal failure; DONE terminal success."""

    RECEIVED = "received"
    VALIDATED = "validated"
    RECONCILED = "reconciled"
    CACHE_INVALIDATED = "cache_invalidated"
    DONE = "done"
    REJECTED = "rejected"


class SyncAction(str, Enum):
    """What reconciliation did to local storage."""

    CREATED = "created"
    UPDATED = "updated"
    UPSERTED = "upserted"
    DELETED = "deleted"
    NOOP = "noop"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class SyncResult:
    event_type: str
    entity_id: str
    state: SyncState
    action: SyncAction
    invalidated_tags: tuple[str, ...] = field(default_factory=tuple)
