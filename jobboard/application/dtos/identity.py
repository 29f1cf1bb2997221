"""Validated, canonical identity records produced from webhook payloads."""

from dataclasses import dataclass
from datetime import datetime

from jobboard.domain.enums import IdentityEventType


@dataclass(frozen=True)
class UserData:
    """Mutable fields of a user as reported by the identity provider."""

    id: str
    name: str
    email: str
    image_url: str | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class OrganizationData:
    """Mutable fields of an organization as reported by the identity provider."""

    id: str
    name: str
    image_url: str | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class DeletedIdentity:
    """Payload of a deletion event: only the id survives."""

    id: str


@dataclass(frozen=True)
class IdentityEvent:
    """One validated lifecycle event. data type follows event type (user/organization/deleted)."""

    type: IdentityEventType
    data: UserData | OrganizationData | DeletedIdentity

    @property
    def entity_id(self) -> str:
        return self.data.id
