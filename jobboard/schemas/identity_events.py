"""Identity-provider webhook payloads.

Raw webhook JSON is validated here into a tagged union discriminated by
``type`` and converted to the strict IdentityEvent DTO before any
workflow logic runs. Nothing partially validated crosses this boundary.
"""

from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, TypeAdapter, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from jobboard.application.dtos.identity import (
    DeletedIdentity,
    IdentityEvent,
    OrganizationData,
    UserData,
)
from jobboard.core.constants import UNKNOWN_USER_NAME
from jobboard.domain.enums import IdentityEntity, IdentityEventType, LifecyclePhase
from jobboard.domain.exceptions import ValidationException
from jobboard.shared.utils.datetime import ensure_utc, from_epoch_millis

# Synthetic email id for payloads that carry a bare "email" instead of a list.
_INLINE_EMAIL_ID = "inline"


def _coerce_timestamp(v: Any) -> Any:
    """Epoch milliseconds (provider format), ISO strings and datetimes to aware UTC."""
    if isinstance(v, bool):
        return v
    try:
        if isinstance(v, int | float):
            return from_epoch_millis(int(v))
        if isinstance(v, str):
            if v.isdigit():
                return from_epoch_millis(int(v))
            return ensure_utc(datetime.fromisoformat(v.replace("Z", "+00:00")))
    except (OverflowError, OSError, ValueError):
        # Surfaces as a field error (400) instead of escaping pydantic.
        raise ValueError("timestamp is invalid or out of range") from None
    if isinstance(v, datetime):
        return ensure_utc(v)
    return v


class EmailAddressPayload(BaseModel):
    id: str = Field(..., min_length=1)
    email_address: str = Field(..., min_length=1)


class UserPayload(BaseModel):
    """User object as sent by the identity provider.

    Also accepts the compact form ``{id, email, name, imageUrl, createdAt, updatedAt}``.
    """

    id: str = Field(..., min_length=1)
    first_name: str | None = None
    last_name: str | None = None
    image_url: str | None = None
    email_addresses: list[EmailAddressPayload] = Field(default_factory=list)
    primary_email_address_id: str | None = None
    created_at: datetime
    updated_at: datetime | None = None

    @model_validator(mode="before")
    @classmethod
    def accept_compact_form(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for camel, snake in (
            ("imageUrl", "image_url"),
            ("createdAt", "created_at"),
            ("updatedAt", "updated_at"),
        ):
            if camel in data and snake not in data:
                data[snake] = data.pop(camel)
        if "email" in data and "email_addresses" not in data:
            data["email_addresses"] = [
                {"id": _INLINE_EMAIL_ID, "email_address": data.pop("email")}
            ]
            data.setdefault("primary_email_address_id", _INLINE_EMAIL_ID)
        if "name" in data and "first_name" not in data and "last_name" not in data:
            data["first_name"] = data.pop("name")
        return data

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def parse_timestamp(cls, v: Any) -> Any:
        return _coerce_timestamp(v)

    @property
    def display_name(self) -> str:
        name = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return name or UNKNOWN_USER_NAME

    @property
    def primary_email(self) -> str | None:
        for address in self.email_addresses:
            if address.id == self.primary_email_address_id:
                return address.email_address
        return None

    def to_user_data(self) -> UserData:
        """Canonical UserData.

        Raises:
            ValidationException: If no email address matches primary_email_address_id.
        """
        email = self.primary_email
        if email is None:
            raise ValidationException(
                "No primary email address found for user",
                field="data.primary_email_address_id",
            )
        return UserData(
            id=self.id,
            name=self.display_name,
            email=email,
            image_url=self.image_url,
            created_at=self.created_at,
            updated_at=self.updated_at or self.created_at,
        )


class OrganizationPayload(BaseModel):
    """Organization object as sent by the identity provider."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    image_url: str | None = None
    created_at: datetime
    updated_at: datetime | None = None

    @model_validator(mode="before")
    @classmethod
    def accept_camel_case(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for camel, snake in (
            ("imageUrl", "image_url"),
            ("createdAt", "created_at"),
            ("updatedAt", "updated_at"),
        ):
            if camel in data and snake not in data:
                data[snake] = data.pop(camel)
        return data

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def parse_timestamp(cls, v: Any) -> Any:
        return _coerce_timestamp(v)

    def to_organization_data(self) -> OrganizationData:
        return OrganizationData(
            id=self.id,
            name=self.name,
            image_url=self.image_url,
            created_at=self.created_at,
            updated_at=self.updated_at or self.created_at,
        )


class DeletedPayload(BaseModel):
    """Deletion stub: ``{id, deleted, object}``."""

    id: str = Field(..., min_length=1)
    deleted: bool = True
    object: str | None = None


class UserEventPayload(BaseModel):
    type: Literal["user.created", "user.updated"]
    data: UserPayload
    timestamp: int | None = None


class OrganizationEventPayload(BaseModel):
    type: Literal["organization.created", "organization.updated"]
    data: OrganizationPayload
    timestamp: int | None = None


class DeletedEventPayload(BaseModel):
    type: Literal["user.deleted", "organization.deleted"]
    data: DeletedPayload
    timestamp: int | None = None


IdentityEventPayload = Annotated[
    UserEventPayload | OrganizationEventPayload | DeletedEventPayload,
    Field(discriminator="type"),
]

_event_adapter: TypeAdapter[
    UserEventPayload | OrganizationEventPayload | DeletedEventPayload
] = TypeAdapter(IdentityEventPayload)


def _field_errors(exc: PydanticValidationError, event_type: str) -> list[dict[str, Any]]:
    """Flatten pydantic errors to dotted field paths (discriminator tag stripped)."""
    errors = []
    for err in exc.errors():
        loc = list(err["loc"])
        if loc and loc[0] == event_type:
            loc = loc[1:]
        errors.append(
            {"field": ".".join(str(part) for part in loc), "message": err["msg"]}
        )
    return errors


def parse_identity_event(payload: Any) -> IdentityEvent | None:
    """Validate a raw webhook body into an IdentityEvent.

    Returns:
        The event, or None if ``type`` is well-formed but not a handled event type.

    Raises:
        ValidationException: On a malformed envelope or event data; ``details.field``
            names the first offending field (e.g. ``data.primary_email_address_id``).
    """
    if not isinstance(payload, dict):
        raise ValidationException("Webhook payload must be a JSON object")
    event_type = payload.get("type")
    if not isinstance(event_type, str) or not event_type:
        raise ValidationException("Webhook payload has no event type", field="type")
    if event_type not in IdentityEventType.values():
        return None

    try:
        parsed = _event_adapter.validate_python(payload)
    except PydanticValidationError as exc:
        errors = _field_errors(exc, event_type)
        raise ValidationException(
            f"Invalid {event_type} payload",
            field=errors[0]["field"] if errors else None,
            errors=errors,
        ) from exc

    kind = IdentityEventType(event_type)
    if kind.phase is LifecyclePhase.DELETED:
        return IdentityEvent(type=kind, data=DeletedIdentity(id=parsed.data.id))
    if kind.entity is IdentityEntity.USER:
        return IdentityEvent(type=kind, data=parsed.data.to_user_data())
    return IdentityEvent(type=kind, data=parsed.data.to_organization_data())
