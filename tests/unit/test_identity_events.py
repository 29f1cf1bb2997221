"""Parsing raw identity webhooks into IdentityEvent."""

from datetime import UTC, datetime

import pytest

from jobboard.application.dtos.identity import DeletedIdentity, OrganizationData, UserData
from jobboard.domain.enums import IdentityEventType
from jobboard.domain.exceptions import ValidationException
from jobboard.schemas.identity_events import parse_identity_event


def test_user_created_provider_shape(make_user_event) -> None:
    event = parse_identity_event(make_user_event("user.created", "user_1"))

    assert event.type is IdentityEventType.USER_CREATED
    assert event.entity_id == "user_1"
    assert isinstance(event.data, UserData)
    assert event.data.name == "Ada Lovelace"
    assert event.data.email == "ada@example.com"
    assert event.data.image_url == "https://img.example.com/ada.png"
    assert event.data.created_at == datetime.fromtimestamp(1_700_000_000, tz=UTC)
    assert event.data.updated_at == datetime.fromtimestamp(1_700_000_100, tz=UTC)


def test_primary_email_selected_by_id(make_user_event) -> None:
    payload = make_user_event(email="primary@example.com")
    payload["data"]["email_addresses"].reverse()
    event = parse_identity_event(payload)
    assert event.data.email == "primary@example.com"


@pytest.mark.parametrize(
    ("first", "last", "expected"),
    [
        ("Ada", None, "Ada"),
        (None, "Lovelace", "Lovelace"),
        (None, None, "Unknown User"),
        ("  ", "", "Unknown User"),
    ],
)
def test_display_name(make_user_event, first, last, expected) -> None:
    event = parse_identity_event(make_user_event(first_name=first, last_name=last))
    assert event.data.name == expected


def test_missing_primary_email_names_field(make_user_event) -> None:
    with pytest.raises(ValidationException) as exc_info:
        parse_identity_event(make_user_event(primary=False))
    assert exc_info.value.details["field"] == "data.primary_email_address_id"


def test_missing_user_id_names_field(make_user_event) -> None:
    payload = make_user_event()
    del payload["data"]["id"]
    with pytest.raises(ValidationException) as exc_info:
        parse_identity_event(payload)
    assert exc_info.value.details["field"] == "data.id"
    assert exc_info.value.error_code == "VALIDATION_ERROR"


@pytest.mark.parametrize(
    "created_at",
    [10**400, float("inf"), float("nan"), 10**30, "9" * 40, "2025-13-45T00:00:00Z"],
)
def test_unusable_timestamp_is_field_error(make_user_event, created_at) -> None:
    with pytest.raises(ValidationException) as exc_info:
        parse_identity_event(make_user_event(created_at=created_at))
    assert exc_info.value.details["field"] == "data.created_at"
    assert exc_info.value.retriable is False


@pytest.mark.parametrize("created_at", [10**400, float("inf"), 10**30])
def test_unusable_timestamp_in_compact_form(created_at) -> None:
    payload = {
        "type": "user.created",
        "data": {"id": "u1", "email": "a@b.com", "name": "A B", "createdAt": created_at},
    }
    with pytest.raises(ValidationException) as exc_info:
        parse_identity_event(payload)
    assert exc_info.value.details["field"] == "data.created_at"


def test_iso_timestamps_accepted() -> None:
    event = parse_identity_event(
        {
            "type": "organization.updated",
            "data": {
                "id": "o1",
                "name": "Acme",
                "created_at": "2025-01-15T12:00:00Z",
                "updated_at": "2025-01-16T12:00:00+00:00",
            },
        }
    )
    assert isinstance(event.data, OrganizationData)
    assert event.data.created_at == datetime(2025, 1, 15, 12, tzinfo=UTC)
    assert event.data.updated_at == datetime(2025, 1, 16, 12, tzinfo=UTC)


def test_organization_requires_name(make_organization_event) -> None:
    payload = make_organization_event()
    payload["data"]["name"] = ""
    with pytest.raises(ValidationException) as exc_info:
        parse_identity_event(payload)
    assert exc_info.value.details["field"] == "data.name"


def test_deleted_event(make_deleted_event) -> None:
    event = parse_identity_event(make_deleted_event("organization.deleted", "o1"))
    assert event.type is IdentityEventType.ORGANIZATION_DELETED
    assert event.data == DeletedIdentity(id="o1")


def test_deleted_without_id(make_deleted_event) -> None:
    with pytest.raises(ValidationException) as exc_info:
        parse_identity_event(make_deleted_event("user.deleted", None))
    assert exc_info.value.details["field"] == "data.id"


def test_unknown_type_returns_none() -> None:
    assert parse_identity_event({"type": "email.created", "data": {}}) is None


@pytest.mark.parametrize("payload", [{"data": {"id": "u1"}}, {"type": ""}, {"type": 7}])
def test_missing_type(payload) -> None:
    with pytest.raises(ValidationException) as exc_info:
        parse_identity_event(payload)
    assert exc_info.value.details["field"] == "type"


def test_non_object_payload() -> None:
    with pytest.raises(ValidationException):
        parse_identity_event(["user.created"])
