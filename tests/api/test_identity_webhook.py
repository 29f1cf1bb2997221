"""Identity webhook endpoint: signature checks, acknowledgements and error mapping."""

import json
import time

import pytest
from httpx import AsyncClient

from jobboard.core.config import get_settings
from jobboard.infrastructure.security.webhook_signature import sign_webhook_payload

WEBHOOK_URL = "/api/v1/webhooks/identity"


def _signed_headers(body: bytes, secret: str, message_id: str = "msg_1") -> dict[str, str]:
    timestamp = int(time.time())
    return {
        "content-type": "application/json",
        "svix-id": message_id,
        "svix-timestamp": str(timestamp),
        "svix-signature": sign_webhook_payload(body, message_id, timestamp, secret),
    }


async def _post(client: AsyncClient, payload: dict, secret: str):
    body = json.dumps(payload).encode()
    return await client.post(WEBHOOK_URL, content=body, headers=_signed_headers(body, secret))


async def test_returns_503_when_secret_not_configured(
    client: AsyncClient, monkeypatch: pytest.MonkeyPatch, make_user_event
) -> None:
    monkeypatch.delenv("IDENTITY_WEBHOOK_SECRET", raising=False)
    get_settings.cache_clear()
    try:
        response = await client.post(WEBHOOK_URL, json=make_user_event("user.created"))
    finally:
        get_settings.cache_clear()
    assert response.status_code == 503
    assert "not configured" in response.json()["message"].lower()


async def test_missing_signature_returns_401(
    client: AsyncClient, webhook_secret: str, make_user_event
) -> None:
    response = await client.post(WEBHOOK_URL, json=make_user_event("user.created"))
    assert response.status_code == 401
    assert response.json()["error"] == "AUTHENTICATION_ERROR"


async def test_wrong_secret_returns_401(
    client: AsyncClient, webhook_secret: str, make_user_event, identity_db
) -> None:
    response = await _post(client, make_user_event("user.created"), "whsec_b3RoZXItc2VjcmV0")
    assert response.status_code == 401
    assert "signature" in response.json()["message"].lower()
    assert identity_db.users == {}


async def test_tampered_body_returns_401(
    client: AsyncClient, webhook_secret: str, make_user_event
) -> None:
    body = json.dumps(make_user_event("user.created")).encode()
    headers = _signed_headers(body, webhook_secret)
    tampered = body.replace(b"Ada", b"Eve")
    response = await client.post(WEBHOOK_URL, content=tampered, headers=headers)
    assert response.status_code == 401


async def test_user_created_is_processed(
    client: AsyncClient, webhook_secret: str, make_user_event, identity_db, tag_store
) -> None:
    response = await _post(client, make_user_event("user.created", user_id="u1"), webhook_secret)

    assert response.status_code == 202
    body = response.json()
    assert body["status"] == "processed"
    assert body["event_type"] == "user.created"
    assert body["entity_id"] == "u1"
    assert body["state"] == "done"
    assert body["action"] == "created"
    assert "id:users-u1" in body["invalidated_tags"]
    assert identity_db.users["u1"].email == "ada@example.com"
    assert "u1" in identity_db.notification_settings
    assert "id:users-u1" in tag_store.stale_tags


async def test_redelivery_is_acknowledged(
    client: AsyncClient, webhook_secret: str, make_user_event, identity_db
) -> None:
    payload = make_user_event("user.created", user_id="u1")
    first = await _post(client, payload, webhook_secret)
    second = await _post(client, payload, webhook_secret)
    assert first.status_code == second.status_code == 202
    assert second.json()["action"] == "noop"
    assert len(identity_db.users) == 1


async def test_unhandled_event_type_is_ignored(
    client: AsyncClient, webhook_secret: str, identity_db
) -> None:
    response = await _post(client, {"type": "session.created", "data": {"id": "s1"}}, webhook_secret)
    assert response.status_code == 202
    assert response.json() == {
        "status": "ignored",
        "event_type": "session.created",
        "entity_id": None,
        "state": None,
        "action": None,
        "invalidated_tags": [],
    }
    assert identity_db.writes == 0


async def test_missing_primary_email_returns_400(
    client: AsyncClient, webhook_secret: str, make_user_event, identity_db
) -> None:
    response = await _post(client, make_user_event("user.created", primary=False), webhook_secret)
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "VALIDATION_ERROR"
    assert body["retriable"] is False
    assert identity_db.users == {}


async def test_invalid_json_returns_400(client: AsyncClient, webhook_secret: str) -> None:
    body = b"{not json"
    response = await client.post(
        WEBHOOK_URL, content=body, headers=_signed_headers(body, webhook_secret)
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Webhook body is not valid JSON"


async def test_database_outage_returns_503(
    client: AsyncClient, webhook_secret: str, make_user_event, identity_db
) -> None:
    identity_db.fail_next = 10
    response = await _post(client, make_user_event("user.created"), webhook_secret)
    assert response.status_code == 503
    body = response.json()
    assert body["error"] == "SERVICE_UNAVAILABLE"
    assert body["retriable"] is True


@pytest.mark.parametrize("created_at", [float("inf"), 10**400, 10**30])
async def test_unusable_timestamp_returns_400(
    client: AsyncClient, webhook_secret: str, make_user_event, identity_db, created_at
) -> None:
    response = await _post(
        client, make_user_event("user.created", created_at=created_at), webhook_secret
    )
    assert response.status_code == 400
    body = response.json()
    assert body["details"]["field"] == "data.created_at"
    assert body["retriable"] is False
    assert identity_db.users == {}
