"""Identity-provider webhook signatures (svix scheme).

The provider signs "{svix-id}.{svix-timestamp}.{body}" with HMAC-SHA256
keyed by the base64 part of a "whsec_" secret, and sends one or more
space-separated "v1,<base64 digest>" entries in svix-signature. Any
matching entry is accepted; timestamps outside the tolerance window are
rejected to bound replays.
"""

import base64
import hashlib
import hmac
import time
from collections.abc import Mapping

from jobboard.core.constants import (
    WEBHOOK_ID_HEADER,
    WEBHOOK_SECRET_PREFIX,
    WEBHOOK_SIGNATURE_HEADER,
    WEBHOOK_SIGNATURE_VERSION,
    WEBHOOK_TIMESTAMP_HEADER,
)
from jobboard.domain.exceptions import WebhookSignatureException


def _secret_key(secret: str) -> bytes:
    if secret.startswith(WEBHOOK_SECRET_PREFIX):
        return base64.b64decode(secret[len(WEBHOOK_SECRET_PREFIX) :])
    return secret.encode()


def sign_webhook_payload(
    body: bytes, message_id: str, timestamp: int | str, secret: str
) -> str:
    """Return the "v1,<digest>" signature for body (used by tests and local tooling)."""
    signed = f"{message_id}.{timestamp}.".encode() + body
    digest = hmac.new(_secret_key(secret), signed, hashlib.sha256).digest()
    return f"{WEBHOOK_SIGNATURE_VERSION},{base64.b64encode(digest).decode()}"


def verify_webhook_signature(
    body: bytes,
    headers: Mapping[str, str],
    secret: str,
    *,
    tolerance_seconds: int = 300,
    now: float | None = None,
) -> None:
    """Raise WebhookSignatureException unless headers carry a valid signature for body.

    Args:
        body: Raw request body, exactly as received.
        headers: Request headers (case-insensitive mapping, e.g. Starlette Headers).
        secret: Signing secret, "whsec_<base64>" or raw.
        tolerance_seconds: Maximum clock skew between sender and receiver.
        now: Current epoch seconds (defaults to time.time()).
    """
    message_id = headers.get(WEBHOOK_ID_HEADER)
    timestamp = headers.get(WEBHOOK_TIMESTAMP_HEADER)
    signatures = headers.get(WEBHOOK_SIGNATURE_HEADER)
    if not message_id or not timestamp or not signatures:
        raise WebhookSignatureException("Missing webhook signature headers")
    try:
        sent_at = int(timestamp)
    except ValueError:
        raise WebhookSignatureException("Invalid webhook timestamp") from None
    current = time.time() if now is None else now
    if abs(current - sent_at) > tolerance_seconds:
        raise WebhookSignatureException("Webhook timestamp outside tolerance")

    # Sign the header exactly as sent; "0170..." and "170..." are different messages.
    expected = sign_webhook_payload(body, message_id, timestamp, secret)
    for candidate in signatures.split():
        if hmac.compare_digest(candidate, expected):
            return
    raise WebhookSignatureException()
