"""Security: inbound webhook signature verification."""

from jobboard.infrastructure.security.webhook_signature import (
    sign_webhook_payload,
    verify_webhook_signature,
)

__all__ = ["sign_webhook_payload", "verify_webhook_signature"]
