"""Identity-provider webhook endpoint.

Signed deliveries are validated and reconciled synchronously. 2xx means
the provider should not redeliver: processed events and event types we
do not handle. 400 is a permanent rejection; 503 asks for redelivery.
"""

import json
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from jobboard.api.v1.dependencies import get_identity_dispatcher, verify_identity_webhook
from jobboard.application.use_cases.identity_sync import IdentityEventDispatcher
from jobboard.core.limiter import limit_writes
from jobboard.domain.exceptions import ValidationException
from jobboard.schemas.webhooks import IdentityWebhookAckResponse

router = APIRouter()


@router.post(
    "/identity",
    response_model=IdentityWebhookAckResponse,
    status_code=202,
)
@limit_writes
async def identity_webhook(
    request: Request,
    body: Annotated[bytes, Depends(verify_identity_webhook)],
    dispatcher: Annotated[IdentityEventDispatcher, Depends(get_identity_dispatcher)],
) -> IdentityWebhookAckResponse:
    """Receive user.* and organization.* lifecycle events.

    Callers must send svix-id, svix-timestamp and svix-signature headers
    signed with IDENTITY_WEBHOOK_SECRET.
    """
    try:
        payload = json.loads(body)
    except ValueError:
        raise ValidationException("Webhook body is not valid JSON") from None

    result = await dispatcher.dispatch(payload)
    if result is None:
        return IdentityWebhookAckResponse(
            status="ignored", event_type=str(payload.get("type"))
        )
    return IdentityWebhookAckResponse(
        status="processed",
        event_type=result.event_type,
        entity_id=result.entity_id,
        state=result.state.value,
        action=result.action.value,
        invalidated_tags=list(result.invalidated_tags),
    )
