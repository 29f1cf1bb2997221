"""Webhook API schemas."""

from typing import Literal

from pydantic import BaseModel, Field


class IdentityWebhookAckResponse(BaseModel):
    """Response for POST /webhooks/identity (202 Accepted)."""

    status: Literal["processed", "ignored"]
    event_type: str
    entity_id: str | None = None
    state: str | None = Field(default=None, description="Final workflow state")
    action: str | None = Field(default=None, description="What reconciliation did")
    invalidated_tags: list[str] = Field(default_factory=list)
