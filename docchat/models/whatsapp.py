"""
WhatsApp webhook and message log schemas.

The webhook payload keeps the provider's camelCase field names as aliases;
everything past the boundary uses snake_case.

Dependencies: pydantic
System role: Inbound messaging API contracts
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class WebhookContent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content_type: str = Field(default="text", alias="contentType")
    text: str | None = None


class WebhookSender(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sender_name: str | None = Field(default=None, alias="senderName")


class WhatsAppWebhookPayload(BaseModel):
    """Message delivered by the messaging provider's webhook."""

    model_config = ConfigDict(populate_by_name=True)

    message_id: str = Field(default="", alias="messageId", description="Provider message id, used for dedup")
    channel: str = "whatsapp"
    from_number: str = Field(default="", alias="from")
    to_number: str | None = Field(default=None, alias="to")
    received_at: datetime | None = Field(default=None, alias="receivedAt")
    content: WebhookContent = Field(default_factory=WebhookContent)
    whatsapp: WebhookSender = Field(default_factory=WebhookSender)
    event: str | None = None


class InboundMessage(BaseModel):
    """Stored inbound message."""

    id: str
    message_id: str
    channel: str
    from_number: str
    to_number: str | None = None
    content_type: str
    content_text: str | None = None
    sender_name: str | None = None
    event: str | None = None
    received_at: datetime


class WebhookAck(BaseModel):
    success: bool = True
    duplicate: bool = Field(default=False, description="The message id was already stored")
    id: str


class InboundMessageListResponse(BaseModel):
    success: bool = True
    messages: list[InboundMessage]
    count: int
