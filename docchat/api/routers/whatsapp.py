"""
WhatsApp API endpoints.

Routes:
- POST /whatsapp/auto-respond - Generate a reply to an inbound message
- GET /whatsapp/messages - Page through stored inbound messages
- POST /webhook/whatsapp - Store a message delivered by the provider webhook

Dependencies: docchat.api.deps, docchat.application.services
System role: Inbound messaging HTTP API
"""

from fastapi import APIRouter, Depends, Query

from docchat.api.deps import get_auto_responder, get_inbound_message_service
from docchat.application.services import AutoResponder, InboundMessageService
from docchat.models.chat import AutoRespondRequest, AutoRespondResponse
from docchat.models.whatsapp import InboundMessageListResponse, WebhookAck, WhatsAppWebhookPayload

router = APIRouter(prefix="/whatsapp", tags=["whatsapp"])
webhook_router = APIRouter(prefix="/webhook", tags=["whatsapp"])


@router.post("/auto-respond", response_model=AutoRespondResponse)
async def auto_respond(
    request: AutoRespondRequest,
    responder: AutoResponder = Depends(get_auto_responder),
) -> AutoRespondResponse:
    """
    Answer an inbound message from the documents mapped to `to_number`.

    Raises:
        HTTPException(404): No documents mapped to the number (`no_documents=true`)
    """
    reply = await responder.respond(request.from_number, request.to_number, request.message)
    return AutoRespondResponse(response=reply)


@router.get("/messages", response_model=InboundMessageListResponse)
async def list_messages(
    from_number: str | None = Query(default=None, alias="from"),
    limit: int = 50,
    offset: int = 0,
    service: InboundMessageService = Depends(get_inbound_message_service),
) -> InboundMessageListResponse:
    """List stored inbound messages, most recently received first."""
    messages = await service.list_messages(from_number=from_number, limit=limit, offset=offset)
    return InboundMessageListResponse(messages=messages, count=len(messages))


@webhook_router.post("/whatsapp", response_model=WebhookAck)
async def receive_webhook(
    payload: WhatsAppWebhookPayload,
    service: InboundMessageService = Depends(get_inbound_message_service),
) -> WebhookAck:
    """
    Store one inbound message; a redelivered message id is acknowledged as a duplicate.

    Raises:
        HTTPException(400): Missing messageId or from
    """
    message, duplicate = await service.record(payload)
    return WebhookAck(duplicate=duplicate, id=message.id)
