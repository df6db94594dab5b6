"""
Inbound message service.

Records messages delivered by the WhatsApp webhook and pages through them.
Providers redeliver on timeouts, so a message id that is already stored is
acknowledged again without writing a second row.

Dependencies: sqlalchemy, docchat.boundary.db.CRUD
System role: Inbound message log use cases
"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.boundary.db.CRUD import whatsapp_message_crud
from docchat.boundary.db.models import WhatsAppMessageModel
from docchat.core.exceptions import InvalidArgumentError, StoreError
from docchat.models.whatsapp import InboundMessage, WhatsAppWebhookPayload

logger = logging.getLogger(__name__)


def to_inbound_message(row: WhatsAppMessageModel) -> InboundMessage:
    return InboundMessage(
        id=str(row.id),
        message_id=row.message_id,
        channel=row.channel,
        from_number=row.from_number,
        to_number=row.to_number,
        content_type=row.content_type,
        content_text=row.content_text,
        sender_name=row.sender_name,
        event=row.event,
        received_at=row.received_at,
    )


class InboundMessageService:
    """Inbound WhatsApp message log."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def record(self, payload: WhatsAppWebhookPayload) -> tuple[InboundMessage, bool]:
        """
        Store a webhook message unless its message id is already known.

        Args:
            payload: Webhook body

        Returns:
            tuple[InboundMessage, bool]: The stored message and whether it
                was a duplicate delivery

        Raises:
            InvalidArgumentError: Missing message id or sender
            StoreError: Database failure
        """
        if not payload.message_id or not payload.from_number:
            raise InvalidArgumentError(
                "messageId and from are required",
                field="messageId" if not payload.message_id else "from",
            )

        existing = await whatsapp_message_crud.get_by_message_id(self.db, payload.message_id)
        if existing is not None:
            return self._duplicate(existing)

        values = {
            "message_id": payload.message_id,
            "channel": payload.channel,
            "from_number": payload.from_number,
            "to_number": payload.to_number,
            "content_type": payload.content.content_type,
            "content_text": payload.content.text,
            "sender_name": payload.whatsapp.sender_name,
            "event": payload.event,
        }
        if payload.received_at is not None:
            values["received_at"] = payload.received_at

        try:
            row = await whatsapp_message_crud.create(self.db, **values)
            await self.db.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent delivery of the same message
            await self.db.rollback()
            existing = await whatsapp_message_crud.get_by_message_id(self.db, payload.message_id)
            if existing is None:
                raise StoreError(
                    "Failed to store inbound message",
                    operation="record_inbound_message",
                    details={"reason": str(e)},
                ) from e
            return self._duplicate(existing)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError(
                "Failed to store inbound message",
                operation="record_inbound_message",
                details={"reason": str(e)},
            ) from e

        logger.info(
            f"{__name__}:record - Inbound message stored",
            extra={"message_id": payload.message_id, "from_number": payload.from_number},
        )
        return to_inbound_message(row), False

    async def list_messages(
        self,
        from_number: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[InboundMessage]:
        """
        List messages newest first.

        Raises:
            InvalidArgumentError: limit below 1 or negative offset
        """
        if limit < 1:
            raise InvalidArgumentError("limit must be at least 1", field="limit", details={"value": limit})
        if offset < 0:
            raise InvalidArgumentError("offset must not be negative", field="offset", details={"value": offset})
        rows = await whatsapp_message_crud.list_recent(self.db, from_number=from_number, limit=limit, offset=offset)
        return [to_inbound_message(row) for row in rows]

    def _duplicate(self, row: WhatsAppMessageModel) -> tuple[InboundMessage, bool]:
        logger.info(
            f"{__name__}:record - Duplicate delivery ignored",
            extra={"message_id": row.message_id},
        )
        return to_inbound_message(row), True
