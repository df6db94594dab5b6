"""
Inbound WhatsApp message CRUD operations.

Dependencies: sqlalchemy, docchat.boundary.db.models
System role: Inbound message persistence
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.boundary.db.CRUD.base_crud import BaseCRUD
from docchat.boundary.db.models.whatsapp_message_model import WhatsAppMessageModel


class WhatsAppMessageCRUD(BaseCRUD[WhatsAppMessageModel]):
    """CRUD operations for WhatsAppMessageModel."""

    def __init__(self) -> None:
        super().__init__(WhatsAppMessageModel)

    async def get_by_message_id(self, session: AsyncSession, message_id: str) -> WhatsAppMessageModel | None:
        stmt = select(WhatsAppMessageModel).where(WhatsAppMessageModel.message_id == message_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_recent(
        self,
        session: AsyncSession,
        from_number: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Sequence[WhatsAppMessageModel]:
        """
        Page through messages, most recently received first.

        Args:
            session: Async database session
            from_number: Only messages from this sender
            limit: Page size
            offset: Rows to skip

        Returns:
            Sequence of messages for the page
        """
        stmt = select(WhatsAppMessageModel).order_by(
            WhatsAppMessageModel.received_at.desc(),
            WhatsAppMessageModel.created_at.desc(),
        )
        if from_number:
            stmt = stmt.where(WhatsAppMessageModel.from_number == from_number)
        result = await session.execute(stmt.offset(offset).limit(limit))
        return result.scalars().all()


whatsapp_message_crud = WhatsAppMessageCRUD()
