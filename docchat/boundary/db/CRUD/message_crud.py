"""
Chat message CRUD operations.

Dependencies: sqlalchemy, docchat.boundary.db.models
System role: Conversation history persistence
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.boundary.db.CRUD.base_crud import BaseCRUD
from docchat.boundary.db.models.message_model import MessageModel


class MessageCRUD(BaseCRUD[MessageModel]):
    """CRUD operations for MessageModel."""

    def __init__(self) -> None:
        super().__init__(MessageModel)

    async def get_by_session(self, session: AsyncSession, session_id: str) -> Sequence[MessageModel]:
        """
        Retrieve a session's messages in insertion order.

        Args:
            session: Async database session
            session_id: Conversation identifier

        Returns:
            Sequence of MessageModels, oldest first
        """
        stmt = (
            select(MessageModel)
            .where(MessageModel.session_id == session_id)
            .order_by(MessageModel.id)
        )
        result = await session.execute(stmt)
        return result.scalars().all()


message_crud = MessageCRUD()
