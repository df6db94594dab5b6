"""
SQL message history adapter.

Dependencies: sqlalchemy, docchat.boundary.db.CRUD
System role: MessageHistory adapter for the core and chat services
"""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.boundary.db.CRUD import message_crud
from docchat.core.exceptions import StoreError
from docchat.core.interfaces import MessageHistory
from docchat.models.conversation import ConversationTurn, TurnRole


class SqlMessageHistory(MessageHistory):
    """Conversation turns stored in the `messages` table."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def load(self, session_id: str) -> list[ConversationTurn]:
        try:
            rows = await message_crud.get_by_session(self.db, session_id)
        except SQLAlchemyError as e:
            raise StoreError("Failed to load history", operation="load_history", details={"reason": str(e)}) from e
        return [ConversationTurn(role=TurnRole(row.role), content=row.content) for row in rows]

    async def append(self, session_id: str, turn: ConversationTurn) -> None:
        try:
            await message_crud.create(self.db, session_id=session_id, role=turn.role.value, content=turn.content)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError("Failed to store message", operation="append_history", details={"reason": str(e)}) from e
