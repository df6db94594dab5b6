"""
Chunk CRUD operations.

Bulk insert for committed ingestion jobs and candidate loading for
similarity search.

Dependencies: sqlalchemy, docchat.boundary.db.models
System role: Embedded chunk persistence
"""

import uuid
from typing import Any, Sequence

from sqlalchemy import func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.boundary.db.CRUD.base_crud import BaseCRUD
from docchat.boundary.db.models.chunk_model import ChunkModel


class ChunkCRUD(BaseCRUD[ChunkModel]):
    """CRUD operations for ChunkModel."""

    def __init__(self) -> None:
        super().__init__(ChunkModel)

    async def bulk_create(self, session: AsyncSession, rows: Sequence[dict[str, Any]]) -> int:
        """
        Insert many chunk rows in one statement.

        Args:
            session: Async database session
            rows: Column dicts (source_id, ordinal, content, embedding)

        Returns:
            int: Number of rows inserted
        """
        if not rows:
            return 0
        payload = [{"id": uuid.uuid4(), **row} for row in rows]
        await session.execute(insert(ChunkModel), payload)
        return len(payload)

    async def get_candidates(
        self,
        session: AsyncSession,
        source_id: uuid.UUID | None = None,
    ) -> Sequence[ChunkModel]:
        """
        Load chunks to score, optionally restricted to one source.

        Rows come back ordered by (source_id, ordinal) so equal scores keep
        document order.
        """
        stmt = select(ChunkModel).order_by(ChunkModel.source_id, ChunkModel.ordinal)
        if source_id is not None:
            stmt = stmt.where(ChunkModel.source_id == source_id)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_by_source(self, session: AsyncSession, source_id: uuid.UUID) -> int:
        stmt = select(func.count()).select_from(ChunkModel).where(ChunkModel.source_id == source_id)
        result = await session.execute(stmt)
        return int(result.scalar_one())


chunk_crud = ChunkCRUD()
