"""
SQL-backed vector store.

Chunks and their vectors live in the `rag_chunks` table; similarity search
loads the candidate vectors and scores them with numpy cosine similarity.
Scores are clipped to [0, 1].

Every search reads all candidate rows into memory (one source's chunks, or
the whole table when no source is given), so cost grows linearly with the
stored corpus. That suits per-document corpora of a few thousand chunks; a
dedicated ANN index can replace it behind the same `VectorStore` interface.

One AsyncSession must never run two statements at once, so calls on a
store are serialized even when the retriever fans out across sources.

Dependencies: numpy, sqlalchemy, docchat.boundary.db
System role: Vector persistence and similarity search
"""

import asyncio
import logging
import uuid
from collections.abc import Sequence

import numpy as np
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.boundary.db.CRUD import chunk_crud
from docchat.core.exceptions import StoreError
from docchat.core.interfaces import VectorStore
from docchat.models.chunk import EmbeddedChunk
from docchat.models.retrieval import VectorSearchHit

logger = logging.getLogger(__name__)


def cosine_similarities(matrix: np.ndarray, query: np.ndarray) -> np.ndarray:
    """
    Cosine similarity of each row of `matrix` with `query`, clipped to [0, 1].

    Zero-norm rows (or a zero query) score 0.
    """
    norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
    dots = matrix @ query
    scores = np.divide(dots, norms, out=np.zeros_like(dots), where=norms > 0)
    return np.clip(scores, 0.0, 1.0)


class SqlVectorStore(VectorStore):
    """VectorStore over the request's AsyncSession, one statement at a time."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._lock = asyncio.Lock()

    async def similarity_search(
        self,
        vector: Sequence[float],
        source_id: str | None,
        k: int,
    ) -> list[VectorSearchHit]:
        """
        Return up to k chunks ranked by cosine similarity.

        Equal scores keep (source, ordinal) order.

        Raises:
            StoreError: On database errors or a vector of the wrong length
        """
        source_uuid = None
        if source_id is not None:
            try:
                source_uuid = uuid.UUID(source_id)
            except ValueError:
                # Not an id this store ever issued
                return []

        try:
            async with self._lock:
                rows = await chunk_crud.get_candidates(self._session, source_id=source_uuid)
        except SQLAlchemyError as e:
            raise StoreError(
                "Similarity search failed",
                operation="similarity_search",
                details={"source_id": source_id, "reason": str(e)},
            ) from e

        if not rows:
            return []

        query = np.asarray(vector, dtype=np.float64)
        try:
            matrix = np.asarray([row.embedding for row in rows], dtype=np.float64)
            scores = cosine_similarities(matrix, query)
        except ValueError as e:
            raise StoreError(
                "Stored vectors do not match the query dimension",
                operation="similarity_search",
                details={"query_dimension": len(query), "reason": str(e)},
            ) from e

        top = np.argsort(-scores, kind="stable")[:k]
        return [
            VectorSearchHit(
                id=str(rows[i].id),
                source_id=str(rows[i].source_id),
                ordinal=rows[i].ordinal,
                text=rows[i].content,
                similarity=float(scores[i]),
            )
            for i in top
        ]

    async def insert_chunks(self, rows: Sequence[EmbeddedChunk]) -> None:
        """
        Insert all rows in one transaction, or none of them.

        Raises:
            StoreError: When the insert or commit fails (transaction rolled back)
        """
        payload = [
            {
                "source_id": uuid.UUID(row.source_id),
                "ordinal": row.ordinal,
                "content": row.text,
                "embedding": list(row.vector),
            }
            for row in rows
        ]
        async with self._lock:
            try:
                inserted = await chunk_crud.bulk_create(self._session, payload)
                await self._session.commit()
            except SQLAlchemyError as e:
                await self._session.rollback()
                raise StoreError(
                    "Failed to insert chunks",
                    operation="insert_chunks",
                    details={"row_count": len(payload), "reason": str(e)},
                ) from e

        logger.info(
            f"{__name__}:insert_chunks - Chunks committed",
            extra={"row_count": inserted},
        )
