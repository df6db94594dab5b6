"""
Vector retriever with multi-source merge.

A single source costs one top-k similarity search. Several sources each get
their own top-k search (issued concurrently; a store sharing one database
session serializes them itself). The hits are merged, ranked by
similarity and cut back to k. A source with many strong chunks can be
under-represented next to a source with few; that is the accepted cost of
not having a combined index.

Dependencies: asyncio, docchat.core.interfaces
System role: Query-time chunk retrieval
"""

import asyncio
import logging
from collections.abc import Iterable, Sequence

from docchat.core.exceptions import InvalidArgumentError, RetrievalFailure
from docchat.core.interfaces import VectorStore
from docchat.models.retrieval import RetrievalMatch, VectorSearchHit

logger = logging.getLogger(__name__)


def _clip(similarity: float) -> float:
    return min(1.0, max(0.0, float(similarity)))


def _to_match(hit: VectorSearchHit) -> RetrievalMatch:
    return RetrievalMatch(
        chunk_id=hit.id,
        source_id=hit.source_id,
        text=hit.text,
        similarity=_clip(hit.similarity),
        ordinal=hit.ordinal,
    )


class VectorRetriever:
    """Top-k retrieval over one, many or all sources."""

    def __init__(self, store: VectorStore) -> None:
        self._store = store

    async def retrieve(
        self,
        query_vector: Sequence[float],
        source_ids: Iterable[str],
        k: int,
    ) -> list[RetrievalMatch]:
        """
        Retrieve the k most similar chunks across the given sources.

        Ties on similarity are broken by the source's position in
        `source_ids`, then by chunk ordinal.

        Args:
            query_vector: Embedded question
            source_ids: Sources to search; duplicates are collapsed
            k: Maximum number of matches

        Returns:
            list[RetrievalMatch]: Matches by descending similarity

        Raises:
            InvalidArgumentError: When k is not positive
            RetrievalFailure: When any similarity search fails
        """
        self._validate_k(k)
        sources = list(dict.fromkeys(source_ids))
        if not sources:
            return []

        if len(sources) == 1:
            hits = await self._search(query_vector, sources[0], k)
            return [_to_match(hit) for hit in hits[:k]]

        logger.info(
            f"{__name__}:retrieve - Fanning out to {len(sources)} sources",
            extra={"source_count": len(sources), "k": k},
        )
        per_source = await self._gather_searches(query_vector, sources, k)

        ranked = [
            (-_clip(hit.similarity), position, hit.ordinal, hit)
            for position, hits in enumerate(per_source)
            for hit in hits
        ]
        ranked.sort(key=lambda item: item[:3])
        return [_to_match(item[3]) for item in ranked[:k]]

    async def retrieve_all(self, query_vector: Sequence[float], k: int) -> list[RetrievalMatch]:
        """
        Retrieve the k most similar chunks across every stored source.

        Raises:
            InvalidArgumentError: When k is not positive
            RetrievalFailure: When the similarity search fails
        """
        self._validate_k(k)
        hits = await self._search(query_vector, None, k)
        return [_to_match(hit) for hit in hits[:k]]

    async def _gather_searches(
        self,
        query_vector: Sequence[float],
        sources: list[str],
        k: int,
    ) -> list[list[VectorSearchHit]]:
        tasks = [asyncio.create_task(self._search(query_vector, source, k)) for source in sources]
        try:
            return list(await asyncio.gather(*tasks))
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()

    async def _search(
        self,
        query_vector: Sequence[float],
        source_id: str | None,
        k: int,
    ) -> list[VectorSearchHit]:
        try:
            return await self._store.similarity_search(query_vector, source_id, k)
        except Exception as e:
            logger.error(
                f"{__name__}:_search - Similarity search failed",
                extra={"source_id": source_id, "error_type": type(e).__name__},
            )
            raise RetrievalFailure(
                "Similarity search failed",
                source_id=source_id,
                details={"reason": str(e)},
            ) from e

    @staticmethod
    def _validate_k(k: int) -> None:
        if isinstance(k, bool) or not isinstance(k, int) or k <= 0:
            raise InvalidArgumentError("k must be a positive integer", field="k", details={"value": k})
