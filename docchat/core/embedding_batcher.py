"""
Rate-limited batch embedding.

Chunks are embedded in consecutive batches. Calls inside a batch run
concurrently; batches run strictly one after another with a fixed pause
between them so the provider's per-minute ceiling is never exceeded. The
first failing call aborts the whole job: the rest of its batch is cancelled
and no vectors are returned.

Dependencies: asyncio, docchat.core.interfaces
System role: Second stage of document ingestion
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from datetime import timedelta

from docchat.core.exceptions import EmbeddingFailure, InvalidArgumentError
from docchat.core.interfaces import EmbeddingProvider
from docchat.models.chunk import Chunk, EmbeddedChunk

logger = logging.getLogger(__name__)


def to_delay_seconds(delay: float | timedelta) -> float:
    seconds = delay.total_seconds() if isinstance(delay, timedelta) else float(delay)
    if seconds < 0:
        raise InvalidArgumentError(
            "Inter-batch delay cannot be negative",
            field="inter_batch_delay",
            details={"value": seconds},
        )
    return seconds


class EmbeddingBatcher:
    """Embeds ordered chunks under a fixed batch/delay schedule."""

    def __init__(
        self,
        provider: EmbeddingProvider,
        dimension: int,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """
        Initialize batcher.

        Args:
            provider: Embedding capability
            dimension: Required vector length
            sleep: Awaitable pause, replaced by a fake in tests
        """
        self._provider = provider
        self._dimension = dimension
        self._sleep = sleep

    async def embed_all(
        self,
        chunks: Sequence[Chunk],
        batch_size: int,
        inter_batch_delay: float | timedelta,
    ) -> list[EmbeddedChunk]:
        """
        Embed every chunk, preserving input order.

        Args:
            chunks: Chunks to embed
            batch_size: Maximum concurrent calls per batch
            inter_batch_delay: Pause between batches (seconds or timedelta)

        Returns:
            list[EmbeddedChunk]: One embedded chunk per input chunk

        Raises:
            InvalidArgumentError: When batch_size or the delay is out of range
            EmbeddingFailure: When any call fails or returns the wrong shape
        """
        if isinstance(batch_size, bool) or not isinstance(batch_size, int) or batch_size <= 0:
            raise InvalidArgumentError(
                "Batch size must be a positive integer",
                field="batch_size",
                details={"value": batch_size},
            )
        delay = to_delay_seconds(inter_batch_delay)

        chunks = list(chunks)
        batches = [chunks[i:i + batch_size] for i in range(0, len(chunks), batch_size)]
        embedded: list[EmbeddedChunk] = []

        for index, batch in enumerate(batches):
            if index > 0:
                logger.info(
                    f"{__name__}:embed_all - Waiting {delay}s before batch {index + 1}/{len(batches)}",
                    extra={"delay_seconds": delay, "batch_index": index},
                )
                await self._sleep(delay)

            embedded.extend(await self._embed_batch(batch))
            logger.info(
                f"{__name__}:embed_all - Batch {index + 1}/{len(batches)} embedded",
                extra={
                    "batch_index": index,
                    "batch_len": len(batch),
                    "embedded_total": len(embedded),
                    "chunk_total": len(chunks),
                },
            )

        return embedded

    async def _embed_batch(self, batch: list[Chunk]) -> list[EmbeddedChunk]:
        """Run one batch concurrently; cancel the remainder on the first failure."""
        tasks = [asyncio.create_task(self._embed_one(chunk)) for chunk in batch]
        try:
            await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        finally:
            pending = [task for task in tasks if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.wait(pending)

        failures = [
            task.exception()
            for task in tasks
            if not task.cancelled() and task.exception() is not None
        ]
        if failures:
            first = min(failures, key=lambda exc: getattr(exc, "ordinal", 0))
            if len(failures) > 1:
                logger.warning(
                    f"{__name__}:_embed_batch - {len(failures)} calls failed in one batch",
                    extra={"failed_ordinals": [getattr(f, "ordinal", None) for f in failures]},
                )
            raise first

        return [task.result() for task in tasks]

    async def _embed_one(self, chunk: Chunk) -> EmbeddedChunk:
        try:
            vector = await self._provider.embed(chunk.text)
        except Exception as e:
            logger.error(
                f"{__name__}:_embed_one - Embedding call failed for chunk {chunk.ordinal}",
                extra={"ordinal": chunk.ordinal, "source_id": chunk.source_id, "error_type": type(e).__name__},
            )
            raise EmbeddingFailure(
                chunk.ordinal,
                source_id=chunk.source_id or None,
                details={"reason": str(e)},
            ) from e

        if len(vector) != self._dimension:
            raise EmbeddingFailure(
                chunk.ordinal,
                source_id=chunk.source_id or None,
                details={"expected_dimension": self._dimension, "actual_dimension": len(vector)},
            )

        return EmbeddedChunk(
            source_id=chunk.source_id,
            ordinal=chunk.ordinal,
            text=chunk.text,
            vector=list(vector),
        )
