"""
Ingestion coordinator.

Runs chunk -> embed -> persist for one document. The parent source record is
created first so chunks have something to attach to; if embedding or the
bulk insert fails (or the call is cancelled) the source is deleted again so
no half-searchable document is left behind.

Dependencies: docchat.core.chunker, docchat.core.embedding_batcher, docchat.core.interfaces
System role: Orchestrator of the ingestion pipeline
"""

import logging
from collections.abc import Iterable
from datetime import timedelta

from docchat.core.chunker import chunk_text
from docchat.core.embedding_batcher import EmbeddingBatcher, to_delay_seconds
from docchat.core.exceptions import InvalidArgumentError
from docchat.core.interfaces import SourceRepository, VectorStore
from docchat.models.ingestion import IngestionJob, IngestionResult, IngestionStatus, SourceCreate
from docchat.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


def _require_positive(value: int, field: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidArgumentError(
            f"{field} must be a positive integer",
            field=field,
            details={"value": value},
        )


class IngestionCoordinator:
    """Saga-style ingestion with compensating delete of the parent source."""

    def __init__(
        self,
        sources: SourceRepository,
        vector_store: VectorStore,
        batcher: EmbeddingBatcher,
    ) -> None:
        self._sources = sources
        self._vector_store = vector_store
        self._batcher = batcher

    async def ingest(
        self,
        meta: SourceCreate,
        raw_text: str,
        chunk_size: int,
        batch_size: int,
        inter_batch_delay: float | timedelta,
        mapping_keys: Iterable[str] = (),
    ) -> IngestionResult:
        """
        Ingest one document as a new source.

        Args:
            meta: Parent source metadata
            raw_text: Full document text
            chunk_size: Maximum chunk length in characters
            batch_size: Embedding calls per batch
            inter_batch_delay: Pause between embedding batches
            mapping_keys: Phone numbers to link to the new source once committed

        Returns:
            IngestionResult: Source id, committed chunk count, final status

        Raises:
            InvalidArgumentError: Before any side effect, for bad arguments
            EmbeddingFailure: When embedding fails (source rolled back)
            StoreError: When creating the source or persisting chunks fails
        """
        _require_positive(chunk_size, "chunk_size")
        _require_positive(batch_size, "batch_size")
        to_delay_seconds(inter_batch_delay)
        if raw_text is None:
            raise InvalidArgumentError("Document text is required", field="raw_text")
        keys = [key for key in dict.fromkeys(mapping_keys) if key]

        source_id = await self._sources.create(meta)
        job = IngestionJob(source_id=source_id)
        logger.info(
            f"{__name__}:ingest - Source created",
            extra={"source_id": source_id, "source_name": meta.name, "text_len": len(raw_text)},
        )

        chunks = chunk_text(raw_text, chunk_size, source_id=source_id)
        if not chunks:
            job.status = IngestionStatus.COMMITTED
            logger.warning(
                f"{__name__}:ingest - No usable chunks; source kept without chunks",
                extra={"source_id": source_id},
            )
            mapped = await self._link_mappings(source_id, keys)
            return IngestionResult(source_id=source_id, chunk_count=0, status=job.status, mapped_count=mapped)

        try:
            job.status = IngestionStatus.PARTIALLY_EMBEDDED
            job.chunks = await self._batcher.embed_all(chunks, batch_size, inter_batch_delay)
            await self._vector_store.insert_chunks(job.chunks)
        except BaseException as e:
            await self._roll_back(job, e)
            raise

        job.status = IngestionStatus.COMMITTED
        logger.info(
            f"{__name__}:ingest - Ingestion committed",
            extra={"source_id": source_id, "chunk_count": len(job.chunks)},
        )
        mapped = await self._link_mappings(source_id, keys)
        return IngestionResult(
            source_id=source_id,
            chunk_count=len(job.chunks),
            status=job.status,
            mapped_count=mapped,
        )

    async def _roll_back(self, job: IngestionJob, cause: BaseException) -> None:
        """Best-effort delete of the parent source; a cleanup failure is logged only."""
        logger.warning(
            f"{__name__}:_roll_back - Ingestion failed, deleting source",
            extra={
                "source_id": job.source_id,
                "status": job.status.value,
                "error_type": type(cause).__name__,
            },
        )
        try:
            await self._sources.delete(job.source_id)
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:_roll_back - Cleanup failed; source may remain",
                e,
                source_id=job.source_id,
            )
        job.status = IngestionStatus.ROLLED_BACK
        job.chunks = []

    async def _link_mappings(self, source_id: str, keys: list[str]) -> int:
        """Map each key to the source; failures are logged and skipped."""
        mapped = 0
        for key in keys:
            try:
                await self._sources.add_mapping(key, source_id)
                mapped += 1
            except Exception:
                logger.exception(
                    f"{__name__}:_link_mappings - Failed to map phone number",
                    extra={"source_id": source_id, "phone_number": key},
                )
        return mapped
