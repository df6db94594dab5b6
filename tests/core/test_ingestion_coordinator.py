"""
Test suite for IngestionCoordinator.

Verifies the chunk -> embed -> persist saga, including the compensating
delete of the parent source on failure and cancellation.

System role: Verification of ingestion orchestration
"""

import asyncio

import pytest

from docchat.core.embedding_batcher import EmbeddingBatcher
from docchat.core.exceptions import EmbeddingFailure, InvalidArgumentError, StoreError
from docchat.core.ingestion_coordinator import IngestionCoordinator
from docchat.models.ingestion import IngestionStatus, SourceCreate

TEXT = "The warranty covers parts and labour for two years. " * 5


@pytest.fixture
def coordinator(fake_sources, fake_vector_store, fake_embedder, sleep_recorder) -> IngestionCoordinator:
    batcher = EmbeddingBatcher(fake_embedder, dimension=3, sleep=sleep_recorder)
    return IngestionCoordinator(fake_sources, fake_vector_store, batcher)


async def _ingest(coordinator: IngestionCoordinator, text: str = TEXT, **overrides):
    arguments = {"chunk_size": 40, "batch_size": 2, "inter_batch_delay": 0}
    arguments.update(overrides)
    return await coordinator.ingest(SourceCreate(name="warranty.pdf"), text, **arguments)


class TestIngestSuccess:
    """Test suite for committed ingestion."""

    async def test_commits_all_chunks(self, coordinator, fake_sources, fake_vector_store) -> None:
        # Act
        result = await _ingest(coordinator)

        # Assert
        assert result.status == IngestionStatus.COMMITTED
        assert result.source_id == "source-1"
        assert result.chunk_count == len(fake_vector_store.inserted) > 0
        assert [row.ordinal for row in fake_vector_store.inserted] == list(range(result.chunk_count))
        assert {row.source_id for row in fake_vector_store.inserted} == {"source-1"}
        assert fake_sources.deleted == []

    async def test_links_mapping_keys(self, coordinator, fake_sources) -> None:
        result = await _ingest(coordinator, mapping_keys=["15550001", "15550002", "15550001", ""])

        assert result.mapped_count == 2
        assert fake_sources.mappings == {"15550001": ["source-1"], "15550002": ["source-1"]}

    async def test_mapping_failure_does_not_fail_ingestion(self, coordinator, fake_sources) -> None:
        fake_sources.fail_mapping_keys = {"15550001"}

        result = await _ingest(coordinator, mapping_keys=["15550001", "15550002"])

        assert result.status == IngestionStatus.COMMITTED
        assert result.mapped_count == 1
        assert fake_sources.deleted == []

    async def test_blank_text_commits_source_without_chunks(
        self, coordinator, fake_sources, fake_embedder, fake_vector_store
    ) -> None:
        result = await _ingest(coordinator, text="   \n  ")

        assert result.status == IngestionStatus.COMMITTED
        assert result.chunk_count == 0
        assert fake_embedder.calls == []
        assert fake_vector_store.inserted == []
        assert fake_sources.live_sources == ["source-1"]


class TestIngestRollback:
    """Test suite for the compensating delete."""

    async def test_embedding_failure_deletes_source(
        self, coordinator, fake_sources, fake_embedder, fake_vector_store
    ) -> None:
        # Arrange
        fake_embedder.fail_on_calls = {4}

        # Act
        with pytest.raises(EmbeddingFailure) as exc_info:
            await _ingest(coordinator)

        # Assert
        assert exc_info.value.ordinal == 3
        assert fake_sources.deleted == ["source-1"]
        assert fake_vector_store.inserted == []

    async def test_insert_failure_deletes_source(self, coordinator, fake_sources, fake_vector_store) -> None:
        fake_vector_store.fail_insert = True

        with pytest.raises(StoreError):
            await _ingest(coordinator)

        assert fake_sources.live_sources == []

    async def test_cleanup_failure_keeps_original_error(self, coordinator, fake_sources, fake_embedder) -> None:
        """Test a failing delete is logged and the embedding error still propagates."""
        fake_embedder.fail_on_calls = {1}
        fake_sources.fail_delete = True

        with pytest.raises(EmbeddingFailure):
            await _ingest(coordinator)

    async def test_cancellation_deletes_source(self, coordinator, fake_sources, fake_embedder) -> None:
        # Arrange
        fake_embedder.default_delay = 5.0
        task = asyncio.create_task(_ingest(coordinator))
        await asyncio.sleep(0.05)

        # Act
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        # Assert
        assert fake_sources.deleted == ["source-1"]
        assert fake_embedder.in_flight == 0


class TestIngestValidation:
    """Test suite for argument checks that run before any side effect."""

    @pytest.mark.parametrize(
        "overrides",
        [
            {"chunk_size": 0},
            {"batch_size": 0},
            {"inter_batch_delay": -1},
        ],
    )
    async def test_invalid_arguments_have_no_side_effects(
        self, coordinator, fake_sources, fake_embedder, overrides
    ) -> None:
        with pytest.raises(InvalidArgumentError):
            await _ingest(coordinator, **overrides)

        assert fake_sources.created == []
        assert fake_embedder.calls == []
