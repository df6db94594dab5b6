"""
Test suite for SqlVectorStore on SQLite.

System role: Verification of vector persistence and similarity ranking
"""

import asyncio
import uuid

import numpy as np
import pytest

from docchat.boundary.db.CRUD import chunk_crud, source_crud
from docchat.boundary.vdb.sql_vector_store import SqlVectorStore, cosine_similarities
from docchat.core.exceptions import StoreError
from docchat.core.retriever import VectorRetriever
from docchat.models.chunk import EmbeddedChunk


async def _source(session, name: str) -> str:
    source = await source_crud.create(session, name=name)
    await session.commit()
    return str(source.id)


def _row(source_id: str, ordinal: int, vector: list[float]) -> EmbeddedChunk:
    return EmbeddedChunk(source_id=source_id, ordinal=ordinal, text=f"chunk {ordinal}", vector=vector)


class TestCosineSimilarities:
    def test_scores_and_clipping(self) -> None:
        matrix = np.array([[1.0, 0.0], [0.0, 1.0], [-1.0, 0.0], [0.0, 0.0]])

        scores = cosine_similarities(matrix, np.array([1.0, 0.0]))

        assert scores.tolist() == [1.0, 0.0, 0.0, 0.0]

    def test_zero_query_scores_zero(self) -> None:
        scores = cosine_similarities(np.array([[1.0, 2.0]]), np.array([0.0, 0.0]))

        assert scores.tolist() == [0.0]


class TestSqlVectorStore:
    """Test suite for SqlVectorStore."""

    async def test_ranks_by_similarity(self, test_async_db) -> None:
        # Arrange
        source_id = await _source(test_async_db, "a.pdf")
        store = SqlVectorStore(test_async_db)
        await store.insert_chunks(
            [
                _row(source_id, 0, [0.0, 1.0, 0.0]),
                _row(source_id, 1, [1.0, 0.0, 0.0]),
                _row(source_id, 2, [1.0, 1.0, 0.0]),
            ]
        )

        # Act
        hits = await store.similarity_search([1.0, 0.0, 0.0], source_id, k=2)

        # Assert
        assert [h.ordinal for h in hits] == [1, 2]
        assert hits[0].similarity == pytest.approx(1.0)
        assert hits[1].similarity == pytest.approx(0.7071, abs=1e-4)
        assert hits[0].text == "chunk 1"
        assert hits[0].source_id == source_id

    async def test_filters_by_source(self, test_async_db) -> None:
        first = await _source(test_async_db, "a.pdf")
        second = await _source(test_async_db, "b.pdf")
        store = SqlVectorStore(test_async_db)
        await store.insert_chunks([_row(first, 0, [1.0, 0.0, 0.0])])
        await store.insert_chunks([_row(second, 0, [1.0, 0.0, 0.0])])

        only_second = await store.similarity_search([1.0, 0.0, 0.0], second, k=5)
        everything = await store.similarity_search([1.0, 0.0, 0.0], None, k=5)

        assert {h.source_id for h in only_second} == {second}
        assert {h.source_id for h in everything} == {first, second}

    async def test_equal_scores_keep_ordinal_order(self, test_async_db) -> None:
        source_id = await _source(test_async_db, "a.pdf")
        store = SqlVectorStore(test_async_db)
        await store.insert_chunks([_row(source_id, i, [1.0, 0.0, 0.0]) for i in range(4)])

        hits = await store.similarity_search([1.0, 0.0, 0.0], source_id, k=4)

        assert [h.ordinal for h in hits] == [0, 1, 2, 3]

    async def test_empty_table_returns_nothing(self, test_async_db) -> None:
        store = SqlVectorStore(test_async_db)

        assert await store.similarity_search([1.0, 0.0, 0.0], None, k=5) == []
        assert await store.similarity_search([1.0, 0.0, 0.0], str(uuid.uuid4()), k=5) == []

    async def test_unknown_id_format_returns_nothing(self, test_async_db) -> None:
        assert await SqlVectorStore(test_async_db).similarity_search([1.0], "not-a-uuid", k=5) == []

    async def test_dimension_mismatch_is_store_error(self, test_async_db) -> None:
        source_id = await _source(test_async_db, "a.pdf")
        store = SqlVectorStore(test_async_db)
        await store.insert_chunks([_row(source_id, 0, [1.0, 0.0, 0.0])])

        with pytest.raises(StoreError):
            await store.similarity_search([1.0, 0.0], source_id, k=1)

    async def test_insert_is_all_or_nothing(self, test_async_db) -> None:
        """Test a batch referencing a missing source leaves no rows behind."""
        # Arrange
        source_id = await _source(test_async_db, "a.pdf")
        store = SqlVectorStore(test_async_db)
        rows = [_row(source_id, 0, [1.0, 0.0, 0.0]), _row(str(uuid.uuid4()), 1, [1.0, 0.0, 0.0])]

        # Act
        with pytest.raises(StoreError):
            await store.insert_chunks(rows)

        # Assert
        assert await chunk_crud.count_by_source(test_async_db, uuid.UUID(source_id)) == 0


class TestSharedSessionFanOut:
    """Test multi-source retrieval never runs two statements on one session at once."""

    async def test_multi_source_retrieve_serializes_statements(self, test_async_db, monkeypatch) -> None:
        # Arrange
        store = SqlVectorStore(test_async_db)
        sources = []
        for name, vector in (("a.pdf", [1.0, 0.0, 0.0]), ("b.pdf", [0.9, 0.1, 0.0]), ("c.pdf", [0.0, 1.0, 0.0])):
            source_id = await _source(test_async_db, name)
            await store.insert_chunks([_row(source_id, 0, vector)])
            sources.append(source_id)

        original_execute = test_async_db.execute
        in_flight = {"now": 0, "max": 0}

        async def counting_execute(*args, **kwargs):
            in_flight["now"] += 1
            in_flight["max"] = max(in_flight["max"], in_flight["now"])
            try:
                await asyncio.sleep(0.01)
                return await original_execute(*args, **kwargs)
            finally:
                in_flight["now"] -= 1

        monkeypatch.setattr(test_async_db, "execute", counting_execute)

        # Act
        matches = await VectorRetriever(store).retrieve([1.0, 0.0, 0.0], sources, k=3)

        # Assert
        assert in_flight["max"] == 1
        assert [m.source_id for m in matches] == [sources[0], sources[1], sources[2]]
