"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory SQLite database, in-memory fakes for every capability
interface the core consumes, recorded sleeps for the embedding schedule
Dependencies: pytest, pytest-asyncio, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import asyncio
from collections.abc import AsyncIterator, Sequence

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from docchat.boundary.db.connection import build_async_engine, get_async_session_factory
from docchat.boundary.db.create_tables import create_all_tables, drop_all_tables
from docchat.core.exceptions import MappingConflictError, ProviderError, StoreError
from docchat.core.interfaces import (
    CompletionProvider,
    EmbeddingProvider,
    MessageHistory,
    OcrProvider,
    SourceRepository,
    VectorStore,
)
from docchat.models import (
    ConversationTurn,
    EmbeddedChunk,
    PhoneMapping,
    SourceCreate,
    VectorSearchHit,
)


class FakeEmbeddingProvider(EmbeddingProvider):
    """
    Deterministic embedder.

    Every text maps to a unit vector along the first axis unless `vectors`
    says otherwise. Calls are numbered from 1 in the order they start.
    """

    def __init__(
        self,
        dimension: int = 3,
        vectors: dict[str, list[float]] | None = None,
        fail_on_calls: Sequence[int] = (),
        fail_texts: Sequence[str] = (),
        delays: dict[str, float] | None = None,
        default_delay: float = 0.0,
    ) -> None:
        self.dimension = dimension
        self.vectors = vectors or {}
        self.fail_on_calls = set(fail_on_calls)
        self.fail_texts = set(fail_texts)
        self.delays = delays or {}
        self.default_delay = default_delay
        self.calls: list[str] = []
        self.completed = 0
        self.cancelled = 0
        self.in_flight = 0
        self.max_in_flight = 0

    async def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        call_number = len(self.calls)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            delay = self.delays.get(text, self.default_delay)
            if delay:
                await asyncio.sleep(delay)
            if call_number in self.fail_on_calls or text in self.fail_texts:
                raise ProviderError(f"embedding call {call_number} failed", provider="embedding")
            self.completed += 1
            if text in self.vectors:
                return list(self.vectors[text])
            return [1.0] + [0.0] * (self.dimension - 1)
        except asyncio.CancelledError:
            self.cancelled += 1
            raise
        finally:
            self.in_flight -= 1


class FakeCompletionProvider(CompletionProvider):
    """Streams fixed deltas; optionally fails after `error_after` deltas."""

    def __init__(
        self,
        deltas: Sequence[str] = ("Hello", " world"),
        error_after: int | None = None,
        reply: str = "You are the Acme support bot.",
    ) -> None:
        self.deltas = list(deltas)
        self.error_after = error_after
        self.reply = reply
        self.stream_turns: list[list[ConversationTurn]] = []
        self.complete_calls: list[dict] = []
        self.closed = 0

    async def stream_complete(self, turns: Sequence[ConversationTurn]) -> AsyncIterator[str]:
        self.stream_turns.append(list(turns))
        try:
            for index, delta in enumerate(self.deltas):
                if index == self.error_after:
                    raise ProviderError("model connection dropped", provider="completion")
                yield delta
        finally:
            self.closed += 1

    async def complete(
        self,
        turns: Sequence[ConversationTurn],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        self.complete_calls.append({"turns": list(turns), "temperature": temperature, "max_tokens": max_tokens})
        return self.reply


class FakeVectorStore(VectorStore):
    """Canned hits per source id (None for the all-sources search)."""

    def __init__(
        self,
        hits: dict[str | None, list[VectorSearchHit]] | None = None,
        fail_sources: Sequence[str | None] = (),
        fail_insert: bool = False,
    ) -> None:
        self.hits = hits or {}
        self.fail_sources = set(fail_sources)
        self.fail_insert = fail_insert
        self.searches: list[tuple[str | None, int]] = []
        self.inserted: list[EmbeddedChunk] = []

    async def similarity_search(
        self,
        vector: Sequence[float],
        source_id: str | None,
        k: int,
    ) -> list[VectorSearchHit]:
        self.searches.append((source_id, k))
        if source_id in self.fail_sources:
            raise StoreError("search failed", operation="similarity_search")
        return list(self.hits.get(source_id, []))[:k]

    async def insert_chunks(self, rows: Sequence[EmbeddedChunk]) -> None:
        if self.fail_insert:
            raise StoreError("insert failed", operation="insert_chunks")
        self.inserted.extend(rows)


class FakeSourceRepository(SourceRepository):
    """Sources and mappings held in dicts."""

    def __init__(
        self,
        mappings: dict[str, list[str]] | None = None,
        prompts: dict[str, str] | None = None,
        fail_delete: bool = False,
        fail_mapping_keys: Sequence[str] = (),
    ) -> None:
        self.mappings = {key: list(ids) for key, ids in (mappings or {}).items()}
        self.prompts = prompts or {}
        self.fail_delete = fail_delete
        self.fail_mapping_keys = set(fail_mapping_keys)
        self.created: list[SourceCreate] = []
        self.deleted: list[str] = []

    @property
    def live_sources(self) -> list[str]:
        ids = [f"source-{n}" for n in range(1, len(self.created) + 1)]
        return [source_id for source_id in ids if source_id not in self.deleted]

    async def create(self, meta: SourceCreate) -> str:
        self.created.append(meta)
        return f"source-{len(self.created)}"

    async def delete(self, source_id: str) -> None:
        if self.fail_delete:
            raise StoreError("delete failed", operation="delete_source")
        self.deleted.append(source_id)

    async def list_mappings(self, key: str) -> list[str]:
        return list(self.mappings.get(key, []))

    async def add_mapping(self, key: str, source_id: str) -> PhoneMapping:
        if key in self.fail_mapping_keys:
            raise StoreError("mapping insert failed", operation="add_mapping")
        if source_id in self.mappings.get(key, []):
            raise MappingConflictError(key, source_id)
        self.mappings.setdefault(key, []).append(source_id)
        return PhoneMapping(id=f"mapping-{key}-{source_id}", key=key, source_id=source_id)

    async def get_system_prompt(self, key: str) -> str | None:
        return self.prompts.get(key)


class FakeMessageHistory(MessageHistory):
    def __init__(self, turns: dict[str, list[ConversationTurn]] | None = None) -> None:
        self.turns = {session: list(items) for session, items in (turns or {}).items()}
        self.fail_append = False

    async def load(self, session_id: str) -> list[ConversationTurn]:
        return list(self.turns.get(session_id, []))

    async def append(self, session_id: str, turn: ConversationTurn) -> None:
        if self.fail_append:
            raise StoreError("history unavailable", operation="append_history")
        self.turns.setdefault(session_id, []).append(turn)


class FakeOcrProvider(OcrProvider):
    def __init__(self, text: str = "Invoice 1042\nTotal due: 42.00 EUR") -> None:
        self.model_name = "fake-ocr"
        self.text = text
        self.calls: list[tuple[int, str]] = []

    async def extract_text(self, image: bytes, mime_type: str) -> str:
        self.calls.append((len(image), mime_type))
        return self.text


class SleepRecorder:
    """Stands in for asyncio.sleep and records every requested delay."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def make_hit(source_id: str, ordinal: int, similarity: float, text: str | None = None) -> VectorSearchHit:
    return VectorSearchHit(
        id=f"{source_id}-{ordinal}",
        source_id=source_id,
        ordinal=ordinal,
        text=text or f"{source_id} chunk {ordinal}",
        similarity=similarity,
    )


@pytest.fixture
def fake_embedder() -> FakeEmbeddingProvider:
    return FakeEmbeddingProvider()


@pytest.fixture
def fake_completion() -> FakeCompletionProvider:
    return FakeCompletionProvider()


@pytest.fixture
def fake_vector_store() -> FakeVectorStore:
    return FakeVectorStore()


@pytest.fixture
def fake_sources() -> FakeSourceRepository:
    return FakeSourceRepository()


@pytest.fixture
def fake_history() -> FakeMessageHistory:
    return FakeMessageHistory()


@pytest.fixture
def fake_ocr() -> FakeOcrProvider:
    return FakeOcrProvider()


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def hit_factory():
    """Build VectorSearchHit values: hit_factory(source_id, ordinal, similarity)."""
    return make_hit


@pytest.fixture
async def db_engine() -> AsyncIterator[AsyncEngine]:
    """
    In-memory SQLite engine with every table created.

    Yields:
        AsyncEngine: Engine with foreign keys enforced
    """
    engine = build_async_engine("sqlite+aiosqlite:///:memory:")
    await create_all_tables(engine)
    yield engine
    await drop_all_tables(engine)
    await engine.dispose()


@pytest.fixture
async def test_async_db(db_engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    """
    Session on the in-memory database.

    Yields:
        AsyncSession: Test database session, rolled back on teardown
    """
    session_factory = get_async_session_factory(db_engine)
    async with session_factory() as session:
        yield session
        await session.rollback()
