"""
Test suite for AnswerPipeline.

System role: Verification of the grounded answer flow
"""

import pytest

from docchat.core.answer_pipeline import AnswerPipeline
from docchat.core.exceptions import (
    InvalidArgumentError,
    NoDocumentsError,
    ProviderError,
    RetrievalFailure,
    StreamAborted,
)
from docchat.core.prompts import DEFAULT_INSTRUCTIONS
from docchat.core.retriever import VectorRetriever
from docchat.models.conversation import ConversationTurn, TurnRole
from docchat.models.retrieval import SourceSelector


@pytest.fixture
def pipeline(fake_embedder, fake_completion, fake_vector_store, fake_sources, fake_history) -> AnswerPipeline:
    return AnswerPipeline(
        embedder=fake_embedder,
        completion=fake_completion,
        retriever=VectorRetriever(fake_vector_store),
        sources=fake_sources,
        history=fake_history,
        top_k=3,
        instructions=DEFAULT_INSTRUCTIONS,
    )


async def _collect(stream) -> bytes:
    return b"".join([part async for part in stream])


class TestAnswer:
    """Test suite for AnswerPipeline.answer()."""

    async def test_streams_completion(self, pipeline) -> None:
        stream = await pipeline.answer("s1", None, "Hi?")

        assert await _collect(stream) == b"Hello world"

    async def test_explicit_source(self, pipeline, fake_vector_store, fake_completion, hit_factory) -> None:
        # Arrange
        fake_vector_store.hits = {"doc-1": [hit_factory("doc-1", 0, 0.8, text="Opening hours: 9 to 5.")]}

        # Act
        await _collect(await pipeline.answer("s1", SourceSelector(source_id="doc-1"), "When do you open?"))

        # Assert
        assert fake_vector_store.searches == [("doc-1", 3)]
        system = fake_completion.stream_turns[0][0]
        assert system.role == TurnRole.SYSTEM
        assert system.content.startswith(DEFAULT_INSTRUCTIONS)
        assert "Opening hours: 9 to 5." in system.content

    async def test_no_selector_searches_everything(self, pipeline, fake_vector_store) -> None:
        await _collect(await pipeline.answer("s1", SourceSelector(), "Anything?"))

        assert fake_vector_store.searches == [(None, 3)]

    async def test_mapping_key_resolves_sources_and_prompt(
        self, pipeline, fake_sources, fake_vector_store, fake_completion
    ) -> None:
        # Arrange
        fake_sources.mappings = {"15550001": ["doc-1", "doc-2"]}
        fake_sources.prompts = {"15550001": "You are the Acme clinic assistant."}

        # Act
        await _collect(await pipeline.answer("s1", SourceSelector(mapping_key="15550001"), "Hours?"))

        # Assert
        assert sorted(fake_vector_store.searches) == [("doc-1", 3), ("doc-2", 3)]
        assert fake_completion.stream_turns[0][0].content.startswith("You are the Acme clinic assistant.")

    async def test_unmapped_key_raises_no_documents(self, pipeline, fake_completion) -> None:
        with pytest.raises(NoDocumentsError) as exc_info:
            await pipeline.answer("s1", SourceSelector(mapping_key="15559999"), "Hello")

        assert exc_info.value.mapping_key == "15559999"
        assert fake_completion.stream_turns == []

    async def test_history_included_unchanged(self, pipeline, fake_history, fake_completion) -> None:
        # Arrange
        earlier = [
            ConversationTurn(role=TurnRole.USER, content="first"),
            ConversationTurn(role=TurnRole.ASSISTANT, content="reply"),
        ]
        fake_history.turns = {"s1": list(earlier)}

        # Act
        await _collect(await pipeline.answer("s1", None, "second"))

        # Assert
        turns = fake_completion.stream_turns[0]
        assert turns[1:3] == earlier
        assert turns[-1].content == "second"

    async def test_history_limit_keeps_latest_turns(
        self, fake_embedder, fake_completion, fake_vector_store, fake_sources, fake_history
    ) -> None:
        fake_history.turns = {
            "s1": [ConversationTurn(role=TurnRole.USER, content=str(i)) for i in range(5)]
        }
        pipeline = AnswerPipeline(
            fake_embedder,
            fake_completion,
            VectorRetriever(fake_vector_store),
            fake_sources,
            fake_history,
            top_k=3,
            instructions="x",
            history_limit=2,
        )

        await _collect(await pipeline.answer("s1", None, "q"))

        assert [t.content for t in fake_completion.stream_turns[0][1:-1]] == ["3", "4"]

    async def test_embedding_failure_raises_provider_error(self, pipeline, fake_embedder, fake_completion) -> None:
        fake_embedder.fail_texts = {"Hi?"}

        with pytest.raises(ProviderError):
            await pipeline.answer("s1", None, "Hi?")

        assert fake_completion.stream_turns == []

    async def test_retrieval_failure_raises_before_streaming(self, pipeline, fake_vector_store) -> None:
        fake_vector_store.fail_sources = {"doc-1"}

        with pytest.raises(RetrievalFailure):
            await pipeline.answer("s1", SourceSelector(source_id="doc-1"), "Hi?")

    async def test_mid_stream_failure_surfaces_as_stream_aborted(self, pipeline, fake_completion) -> None:
        fake_completion.error_after = 1

        stream = await pipeline.answer("s1", None, "Hi?")
        with pytest.raises(StreamAborted):
            await _collect(stream)

    @pytest.mark.parametrize("session_id,message", [("", "Hi"), ("s1", ""), ("s1", "  ")])
    async def test_missing_input_rejected(self, pipeline, fake_embedder, session_id, message) -> None:
        with pytest.raises(InvalidArgumentError):
            await pipeline.answer(session_id, None, message)

        assert fake_embedder.calls == []
