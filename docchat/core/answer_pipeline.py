"""
Grounded answer pipeline.

Composes query embedding -> source resolution -> retrieval -> context
assembly -> completion stream -> stream relay. Everything up to opening the
completion stream runs before `answer` returns, so embedding, retrieval and
resolution failures reach the caller as typed errors instead of a broken
stream.

Dependencies: docchat.core (retriever, context_assembler, stream_relay, interfaces)
System role: Query-time entry point of the core
"""

import logging
from collections.abc import AsyncIterator, Sequence

from docchat.core.context_assembler import assemble
from docchat.core.exceptions import InvalidArgumentError, NoDocumentsError, ProviderError
from docchat.core.interfaces import (
    CompletionProvider,
    EmbeddingProvider,
    MessageHistory,
    SourceRepository,
)
from docchat.core.retriever import VectorRetriever
from docchat.core.stream_relay import relay_stream
from docchat.models.conversation import ConversationTurn
from docchat.models.retrieval import RetrievalMatch, SourceSelector

logger = logging.getLogger(__name__)


class AnswerPipeline:
    """Answers one question from retrieved document context."""

    def __init__(
        self,
        embedder: EmbeddingProvider,
        completion: CompletionProvider,
        retriever: VectorRetriever,
        sources: SourceRepository,
        history: MessageHistory,
        top_k: int,
        instructions: str,
        history_limit: int = 0,
    ) -> None:
        """
        Initialize pipeline with its collaborators.

        Args:
            embedder: Embeds the question
            completion: Streams the answer
            retriever: Ranks stored chunks
            sources: Resolves phone mappings and stored system prompts
            history: Loads prior turns of the session
            top_k: Number of chunks injected as context
            instructions: Default persona when no stored prompt applies
            history_limit: Keep only the most recent N turns (0 keeps all)
        """
        self._embedder = embedder
        self._completion = completion
        self._retriever = retriever
        self._sources = sources
        self._history = history
        self._top_k = top_k
        self._instructions = instructions
        self._history_limit = history_limit

    async def answer(
        self,
        session_id: str,
        selector: SourceSelector | None,
        user_message: str,
    ) -> AsyncIterator[bytes]:
        """
        Prepare a grounded answer and return its byte stream.

        Args:
            session_id: Conversation whose history is included
            selector: Which sources to search (None searches everything)
            user_message: The question

        Returns:
            AsyncIterator[bytes]: Relay over the completion stream

        Raises:
            InvalidArgumentError: Missing session id or message
            NoDocumentsError: Mapping key resolves to no sources
            ProviderError: Query embedding failed
            RetrievalFailure: Similarity search failed
        """
        if not session_id:
            raise InvalidArgumentError("Session id is required", field="session_id")
        if not user_message or not user_message.strip():
            raise InvalidArgumentError("Message is required", field="message")
        selector = selector or SourceSelector()

        history = await self._load_history(session_id)
        source_ids, instructions = await self._resolve(selector)
        query_vector = await self._embed_query(user_message)

        matches = await self._retrieve(query_vector, source_ids)
        logger.info(
            f"{__name__}:answer - Context retrieved",
            extra={
                "session_id": session_id,
                "match_count": len(matches),
                "history_len": len(history),
                "source_count": None if source_ids is None else len(source_ids),
            },
        )

        turns = assemble(instructions, matches, history, user_message)
        return relay_stream(self._completion.stream_complete(turns))

    async def _load_history(self, session_id: str) -> list[ConversationTurn]:
        history = await self._history.load(session_id)
        if self._history_limit:
            history = history[-self._history_limit:]
        return history

    async def _resolve(self, selector: SourceSelector) -> tuple[list[str] | None, str]:
        """Return (source ids or None for all sources, instructions)."""
        instructions = self._instructions
        if selector.mapping_key:
            stored_prompt = await self._sources.get_system_prompt(selector.mapping_key)
            if stored_prompt:
                instructions = stored_prompt

        if selector.source_id:
            return [selector.source_id], instructions

        if selector.mapping_key:
            source_ids = await self._sources.list_mappings(selector.mapping_key)
            if not source_ids:
                raise NoDocumentsError(selector.mapping_key)
            return source_ids, instructions

        return None, instructions

    async def _embed_query(self, user_message: str) -> list[float]:
        try:
            return await self._embedder.embed(user_message)
        except ProviderError:
            raise
        except Exception as e:
            raise ProviderError(
                "Failed to embed question",
                provider="embedding",
                operation="embed",
                details={"reason": str(e)},
            ) from e

    async def _retrieve(
        self,
        query_vector: Sequence[float],
        source_ids: list[str] | None,
    ) -> list[RetrievalMatch]:
        if source_ids is None:
            return await self._retriever.retrieve_all(query_vector, self._top_k)
        return await self._retriever.retrieve(query_vector, source_ids, self._top_k)
