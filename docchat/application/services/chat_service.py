"""
Chat service.

Streams grounded answers and records the exchange in the session history
once the answer has streamed to completion. An aborted stream stores
nothing, so history never holds half an answer. A history write that fails
after the last token is logged; the delivered answer still ends cleanly.

Dependencies: docchat.core.answer_pipeline, docchat.core.interfaces
System role: Chat use case orchestration
"""

import logging
from collections.abc import AsyncIterator

from docchat.core.answer_pipeline import AnswerPipeline
from docchat.core.exceptions import StoreError
from docchat.core.interfaces import MessageHistory
from docchat.models.conversation import ConversationTurn, TurnRole
from docchat.models.retrieval import SourceSelector
from docchat.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class ChatService:
    """Chat orchestrator around the answer pipeline."""

    def __init__(self, pipeline: AnswerPipeline, history: MessageHistory) -> None:
        self.pipeline = pipeline
        self.history = history

    async def stream_answer(
        self,
        session_id: str,
        selector: SourceSelector | None,
        message: str,
    ) -> AsyncIterator[bytes]:
        """
        Start an answer and return its byte stream.

        Failures before the first token (validation, embedding, retrieval,
        unmapped phone number) raise here; failures mid-answer surface as
        `StreamAborted` while iterating.

        Args:
            session_id: Conversation identifier
            selector: Which sources to search
            message: User question

        Returns:
            AsyncIterator[bytes]: Encoded answer deltas
        """
        stream = await self.pipeline.answer(session_id, selector, message)
        return self._record(session_id, message, stream)

    async def answer_text(self, session_id: str, selector: SourceSelector | None, message: str) -> str:
        """Run an answer to completion and return it as text."""
        stream = await self.stream_answer(session_id, selector, message)
        parts = [part async for part in stream]
        return b"".join(parts).decode("utf-8")

    async def _record(
        self,
        session_id: str,
        message: str,
        stream: AsyncIterator[bytes],
    ) -> AsyncIterator[bytes]:
        parts: list[bytes] = []
        try:
            async for part in stream:
                parts.append(part)
                yield part
        finally:
            await stream.aclose()

        answer = b"".join(parts).decode("utf-8")
        try:
            await self.history.append(session_id, ConversationTurn(role=TurnRole.USER, content=message))
            await self.history.append(session_id, ConversationTurn(role=TurnRole.ASSISTANT, content=answer))
        except StoreError as e:
            log_exception_with_context(
                logger,
                f"{__name__}:_record - Answer delivered but history not stored",
                e,
                session_id=session_id,
            )
            return
        logger.info(
            f"{__name__}:_record - Exchange stored",
            extra={"session_id": session_id, "answer_len": len(answer)},
        )
