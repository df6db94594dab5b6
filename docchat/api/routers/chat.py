"""
Chat API endpoints.

Routes:
- POST /chat - Stream a document-grounded answer as plain text

Errors before the first token come back as JSON error responses. An error
mid-answer aborts the response without a clean end of body.

Dependencies: docchat.api.deps, docchat.application.services.chat_service
System role: Streaming chat HTTP API
"""

import logging
from collections.abc import AsyncIterator

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from docchat.api.deps import (
    ServiceCache,
    build_chat_service,
    get_service_cache,
    get_session_factory,
    get_settings_dependency,
)
from docchat.configs import Settings
from docchat.core.exceptions import InvalidArgumentError
from docchat.models.chat import ChatRequest
from docchat.models.retrieval import SourceSelector

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


async def _stream_then_close(stream: AsyncIterator[bytes], db: AsyncSession) -> AsyncIterator[bytes]:
    try:
        async for part in stream:
            yield part
    finally:
        await stream.aclose()
        await db.close()


@router.post("/chat")
async def chat(
    request: ChatRequest,
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    cache: ServiceCache = Depends(get_service_cache),
    settings: Settings = Depends(get_settings_dependency),
) -> StreamingResponse:
    """
    Stream an answer to the user's question.

    The database session is owned by the response body, since the answer
    is stored to history only after the last token has been sent.

    Args:
        request: Session id, message and optional source / phone number
        session_factory: Creates the session used while streaming
        cache: Provider adapters
        settings: Application settings

    Returns:
        StreamingResponse: text/plain answer body
    """
    if not request.session_id or not request.message:
        raise InvalidArgumentError(
            "Missing sessionId or message",
            field="session_id" if not request.session_id else "message",
        )

    selector = SourceSelector(source_id=request.source_id, mapping_key=request.phone_number)
    db = session_factory()
    try:
        service = build_chat_service(db, cache, settings)
        stream = await service.stream_answer(request.session_id, selector, request.message)
    except BaseException:
        await db.close()
        raise

    logger.info(
        f"{__name__}:chat - Streaming answer",
        extra={"session_id": request.session_id, "source_id": request.source_id},
    )
    return StreamingResponse(
        _stream_then_close(stream, db),
        media_type="text/plain; charset=utf-8",
    )
