"""
Dependency injection container.

Provider adapters (Gemini, Mistral) are created once, lazily, and cached
for the process. Everything touching the database is built per request
around that request's AsyncSession.

Dependencies: fastapi, docchat.configs, docchat.application, docchat.boundary, docchat.core
System role: DI container for service injection
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from docchat.application.adapters import SqlMessageHistory, SqlSourceRepository
from docchat.application.services import (
    AutoResponder,
    ChatService,
    InboundMessageService,
    IngestionService,
    MappingService,
)
from docchat.boundary.db import get_async_db, get_async_session_factory
from docchat.boundary.vdb.sql_vector_store import SqlVectorStore
from docchat.configs import Settings, get_settings
from docchat.core.answer_pipeline import AnswerPipeline
from docchat.core.embedding_batcher import EmbeddingBatcher
from docchat.core.ingestion_coordinator import IngestionCoordinator
from docchat.core.interfaces import CompletionProvider, EmbeddingProvider, OcrProvider
from docchat.core.retriever import VectorRetriever


class ServiceCache:
    """Container for cached provider adapters."""

    def __init__(self) -> None:
        self._embedder: EmbeddingProvider | None = None
        self._completion: CompletionProvider | None = None
        self._ocr: OcrProvider | None = None

    @property
    def embedder(self) -> EmbeddingProvider:
        """Get cached embedding provider."""
        if self._embedder is None:
            from docchat.boundary.providers.gemini_embeddings import GeminiEmbeddingProvider

            providers = get_settings().providers
            self._embedder = GeminiEmbeddingProvider(
                model=providers.embedding_model,
                dimension=providers.embedding_dimension,
                api_key=providers.google_api_key or None,
            )
        return self._embedder

    @property
    def completion(self) -> CompletionProvider:
        """Get cached chat completion provider."""
        if self._completion is None:
            from docchat.boundary.providers.gemini_chat import GeminiChatProvider

            providers = get_settings().providers
            self._completion = GeminiChatProvider(
                model=providers.chat_model,
                temperature=providers.temperature,
                api_key=providers.google_api_key or None,
            )
        return self._completion

    @property
    def ocr(self) -> OcrProvider:
        """Get cached OCR provider."""
        if self._ocr is None:
            from docchat.boundary.providers.mistral_ocr import MistralOcrProvider

            providers = get_settings().providers
            self._ocr = MistralOcrProvider(
                api_key=providers.mistral_api_key,
                model=providers.ocr_model,
                base_url=providers.ocr_base_url,
                timeout=providers.request_timeout_seconds,
            )
        return self._ocr

    async def aclose(self) -> None:
        """Release provider resources and clear the cache."""
        if self._ocr is not None and hasattr(self._ocr, "aclose"):
            await self._ocr.aclose()
        self._embedder = None
        self._completion = None
        self._ocr = None


_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory for handlers whose work outlives the request scope (streamed answers)."""
    return get_async_session_factory()


def build_chat_service(db: AsyncSession, cache: ServiceCache, settings: Settings) -> ChatService:
    """
    Wire the answer pipeline and chat service around one session.

    Args:
        db: Async database session
        cache: Provider adapters
        settings: Application settings

    Returns:
        ChatService: Chat service ready to stream answers
    """
    history = SqlMessageHistory(db)
    pipeline = AnswerPipeline(
        embedder=cache.embedder,
        completion=cache.completion,
        retriever=VectorRetriever(SqlVectorStore(db)),
        sources=SqlSourceRepository(db),
        history=history,
        top_k=settings.retrieval.top_k,
        instructions=settings.retrieval.default_instructions,
        history_limit=settings.retrieval.history_limit,
    )
    return ChatService(pipeline=pipeline, history=history)


def get_chat_service(
    db: AsyncSession = Depends(get_async_db),
    cache: ServiceCache = Depends(get_service_cache),
    settings: Settings = Depends(get_settings_dependency),
) -> ChatService:
    return build_chat_service(db, cache, settings)


def get_ingestion_service(
    db: AsyncSession = Depends(get_async_db),
    cache: ServiceCache = Depends(get_service_cache),
    settings: Settings = Depends(get_settings_dependency),
) -> IngestionService:
    """
    Get ingestion service instance.

    Returns:
        IngestionService: Service whose coordinator writes through `db`
    """
    coordinator = IngestionCoordinator(
        sources=SqlSourceRepository(db),
        vector_store=SqlVectorStore(db),
        batcher=EmbeddingBatcher(cache.embedder, settings.providers.embedding_dimension),
    )
    return IngestionService(coordinator=coordinator, settings=settings.ingestion, ocr=cache.ocr)


def get_mapping_service(db: AsyncSession = Depends(get_async_db)) -> MappingService:
    """Mapping service for CRUD routes; no model provider attached."""
    return MappingService(db=db)


def get_prompt_mapping_service(
    db: AsyncSession = Depends(get_async_db),
    cache: ServiceCache = Depends(get_service_cache),
    settings: Settings = Depends(get_settings_dependency),
) -> MappingService:
    """Mapping service with the completion provider for system prompt generation."""
    return MappingService(
        db=db,
        completion=cache.completion,
        temperature=settings.providers.system_prompt_temperature,
        max_tokens=settings.providers.system_prompt_max_tokens,
    )


def get_auto_responder(chat_service: ChatService = Depends(get_chat_service)) -> AutoResponder:
    return AutoResponder(chat_service)


def get_inbound_message_service(db: AsyncSession = Depends(get_async_db)) -> InboundMessageService:
    return InboundMessageService(db=db)
