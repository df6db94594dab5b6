"""Pydantic models for the domain and the HTTP API."""

from docchat.models.chunk import Chunk, EmbeddedChunk
from docchat.models.conversation import ConversationTurn, TurnRole
from docchat.models.ingestion import IngestionJob, IngestionResult, IngestionStatus, SourceCreate
from docchat.models.mapping import PhoneMapping
from docchat.models.retrieval import RetrievalMatch, SourceSelector, VectorSearchHit

__all__ = [
    "Chunk",
    "ConversationTurn",
    "EmbeddedChunk",
    "IngestionJob",
    "IngestionResult",
    "IngestionStatus",
    "PhoneMapping",
    "RetrievalMatch",
    "SourceCreate",
    "SourceSelector",
    "TurnRole",
    "VectorSearchHit",
]
