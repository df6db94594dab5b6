"""
Ingestion job models.

Dependencies: pydantic
System role: Ingestion coordinator state and results
"""

from enum import Enum

from pydantic import BaseModel, Field

from docchat.models.chunk import EmbeddedChunk


class IngestionStatus(str, Enum):
    """Lifecycle of one ingestion call."""

    PENDING = "pending"
    PARTIALLY_EMBEDDED = "partially_embedded"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class SourceCreate(BaseModel):
    """Metadata for the parent source record."""

    name: str = Field(min_length=1, description="Display name of the source")
    auth_token: str | None = Field(default=None, description="Caller token recorded with OCR sources")
    origin: str | None = Field(default=None, description="Caller origin recorded with OCR sources")


class IngestionJob(BaseModel):
    """Working state of a single ingestion; never outlives the call."""

    source_id: str
    chunks: list[EmbeddedChunk] = Field(default_factory=list)
    status: IngestionStatus = IngestionStatus.PENDING


class IngestionResult(BaseModel):
    """Outcome returned by `IngestionCoordinator.ingest`."""

    source_id: str
    chunk_count: int = Field(ge=0)
    status: IngestionStatus
    mapped_count: int = Field(default=0, ge=0, description="Phone numbers linked to the source")
