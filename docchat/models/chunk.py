"""
Chunk domain models.

A chunk is a bounded slice of a source's text, numbered by position. Its
embedded form carries the vector produced by the embedding provider.

Dependencies: pydantic
System role: Document chunk data structures
"""

from pydantic import BaseModel, ConfigDict, Field


class Chunk(BaseModel):
    """Immutable text chunk of one source."""

    model_config = ConfigDict(frozen=True)

    source_id: str = Field(description="Owning source identifier")
    ordinal: int = Field(ge=0, description="Position within the source, assigned after filtering")
    text: str = Field(description="Trimmed chunk text")


class EmbeddedChunk(Chunk):
    """Chunk plus its embedding vector."""

    vector: list[float] = Field(description="Embedding vector, fixed length system-wide")
