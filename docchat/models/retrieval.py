"""
Retrieval models.

Dependencies: pydantic
System role: Similarity search results and source selection
"""

from pydantic import BaseModel, ConfigDict, Field


class VectorSearchHit(BaseModel):
    """One row returned by a vector store similarity search."""

    model_config = ConfigDict(frozen=True)

    id: str
    source_id: str
    ordinal: int = 0
    text: str
    similarity: float


class RetrievalMatch(BaseModel):
    """Ranked chunk handed to the context assembler."""

    model_config = ConfigDict(frozen=True)

    chunk_id: str
    source_id: str
    text: str
    similarity: float = Field(ge=0.0, le=1.0)
    ordinal: int | None = None


class SourceSelector(BaseModel):
    """
    Which sources an answer searches.

    An explicit `source_id` wins; otherwise `mapping_key` (a phone number)
    is resolved through the mapping table. With neither, every stored chunk
    is searched.
    """

    source_id: str | None = None
    mapping_key: str | None = None
