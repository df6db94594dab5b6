"""
Document ingestion schemas.

Dependencies: pydantic
System role: Document and OCR API contracts
"""

from pydantic import BaseModel, Field


class TextIngestRequest(BaseModel):
    """Ingest raw text as a new source."""

    name: str = Field(description="Source display name")
    text: str = Field(description="Raw document text")
    phone_numbers: list[str] = Field(default_factory=list, description="Numbers to map to the source")


class IngestResponse(BaseModel):
    source_id: str
    chunks: int


class PdfExtractResponse(BaseModel):
    text: str
    source_id: str | None = None
    chunks: int | None = None


class OcrResponse(BaseModel):
    """OCR result, optionally stored as a searchable source."""

    success: bool = True
    text: str
    model: str
    stored: bool = False
    source_id: str | None = None
    chunks: int | None = None
    phone_numbers_mapped: int = 0
