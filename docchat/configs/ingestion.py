"""
Ingestion pipeline settings.

Chunk sizes and embedding rate-limit policy. The defaults keep 55 embedding
calls per 61 seconds, under a provider ceiling of 60 requests per minute.

Dependencies: pydantic, pydantic_settings
System role: Ingestion configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from docchat.configs.base import BaseSettings


class IngestionSettings(BaseSettings):
    """Chunking and embedding batch configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="INGESTION_",
        case_sensitive=False,
        extra="ignore",
    )

    chunk_size: int = Field(default=400, gt=0, description="Maximum chunk size in characters")
    ocr_chunk_size: int = Field(
        default=1500,
        gt=0,
        description="Chunk size used for OCR-extracted text",
    )
    batch_size: int = Field(default=55, gt=0, description="Embedding calls per batch")
    inter_batch_delay_seconds: float = Field(
        default=61.0,
        ge=0.0,
        description="Pause between embedding batches",
    )
