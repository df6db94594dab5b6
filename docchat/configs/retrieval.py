"""
Retrieval and answer settings.

Dependencies: pydantic, pydantic_settings
System role: Query-time configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from docchat.configs.base import BaseSettings
from docchat.core.prompts import DEFAULT_INSTRUCTIONS


class RetrievalSettings(BaseSettings):
    """Top-k, history window and default instructions."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RETRIEVAL_",
        case_sensitive=False,
        extra="ignore",
    )

    top_k: int = Field(default=5, gt=0, description="Number of chunks injected as context")
    history_limit: int = Field(
        default=0,
        ge=0,
        description="Most recent turns loaded as history (0 loads the whole session)",
    )
    default_instructions: str = Field(
        default=DEFAULT_INSTRUCTIONS,
        description="Assistant persona used when a caller has no stored system prompt",
    )
