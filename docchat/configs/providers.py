"""
External provider settings.

Google Gemini (embeddings, chat completion) and Mistral OCR credentials and models.

Dependencies: pydantic, pydantic_settings
System role: Provider configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from docchat.configs.base import BaseSettings


class ProviderSettings(BaseSettings):
    """Embedding, completion and OCR provider configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PROVIDER_",
        case_sensitive=False,
        extra="ignore",
    )

    google_api_key: str = Field(default="", description="Google Generative AI API key")
    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Google embedding model ID",
    )
    embedding_dimension: int = Field(
        default=1024,
        gt=0,
        description="Vector length produced by the embedding model",
    )
    chat_model: str = Field(default="gemini-2.5-flash", description="Chat completion model ID")
    temperature: float = Field(default=0.2, description="Temperature for answers")
    system_prompt_temperature: float = Field(
        default=0.7,
        description="Temperature used when generating chatbot system prompts",
    )
    system_prompt_max_tokens: int = Field(default=500, description="Token cap for generated prompts")

    mistral_api_key: str = Field(default="", description="Mistral API key for OCR")
    ocr_model: str = Field(default="mistral-ocr-latest", description="Mistral OCR model")
    ocr_base_url: str = Field(default="https://api.mistral.ai/v1", description="Mistral API base URL")
    request_timeout_seconds: float = Field(default=120.0, description="HTTP timeout for OCR calls")
