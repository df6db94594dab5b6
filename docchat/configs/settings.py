"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from docchat.configs.base import BaseSettings
from docchat.configs.database import DatabaseSettings
from docchat.configs.ingestion import IngestionSettings
from docchat.configs.providers import ProviderSettings
from docchat.configs.retrieval import RetrievalSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    ingestion: IngestionSettings = Field(default_factory=IngestionSettings)
    providers: ProviderSettings = Field(default_factory=ProviderSettings)
    retrieval: RetrievalSettings = Field(default_factory=RetrievalSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Environment variables are read once; call `get_settings.cache_clear()`
    to reload them (tests do this).

    Returns:
        Settings: Application settings instance
    """
    return Settings()
