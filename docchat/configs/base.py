"""
Base configuration settings.

Shared fields and `.env` handling inherited by every settings group.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Service-wide settings; groups add their own env prefix."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="docchat", description="Service name used in logs and OpenAPI")
    environment: str = Field(default="development", description="Deployment environment name")
    log_level: str = Field(default="INFO", description="Root log level name")
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed by CORS (JSON list in the environment)",
    )
