"""
Database configuration settings.

PostgreSQL connection parameters for the async SQLAlchemy engine.
A full `POSTGRES_URL` overrides the individual parts (used for SQLite dev runs).

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration for ORM
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from docchat.configs.base import BaseSettings


class DatabaseSettings(BaseSettings):
    """PostgreSQL database configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="POSTGRES_",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="localhost", description="PostgreSQL host")
    port: int = Field(default=5432, description="PostgreSQL port")
    user: str = Field(default="postgres", description="PostgreSQL user")
    password: str = Field(default="postgres", description="PostgreSQL password")
    db: str = Field(default="docchat", description="PostgreSQL database name")
    url: str | None = Field(
        default=None,
        description="Complete async SQLAlchemy URL; takes precedence over host/port/user",
    )

    pool_size: int = Field(default=10, description="Connection pool size")
    max_overflow: int = Field(default=20, description="Maximum overflow connections")
    pool_timeout: int = Field(default=30, description="Connection pool timeout in seconds")
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")
    auto_create_tables: bool = Field(
        default=False,
        description="Create missing tables at startup (development and SQLite)",
    )

    @property
    def async_database_url(self) -> str:
        """
        Construct async connection URL.

        Returns:
            str: SQLAlchemy async-compatible database URL
        """
        if self.url:
            return self.url
        return (
            f"postgresql+asyncpg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.db}"
        )
