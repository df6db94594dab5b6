"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Dependencies: sqlalchemy, docchat.configs
System role: Persistent storage for sources, chunks, phone mappings and messages
"""

from docchat.boundary.db.base import Base, TimestampMixin, UUIDMixin
from docchat.boundary.db.connection import (
    build_async_engine,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from docchat.boundary.db.models import ChunkModel, MessageModel, PhoneMappingModel, SourceModel
from docchat.boundary.db.CRUD import (
    chunk_crud,
    message_crud,
    phone_mapping_crud,
    source_crud,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "build_async_engine",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "ChunkModel",
    "MessageModel",
    "PhoneMappingModel",
    "SourceModel",
    "chunk_crud",
    "message_crud",
    "phone_mapping_crud",
    "source_crud",
]
