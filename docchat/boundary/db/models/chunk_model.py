"""
Chunk ORM model.

Stores chunk text with its embedding. Vectors are kept as a JSON array so
the same schema runs on PostgreSQL and SQLite; similarity is computed by
the SQL vector store.

Dependencies: sqlalchemy, docchat.boundary.db.base
System role: Persisted embedded chunks
"""

import uuid

from sqlalchemy import JSON, ForeignKey, Index, Integer, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from docchat.boundary.db.base import Base, TimestampMixin, UUIDMixin


class ChunkModel(Base, UUIDMixin, TimestampMixin):
    """
    Embedded chunk of a source.

    Attributes:
        source_id: Owning source (ON DELETE CASCADE)
        ordinal: Position within the source
        content: Chunk text
        embedding: Vector as a JSON list of floats
    """

    __tablename__ = "rag_chunks"
    __table_args__ = (Index("ix_rag_chunks_source_ordinal", "source_id", "ordinal"),)

    source_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("rag_files.id", ondelete="CASCADE"),
        nullable=False,
    )
    ordinal: Mapped[int] = mapped_column(Integer, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    embedding: Mapped[list[float]] = mapped_column(JSON, nullable=False)

