"""
Source ORM model.

A source is one ingested document (PDF, OCR'd image or raw text). Deleting
it removes its chunks and phone mappings by cascade.

Dependencies: sqlalchemy, docchat.boundary.db.base
System role: Parent record of the ingestion saga
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from docchat.boundary.db.base import Base, TimestampMixin, UUIDMixin


class SourceModel(Base, UUIDMixin, TimestampMixin):
    """
    Ingested document.

    Attributes:
        id: UUID primary key
        name: Display name (OCR sources are prefixed `OCR_`)
        auth_token: Token of the caller that stored an OCR result
        origin: Origin of the caller that stored an OCR result
    """

    __tablename__ = "rag_files"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    auth_token: Mapped[str | None] = mapped_column(String(512), nullable=True)
    origin: Mapped[str | None] = mapped_column(String(512), nullable=True)

    def __repr__(self) -> str:
        return f"<SourceModel(id={self.id}, name={self.name!r})>"
