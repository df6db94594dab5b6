"""
Phone mapping ORM model.

Links a phone number to a source and carries the number's chatbot intent
and generated system prompt. A row without a source is a placeholder that
only holds the prompt until a document is mapped.

Dependencies: sqlalchemy, docchat.boundary.db.base
System role: Caller identity to source resolution
"""

import uuid

from sqlalchemy import ForeignKey, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from docchat.boundary.db.base import Base, TimestampMixin, UUIDMixin


class PhoneMappingModel(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "phone_document_mapping"
    __table_args__ = (
        UniqueConstraint("phone_number", "source_id", name="uq_phone_document_mapping_phone_source"),
    )

    phone_number: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    source_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("rag_files.id", ondelete="CASCADE"),
        nullable=True,
    )
    intent: Mapped[str | None] = mapped_column(Text, nullable=True)
    system_prompt: Mapped[str | None] = mapped_column(Text, nullable=True)
