"""
Inbound WhatsApp message ORM model.

One row per message delivered by the messaging provider's webhook. The
provider's `message_id` is unique, so a redelivered message never creates
a second row.

Dependencies: sqlalchemy, docchat.boundary.db.base
System role: Inbound message log
"""

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from docchat.boundary.db.base import Base, TimestampMixin, UUIDMixin, utc_now


class WhatsAppMessageModel(Base, UUIDMixin, TimestampMixin):
    """
    Inbound message.

    Attributes:
        message_id: Provider message id (unique)
        from_number: Sender
        to_number: Business number the message was sent to
        content_type: Provider content type, e.g. "text"
        content_text: Message text, None for non-text content
        sender_name: Display name reported by the provider
        received_at: Provider receive time, or the time the webhook ran
    """

    __tablename__ = "whatsapp_messages"

    message_id: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    channel: Mapped[str] = mapped_column(String(32), nullable=False, default="whatsapp")
    from_number: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    to_number: Mapped[str | None] = mapped_column(String(32), nullable=True)
    content_type: Mapped[str] = mapped_column(String(32), nullable=False, default="text")
    content_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    sender_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    event: Mapped[str | None] = mapped_column(String(64), nullable=True)
    received_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
        index=True,
    )
