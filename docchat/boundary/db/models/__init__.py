"""
Database models package.

Dependencies: sqlalchemy, docchat.boundary.db.base
System role: ORM definitions for sources, chunks, phone mappings, chat history
and inbound WhatsApp messages
"""

from docchat.boundary.db.models.source_model import SourceModel
from docchat.boundary.db.models.chunk_model import ChunkModel
from docchat.boundary.db.models.phone_mapping_model import PhoneMappingModel
from docchat.boundary.db.models.message_model import MessageModel
from docchat.boundary.db.models.whatsapp_message_model import WhatsAppMessageModel

__all__ = ["SourceModel", "ChunkModel", "PhoneMappingModel", "MessageModel", "WhatsAppMessageModel"]
