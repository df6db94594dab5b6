"""
CRUD operations for database models.

Usage:
    from docchat.boundary.db.CRUD import source_crud, chunk_crud

    source = await source_crud.get_by_id(db, source_id)
"""

from docchat.boundary.db.CRUD.base_crud import BaseCRUD
from docchat.boundary.db.CRUD.source_crud import SourceCRUD, source_crud
from docchat.boundary.db.CRUD.chunk_crud import ChunkCRUD, chunk_crud
from docchat.boundary.db.CRUD.phone_mapping_crud import PhoneMappingCRUD, phone_mapping_crud
from docchat.boundary.db.CRUD.message_crud import MessageCRUD, message_crud
from docchat.boundary.db.CRUD.whatsapp_message_crud import WhatsAppMessageCRUD, whatsapp_message_crud

__all__ = [
    "BaseCRUD",
    "SourceCRUD",
    "source_crud",
    "ChunkCRUD",
    "chunk_crud",
    "PhoneMappingCRUD",
    "phone_mapping_crud",
    "MessageCRUD",
    "message_crud",
    "WhatsAppMessageCRUD",
    "whatsapp_message_crud",
]
