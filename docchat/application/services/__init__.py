"""Application services orchestrating the core pipeline for the HTTP layer."""

from docchat.application.services.auto_responder import AutoResponder
from docchat.application.services.chat_service import ChatService
from docchat.application.services.inbound_message_service import InboundMessageService
from docchat.application.services.ingestion_service import IngestionService
from docchat.application.services.mapping_service import MappingService

__all__ = ["AutoResponder", "ChatService", "InboundMessageService", "IngestionService", "MappingService"]
