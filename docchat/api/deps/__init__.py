"""FastAPI dependencies."""

from docchat.api.deps.dependencies import (
    ServiceCache,
    build_chat_service,
    get_auto_responder,
    get_chat_service,
    get_inbound_message_service,
    get_ingestion_service,
    get_mapping_service,
    get_prompt_mapping_service,
    get_service_cache,
    get_session_factory,
    get_settings_dependency,
)

__all__ = [
    "ServiceCache",
    "build_chat_service",
    "get_auto_responder",
    "get_chat_service",
    "get_inbound_message_service",
    "get_ingestion_service",
    "get_mapping_service",
    "get_prompt_mapping_service",
    "get_service_cache",
    "get_session_factory",
    "get_settings_dependency",
]
