"""API routers."""

from .chat import router as chat_router
from .documents import router as documents_router
from .health import router as health_router
from .ocr import router as ocr_router
from .phone_mappings import router as phone_mappings_router
from .system_prompt import router as system_prompt_router
from .whatsapp import router as whatsapp_router
from .whatsapp import webhook_router as whatsapp_webhook_router

__all__ = [
    "chat_router",
    "documents_router",
    "health_router",
    "ocr_router",
    "phone_mappings_router",
    "system_prompt_router",
    "whatsapp_router",
    "whatsapp_webhook_router",
]
