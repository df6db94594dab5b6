"""
FastAPI application with assembled routers.

Dependencies: fastapi, uvicorn, docchat.api, docchat.observability
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docchat.api.deps import get_service_cache
from docchat.api.errors import register_exception_handlers
from docchat.api.routers import (
    chat_router,
    documents_router,
    health_router,
    ocr_router,
    phone_mappings_router,
    system_prompt_router,
    whatsapp_router,
    whatsapp_webhook_router,
)
from docchat.boundary.db.connection import get_async_engine
from docchat.boundary.db.create_tables import create_all_tables
from docchat.configs import get_settings
from docchat.observability import configure_logging
from docchat.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging, optionally creates tables, and releases provider
    clients on shutdown.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    if settings.database.auto_create_tables:
        await create_all_tables()

    logger.info(f"{__name__}:lifespan - {settings.app_name} started", extra={"environment": settings.environment})
    yield

    await get_service_cache().aclose()
    await get_async_engine().dispose()
    logger.info(f"{__name__}:lifespan - Service cache cleared, engine disposed")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="Retrieval-augmented chat over ingested documents",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    # Added last so it runs first and the ID is bound for request logging
    app.add_middleware(CorrelationMiddleware)

    register_exception_handlers(app)

    for router in (
        health_router,
        chat_router,
        documents_router,
        ocr_router,
        phone_mappings_router,
        system_prompt_router,
        whatsapp_router,
        whatsapp_webhook_router,
    ):
        app.include_router(router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("docchat.main:app", host="0.0.0.0", port=8000)
