"""
Health check API endpoints.

Routes: GET /health, GET /health/db

Dependencies: fastapi, sqlalchemy
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.boundary.db import get_async_db


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/db", response_model=HealthResponse)
async def health_check_db(db: AsyncSession = Depends(get_async_db)) -> HealthResponse:
    """Database health check; a failing query surfaces as a 500."""
    await db.execute(text("SELECT 1"))
    return HealthResponse(status="healthy", message="Database connection OK")
