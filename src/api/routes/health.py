"""Health check endpoints."""

from datetime import datetime

import structlog
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from infrastructure.database.session import get_async_session

logger = structlog.get_logger()

router = APIRouter(tags=["health"])

SERVICE_VERSION = "1.0.0"


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str
    environment: str
    database: str | None = None
    storage_backend: str | None = None


@router.get("/health", response_model=HealthResponse, summary="Basic health check")
async def health_check() -> HealthResponse:
    """Liveness probe. Does not touch the database."""
    return HealthResponse(
        status="healthy",
        version=SERVICE_VERSION,
        timestamp=datetime.utcnow().isoformat(),
        environment=settings.app_env,
    )


@router.get(
    "/health/detailed",
    response_model=HealthResponse,
    summary="Detailed health check",
)
async def detailed_health_check(
    db: AsyncSession = Depends(get_async_session),
) -> HealthResponse:
    """Readiness probe including database connectivity."""
    try:
        await db.execute(text("SELECT 1"))
        db_status = "healthy"
    except (SQLAlchemyError, OSError) as e:
        logger.warning("health_database_unreachable", error=str(e))
        db_status = f"unhealthy: {e}"

    return HealthResponse(
        status="healthy" if db_status == "healthy" else "degraded",
        version=SERVICE_VERSION,
        timestamp=datetime.utcnow().isoformat(),
        environment=settings.app_env,
        database=db_status,
        storage_backend=settings.storage_backend,
    )
