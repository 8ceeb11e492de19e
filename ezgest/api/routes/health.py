# ezgest/api/routes/health.py
from datetime import datetime, timezone
from typing import Any, Dict
from fastapi import APIRouter
from loguru import logger

from ...config.database import db_connection
from ...config.setting import settings
from ...models.database import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Basic health check"""
    return HealthResponse(
        status="healthy",
        service="ezgest-api",
        timestamp=datetime.now(timezone.utc).isoformat(),
        database_connected=db_connection.health_check()
    )


@router.get("/ready")
def readiness_check() -> Dict[str, Any]:
    """Readiness check with database connectivity"""
    db_healthy = db_connection.health_check()
    if not db_healthy:
        logger.warning("Readiness check failed: database disconnected")

    return {
        "status": "ready" if db_healthy else "not_ready",
        "database": "connected" if db_healthy else "disconnected",
        "database_name": settings.DATABASE_NAME,
        "version": settings.API_VERSION,
        "ready": db_healthy
    }
