"""Health check endpoints."""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import get_settings
from ..database import check_db, get_async_db
from ..logging_config import get_logger
from ..utils.error_handler import get_error_handler_health

router = APIRouter(prefix="/health", tags=["health"])
logger = get_logger(__name__)

SERVICE_NAME = "adaptiq"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/")
async def health_check() -> Dict[str, Any]:
    """Basic health check endpoint."""
    logger.info("Health check requested")
    return {
        "status": "healthy",
        "timestamp": _now(),
        "service": SERVICE_NAME,
        "version": get_settings().app_version,
    }


@router.get("/ready")
async def readiness_check(db: AsyncSession = Depends(get_async_db)) -> Dict[str, Any]:
    """Readiness check including database connectivity."""
    try:
        await check_db(db)
        db_status = "connected"
    except Exception as e:
        db_status = f"error: {e}"
        logger.error("Readiness check failed", error=str(e))

    return {
        "status": "ready" if db_status == "connected" else "not_ready",
        "timestamp": _now(),
        "service": SERVICE_NAME,
        "version": get_settings().app_version,
        "checks": {
            "database": db_status,
            "error_handler": get_error_handler_health(),
        },
    }


@router.get("/live")
async def liveness_check() -> Dict[str, Any]:
    """Liveness check for container orchestration."""
    return {
        "status": "alive",
        "timestamp": _now(),
        "service": SERVICE_NAME,
    }
