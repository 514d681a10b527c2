"""Health check endpoints."""

from fastapi import APIRouter, Response

from ..db.connection import check_health
from ..core.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(tags=["health"])


@router.get("/healthz")
async def health_check() -> dict[str, str]:
    """Basic health check."""
    return {"status": "ok", "service": "matcha"}


@router.get("/readyz")
async def readiness_check(response: Response) -> dict[str, str]:
    """Readiness check including database connectivity."""
    if await check_health():
        return {"status": "ready", "database": "connected"}
    logger.error("readiness_check_failed")
    response.status_code = 503
    return {"status": "not ready", "database": "unavailable"}


@router.get("/livez")
async def liveness_check() -> dict[str, str]:
    """Liveness check."""
    return {"status": "alive"}
