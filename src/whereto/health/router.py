"""Liveness, readiness and version probes."""

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from whereto.config import get_settings
from whereto.database import get_session
from whereto.redis_client import redis_reachable

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}


async def _database_ok(db: AsyncSession) -> bool:
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.warning("readiness_database_failed", exc_info=True)
        return False
    return True


@router.get("/ready")
async def readiness(
    db: AsyncSession = Depends(get_session),  # noqa: B008
) -> dict[str, object]:
    """Report each dependency as ``ok`` or ``error``; failure details stay in the logs."""
    checks = {
        "database": "ok" if await _database_ok(db) else "error",
        "redis": "ok" if await redis_reachable() else "error",
    }
    ready = all(status == "ok" for status in checks.values())
    return {"status": "ready" if ready else "degraded", "checks": checks}


@router.get("/version")
async def version() -> dict[str, str]:
    settings = get_settings()
    return {"version": settings.app_version, "environment": settings.environment}
