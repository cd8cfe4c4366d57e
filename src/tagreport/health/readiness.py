"""
Liveness and readiness checks
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .. import __version__
from ..config import settings
from ..database.core import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])

REQUIRED_TABLES = ("users", "test_sessions", "test_results", "revoked_tokens")


@router.get("")
async def health_check():
    """Process is up; does not touch the database"""
    return {
        "status": "ok",
        "service": "tagreport",
        "version": __version__,
        "environment": settings.environment,
    }


@router.get("/ready")
async def readiness_check(db: AsyncSession = Depends(get_db)):
    """Database reachable and migrated"""
    checks = {"database": False, "migrations": False}
    details = {}

    try:
        result = await db.execute(text("SELECT 1"))
        checks["database"] = result.scalar() == 1

        tables = await db.execute(
            text(
                "SELECT table_name FROM information_schema.tables "
                "WHERE table_name = ANY(:names)"
            ),
            {"names": list(REQUIRED_TABLES)}
        )
        present = {row[0] for row in tables.all()}
        missing = sorted(set(REQUIRED_TABLES) - present)
        checks["migrations"] = not missing
        if missing:
            details["missing_tables"] = missing
    except SQLAlchemyError as e:
        logger.error(f"Readiness check failed: {e}")
        details["database"] = {"error": str(e)}

    ready = all(checks.values())
    return JSONResponse(
        status_code=200 if ready else 503,
        content={"ready": ready, "checks": checks, "details": details}
    )
