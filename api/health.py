"""
Health Check API
Service status plus tenant and certificate totals
"""

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from datetime import datetime, timezone
from typing import Dict
from loguru import logger

from models.database import get_db
from models import Company, User, Certificate
from config import settings

router = APIRouter()

COUNTED_TABLES = {
    "companies": Company,
    "users": User,
    "certificates": Certificate,
}


async def _table_counts(db: AsyncSession) -> Dict[str, int]:
    counts = {}
    for name, model in COUNTED_TABLES.items():
        result = await db.execute(select(func.count()).select_from(model))
        counts[name] = result.scalar_one()
    return counts


@router.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)) -> Dict:
    """
    Health check
    Database reachability and row totals of the tenant tables
    """

    status = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.ENVIRONMENT,
        "version": settings.API_VERSION,
        "checks": {}
    }

    try:
        status["counts"] = await _table_counts(db)
        status["checks"]["database"] = "healthy"
    except SQLAlchemyError as e:
        logger.error(f"Health check database failure: {e}")
        status["checks"]["database"] = f"unhealthy: {str(e)}"
        status["status"] = "degraded"

    return status

@router.get("/health/quick")
async def quick_health() -> Dict:
    """No DB calls"""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
