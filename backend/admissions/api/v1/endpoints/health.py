"""Health check endpoint."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from admissions.config import settings
from admissions.db.session import get_session

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(db: Annotated[AsyncSession, Depends(get_session)]) -> dict:
    """
    Report API and database health along with the active eligibility settings.

    A failing database check degrades the status instead of failing the request.
    """
    try:
        await db.execute(text("SELECT 1"))
        db_status = "healthy"
    except (SQLAlchemyError, OSError) as e:
        logger.warning(f"Database health check failed: {str(e)}")
        db_status = f"unhealthy: {str(e)}"

    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "api": "healthy",
        "database": db_status,
        "environment": settings.ENVIRONMENT,
        "eligibility": {
            "policy": settings.ELIGIBILITY_POLICY.value,
            "status_mode": settings.ELIGIBILITY_STATUS_MODE.value,
            "auto_evaluate_on_submit": settings.AUTO_EVALUATE_ON_SUBMIT,
        },
    }
