"""Health check endpoint for monitoring application status."""

import time

from fastapi import APIRouter, Depends, status

from shortlink.core.config import settings
from shortlink.db.base import Database
from shortlink.db.session import get_database

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Get system health status",
    response_description="Health status of the service and its store"
)
async def health_check(database: Database = Depends(get_database)):
    """Check that the service is up and the mapping store answers."""
    database_status = await database.check_connection()

    return {
        "status": "healthy" if database_status["status"] == "healthy" else "degraded",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT.value,
        "timestamp": time.time(),
        "components": {"database": database_status},
    }
