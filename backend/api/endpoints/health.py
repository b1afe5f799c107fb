"""
Health check endpoints
"""

from fastapi import APIRouter
from datetime import datetime, timezone

from core.config import settings

router = APIRouter()


@router.get("/status")
async def health_status():
    """Get detailed health status"""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.ENVIRONMENT,
        "default_disk": settings.FILESYSTEM_DISK,
        "version": "0.1.0"
    }
