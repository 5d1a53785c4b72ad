"""
Health check and status endpoints
"""
from fastapi import APIRouter
from datetime import datetime, timezone
from ads_monitor.config import get_settings
from ads_monitor import __version__

settings = get_settings()

router = APIRouter()


@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": __version__
    }


@router.get("/status")
async def get_status():
    """Get system status"""
    return {
        "app_name": settings.app_name,
        "version": __version__,
        "environment": settings.environment,
        "configured": {
            "access_token": bool(settings.facebook_access_token),
            "accounts": len(settings.account_ids()),
        },
        "graph_api_version": settings.graph_api_version,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
