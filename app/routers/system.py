from datetime import datetime, timezone

from fastapi import APIRouter, Request

from app.dependencies import SettingsDep

router = APIRouter(tags=["system"])

SERVICE_NAME = "bliss-server"
API_VERSION = "1.0.0"


@router.get("/health")
async def health(request: Request, settings: SettingsDep) -> dict:
    monitor = request.app.state.session_monitor
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
        "service_session": monitor is not None and monitor.running,
    }


@router.get("/api")
async def api_index() -> dict:
    return {
        "message": "The Bliss Massage at Home - API Server",
        "version": API_VERSION,
        "endpoints": {
            "health": "/health",
            "api": "/api",
            "auth": "/api/auth",
            "pricing": "/api/pricing",
            "secure_bookings": "/api/secure-bookings/bookings",
        },
    }
