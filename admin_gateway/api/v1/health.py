"""
Health check endpoints for monitoring application status
"""
from fastapi import APIRouter, Depends
from datetime import datetime, timezone

from admin_gateway.core.config import Settings, get_settings
from admin_gateway.models.common import HealthResponse

VERSION = "1.0.0"

router = APIRouter(prefix="/health")


@router.get("", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint to verify the gateway is running
    """
    return HealthResponse(
        status="healthy",
        message="Admin Gateway is running",
        timestamp=datetime.now(timezone.utc),
        version=VERSION,
    )


@router.get("/ready", response_model=HealthResponse)
async def readiness_check(settings: Settings = Depends(get_settings)):
    """
    Readiness check endpoint for Kubernetes deployments
    """
    if not settings.is_configured:
        return HealthResponse(
            status="not_configured",
            message="ADMIN_API is not configured",
            timestamp=datetime.now(timezone.utc),
            version=VERSION,
        )
    return HealthResponse(
        status="ready",
        message="Admin Gateway is ready to accept requests",
        timestamp=datetime.now(timezone.utc),
        version=VERSION,
    )
