"""
Health check endpoints for load balancers and monitoring.
"""

from fastapi import APIRouter, Depends, HTTPException

from api.deps import get_settings
from backend.settings import Settings

SERVICE_NAME = "hierarchy-cascade-api"

router = APIRouter(tags=["Health"])


@router.get("/health")
def health():
    """Liveness: the process is up."""
    return {"status": "ok", "service": SERVICE_NAME}


@router.get("/health/ready")
def readiness(settings: Settings = Depends(get_settings)):
    """
    Readiness: the store is configured.

    Raises:
        HTTPException: 503 if Supabase credentials are missing
    """
    if not settings.supabase_url or not settings.supabase_key:
        raise HTTPException(status_code=503, detail="Supabase credentials not configured")
    return {"status": "ready", "service": SERVICE_NAME, "environment": settings.environment}
