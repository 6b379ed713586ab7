# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring.
# =============================================================================

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app import __version__
from app.dependencies import DatabaseDep, SettingsDep

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str
    database: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check(database: DatabaseDep, app_settings: SettingsDep):
    """
    Health check endpoint.

    Reports whether the contacts database has been opened yet. The
    connection is lazy, so "closed" is normal before the first request.
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=app_settings.ENVIRONMENT,
        version=__version__,
        database="open" if database.is_open else "closed",
    )
