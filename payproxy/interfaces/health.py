"""
Health check router.

Provides a simple health endpoint for liveness/readiness probes.
Reports which required variables are configured, never their values.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from payproxy.core.config import Settings
from payproxy.interfaces.gateway.dependencies import get_app_settings
from payproxy.interfaces.gateway.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns application health status and configuration presence.",
)
def health_check(settings: Settings = Depends(get_app_settings)) -> HealthResponse:
    """Return current application health status."""
    return HealthResponse(
        status="OK",
        timestamp=datetime.now(timezone.utc),
        environment=settings.environment_report(),
    )
