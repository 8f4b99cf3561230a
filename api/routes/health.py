"""
Health Check Route

Simple health check endpoint for liveness checks.
"""

from fastapi import APIRouter

from api.models.responses import HealthResponse


router = APIRouter(tags=["health"])


@router.get("/", response_model=HealthResponse)
@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Health check endpoint, also served at the root path.

    Returns service status for liveness checks.
    """
    return HealthResponse(
        ok=True,
        service="merkledrop-api",
        version="v1",
    )
