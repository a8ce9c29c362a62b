"""Health check routes."""

from fastapi import APIRouter, Request

from nftclub_api.config import Settings
from nftclub_api.models.health import HealthCheckResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(request: Request) -> HealthCheckResponse:
    """Health check endpoint.

    Returns:
        HealthCheckResponse with status, version and the active user store
    """
    settings: Settings = request.app.state.settings
    store = request.app.state.user_service.store

    return HealthCheckResponse(
        status="ok",
        version=settings.app_version,
        environment=settings.environment,
        store_backend=type(store).__name__,
    )
