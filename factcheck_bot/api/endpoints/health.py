"""Health check endpoints."""

from typing import Dict

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ...infrastructure.dependencies import ServiceContainer, get_service_container

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    components: Dict[str, bool]


@router.get("/health", response_model=HealthResponse)
async def health_check(container: ServiceContainer = Depends(get_service_container)) -> HealthResponse:
    """Check service health and the availability of external adapters."""
    try:
        components = container.status()
    except Exception:
        components = {}

    return HealthResponse(
        status="healthy",
        version=container.config.app_version,
        components=components,
    )
