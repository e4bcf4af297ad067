"""Health check endpoints."""

from fastapi import APIRouter, status
from pydantic import BaseModel

from coachcheck import __version__
from coachcheck.core.config import settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str


class ReadinessResponse(HealthResponse):
    """Readiness response with the scoring configuration in effect."""

    version: str
    scoring_profile: str
    insights_enabled: bool


@router.get(
    "",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
    description="Returns service health status",
)
async def health_check() -> HealthResponse:
    """Check if the service is healthy."""
    return HealthResponse(status="ok")


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    status_code=status.HTTP_200_OK,
    summary="Readiness check",
    description="Returns service readiness and active scoring configuration",
)
async def readiness_check() -> ReadinessResponse:
    """Check if the service is ready to accept requests.

    The engine has no storage of its own, so readiness only reports the
    configuration it will score with.

    Returns:
        Readiness status response
    """
    return ReadinessResponse(
        status="ok",
        version=__version__,
        scoring_profile=settings.default_scoring_profile,
        insights_enabled=settings.insights_enabled,
    )
