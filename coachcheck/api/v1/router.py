"""API v1 router aggregating all endpoints."""

from fastapi import APIRouter

from coachcheck.api.v1 import checkins, health, trends

api_router = APIRouter()

# Health check
api_router.include_router(
    health.router,
    prefix="/health",
    tags=["health"],
)

# Check-in scoring and progress
api_router.include_router(
    checkins.router,
    prefix="/checkins",
    tags=["checkins"],
)

# Trends
api_router.include_router(
    trends.router,
    prefix="/trends",
    tags=["trends"],
)
