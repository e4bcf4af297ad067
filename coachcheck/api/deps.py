"""FastAPI dependency injection utilities."""

from typing import Annotated

from fastapi import Depends

from coachcheck.services.checkin import CheckInService
from coachcheck.services.insights import InsightService


def get_checkin_service() -> CheckInService:
    """Provide a check-in service using the configured scoring profile."""
    return CheckInService()


def get_insight_service() -> InsightService:
    """Provide the insight service.

    Override this dependency to plug in a real AI client.
    """
    return InsightService()


CheckInServiceDep = Annotated[CheckInService, Depends(get_checkin_service)]
InsightServiceDep = Annotated[InsightService, Depends(get_insight_service)]
