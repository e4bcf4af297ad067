"""Trend classification endpoints."""

from fastapi import APIRouter

from coachcheck.schemas.checkin import TrendRequest, TrendResponse
from coachcheck.services.trends import DEFAULT_TREND_DELTA, baseline_of, classify_trend

router = APIRouter()


@router.post(
    "/classify",
    response_model=TrendResponse,
)
async def classify(request: TrendRequest) -> TrendResponse:
    """Classify a score or measurement against its history.

    ``direction`` decides whether a rise counts as improving
    (``higher_is_better``, e.g. check-in scores) or declining
    (``lower_is_better``, e.g. body weight).
    """
    delta = DEFAULT_TREND_DELTA if request.delta is None else request.delta
    trend = classify_trend(
        request.current,
        request.historical,
        direction=request.direction,
        delta=delta,
    )
    return TrendResponse(
        trend=trend,
        baseline=baseline_of(request.current, request.historical),
    )
