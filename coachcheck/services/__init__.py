"""Business logic services."""

from coachcheck.services.checkin import CheckInService, ClientProgress, ScoredCheckIn
from coachcheck.services.insights import InsightService
from coachcheck.services.timeline import build_question_timeline
from coachcheck.services.trends import MetricDirection, classify_trend
from coachcheck.services.validation import MissingRequiredAnswersError

__all__ = [
    "CheckInService",
    "ClientProgress",
    "ScoredCheckIn",
    "InsightService",
    "build_question_timeline",
    "MetricDirection",
    "classify_trend",
    "MissingRequiredAnswersError",
]
