"""Pydantic schemas for check-in scoring and progress operations.

Payloads use the camelCase field names stored with forms and submissions
(``questionWeight``, ``yesIsPositive``, ``submittedAt``); snake_case names
are accepted as well.
"""

from datetime import datetime
from typing import Union

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from coachcheck.models.checkin import (
    AnnotatedResponse,
    Answer,
    Measurement,
    Question,
    SubmissionRecord,
    TrafficLight,
    Trend,
    normalize_option,
)
from coachcheck.services.trends import MetricDirection

AnswerValueIn = Union[bool, int, float, str, None]


class CamelModel(BaseModel):
    """Base schema with camelCase aliases."""

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


# ============================================================================
# Scoring
# ============================================================================


class OptionIn(CamelModel):
    """Choice option stored as an object."""

    text: str | None = None
    label: str | None = None
    value: str | int | float | None = None
    weight: float | None = None


class QuestionIn(CamelModel):
    """Question definition as configured on a form."""

    id: str
    text: str = ""
    type: str
    options: list[Union[str, int, float, OptionIn]] = Field(default_factory=list)
    question_weight: float | None = Field(None, ge=0)
    weight: float | None = Field(None, ge=0)
    yes_is_positive: bool | None = None
    required: bool | None = None
    is_required: bool | None = None

    def to_domain(self) -> Question:
        return Question(
            id=self.id,
            text=self.text,
            type=self.type,
            options=tuple(
                normalize_option(o.model_dump() if isinstance(o, OptionIn) else o)
                for o in self.options
            ),
            question_weight=self.question_weight,
            weight=self.weight,
            yes_is_positive=self.yes_is_positive,
            required=self.required,
            is_required=self.is_required,
        )


class AnswerIn(CamelModel):
    """A client's answer to one question."""

    question_id: str
    answer: AnswerValueIn = None
    type: str | None = None
    comment: str | None = None

    def to_domain(self) -> Answer:
        return Answer(question_id=self.question_id, value=self.answer, comment=self.comment)


class ScoreCheckInRequest(CamelModel):
    """Request to score a check-in submission."""

    questions: list[QuestionIn] = Field(..., min_length=1)
    answers: list[AnswerIn] = Field(default_factory=list)
    submitted_at: datetime | None = None
    scoring_profile: str | None = None


class AnnotatedResponseOut(CamelModel):
    """An answer with its computed score and weight."""

    question_id: str
    question_text: str | None = None
    type: str | None = None
    answer: AnswerValueIn = None
    score: float | None = None
    weight: float | None = None
    comment: str | None = None

    @classmethod
    def from_domain(cls, response: AnnotatedResponse) -> "AnnotatedResponseOut":
        return cls(
            question_id=response.question_id,
            question_text=response.question_text,
            type=response.type,
            answer=response.answer,
            score=response.score,
            weight=response.weight,
            comment=response.comment,
        )


class ScoredSubmissionResponse(CamelModel):
    """Scored submission ready to be stored."""

    score: int
    total_questions: int
    answered_questions: int
    responses: list[AnnotatedResponseOut]
    submitted_at: datetime | None = None
    status: TrafficLight
    scoring_profile: str


class MissingAnswersResponse(BaseModel):
    """Validation error listing unanswered required questions."""

    message: str
    missing_questions: list[int]


class ScoringProfileResponse(CamelModel):
    """Traffic light profile."""

    key: str
    name: str
    description: str
    red_max: int
    orange_max: int
    ranges: str


# ============================================================================
# Progress
# ============================================================================


class StoredResponseIn(AnnotatedResponseOut):
    """A stored annotated response, as read back from a submission."""

    def to_domain(self) -> AnnotatedResponse:
        return AnnotatedResponse(
            question_id=self.question_id,
            question_text=self.question_text,
            type=self.type,
            answer=self.answer,
            score=self.score,
            weight=self.weight,
            comment=self.comment,
        )


class SubmissionRecordIn(CamelModel):
    """A stored submission."""

    id: str | None = None
    assignment_id: str | None = None
    form_id: str | None = None
    submitted_at: datetime
    score: int | None = None
    responses: list[StoredResponseIn] = Field(default_factory=list)

    def to_domain(self) -> SubmissionRecord:
        return SubmissionRecord(
            submitted_at=self.submitted_at,
            responses=tuple(r.to_domain() for r in self.responses),
            id=self.id,
            assignment_id=self.assignment_id,
            form_id=self.form_id,
            score=self.score,
        )


class MeasurementIn(CamelModel):
    """A body measurement entry."""

    date: datetime
    body_weight: float | None = Field(None, gt=0)
    is_baseline: bool = False

    def to_domain(self) -> Measurement:
        return Measurement(
            date=self.date,
            body_weight=self.body_weight,
            is_baseline=self.is_baseline,
        )


class ProgressRequest(CamelModel):
    """Request to build a client's progress view."""

    submissions: list[SubmissionRecordIn] = Field(default_factory=list)
    measurements: list[MeasurementIn] = Field(default_factory=list)


class WeekEntryOut(CamelModel):
    """One cell of the progress grid."""

    week: int
    date: str
    score: float
    status: TrafficLight
    answer: AnswerValueIn = None
    type: str
    weight: float


class QuestionTrackOut(CamelModel):
    """One question's row in the progress grid."""

    question_id: str
    question_text: str
    weeks: list[WeekEntryOut]
    first_seen_week: int
    last_seen_week: int
    is_active: bool
    text_changes: list[str]
    gaps: list[int]


class BodyWeightOut(CamelModel):
    """Body weight change since the baseline. Positive change means weight lost."""

    baseline: float | None = None
    current: float | None = None
    change: float = 0
    trend: Trend | None = None


class ProgressResponse(CamelModel):
    """Progress view for one client."""

    total_weeks: int
    week_dates: list[str]
    questions: list[QuestionTrackOut]
    scores: list[int]
    latest_score: int | None = None
    score_trend: Trend
    progress_trend: Trend
    body_weight: BodyWeightOut


# ============================================================================
# Trends
# ============================================================================


class TrendRequest(CamelModel):
    """Request to classify a value against its history."""

    current: float
    historical: list[float] = Field(default_factory=list)
    direction: MetricDirection = MetricDirection.HIGHER_IS_BETTER
    delta: float | None = Field(None, ge=0)


class TrendResponse(CamelModel):
    """Trend classification result."""

    trend: Trend
    baseline: float
