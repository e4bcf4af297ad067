"""Pydantic schemas for request/response validation."""

from coachcheck.schemas.checkin import (
    AnnotatedResponseOut,
    AnswerIn,
    BodyWeightOut,
    MeasurementIn,
    ProgressRequest,
    ProgressResponse,
    QuestionIn,
    ScoreCheckInRequest,
    ScoredSubmissionResponse,
    SubmissionRecordIn,
    TrendRequest,
    TrendResponse,
)

__all__ = [
    "AnnotatedResponseOut",
    "AnswerIn",
    "BodyWeightOut",
    "MeasurementIn",
    "ProgressRequest",
    "ProgressResponse",
    "QuestionIn",
    "ScoreCheckInRequest",
    "ScoredSubmissionResponse",
    "SubmissionRecordIn",
    "TrendRequest",
    "TrendResponse",
]
