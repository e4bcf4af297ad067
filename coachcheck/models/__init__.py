"""Domain models."""

from coachcheck.models.checkin import (
    DEFAULT_QUESTION_WEIGHT,
    AnnotatedResponse,
    Answer,
    Measurement,
    Option,
    PlainOption,
    Question,
    QuestionType,
    Submission,
    SubmissionRecord,
    TrafficLight,
    Trend,
    WeightedOption,
    normalize_option,
)

__all__ = [
    "DEFAULT_QUESTION_WEIGHT",
    "AnnotatedResponse",
    "Answer",
    "Measurement",
    "Option",
    "PlainOption",
    "Question",
    "QuestionType",
    "Submission",
    "SubmissionRecord",
    "TrafficLight",
    "Trend",
    "WeightedOption",
    "normalize_option",
]
