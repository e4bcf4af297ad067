"""Domain types for check-in questionnaires, submissions and progress.

These are plain in-memory records. The persistence layer hands already-fetched
documents to the scoring and progress services, which only read them.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Union

# Importance assigned to a question that carries no explicit weight
DEFAULT_QUESTION_WEIGHT = 5

# Raw answer values as submitted by clients
AnswerValue = Union[str, int, float, bool, None]


class QuestionType(str, Enum):
    """Question input types supported by check-in forms."""

    SCALE = "scale"
    RATING = "rating"
    NUMBER = "number"
    MULTIPLE_CHOICE = "multiple_choice"
    SELECT = "select"
    BOOLEAN = "boolean"
    TEXT = "text"
    TEXTAREA = "textarea"


class TrafficLight(str, Enum):
    """Traffic light status shown to coaches."""

    RED = "red"
    ORANGE = "orange"
    GREEN = "green"
    GREY = "grey"  # Unscored question


class Trend(str, Enum):
    """Direction of travel for a score or measurement."""

    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


@dataclass(frozen=True)
class PlainOption:
    """Choice option stored as a bare string."""

    text: str

    @property
    def value(self) -> str:
        return self.text

    @property
    def weight(self) -> None:
        return None


@dataclass(frozen=True)
class WeightedOption:
    """Choice option stored as an object, optionally carrying its own score."""

    text: str
    value: str | None = None
    weight: float | None = None


Option = Union[PlainOption, WeightedOption]


def normalize_option(raw: Any) -> Option:
    """Convert a stored option into a PlainOption or WeightedOption.

    Options arrive as bare strings, as dicts (``{"text", "value", "weight"}``,
    with ``label`` accepted for ``text``) or as already-built option objects.
    """
    if isinstance(raw, (PlainOption, WeightedOption)):
        return raw
    if isinstance(raw, dict):
        text = raw.get("text") or raw.get("label")
        value = raw.get("value")
        weight = raw.get("weight")
        return WeightedOption(
            text="" if text is None else str(text),
            value=None if value is None else str(value),
            weight=weight if isinstance(weight, (int, float)) and not isinstance(weight, bool) else None,
        )
    # Pydantic option models and anything else with the same attributes
    if hasattr(raw, "text"):
        return normalize_option(
            {
                "text": getattr(raw, "text", None),
                "value": getattr(raw, "value", None),
                "weight": getattr(raw, "weight", None),
            }
        )
    return PlainOption(text=str(raw))


def option_matches(option: Option, selected: str) -> bool:
    """Check whether a selected answer refers to this option."""
    if isinstance(option, PlainOption):
        return option.text == selected
    return option.value == selected or option.text == selected


def is_unanswered(value: AnswerValue) -> bool:
    """An answer is unanswered when it is None or an empty string."""
    return value is None or value == ""


@dataclass(frozen=True)
class Question:
    """A check-in question as configured by a coach.

    ``question_weight`` and ``weight`` are alternative field names found on
    stored questions; ``question_weight`` wins when both are set. A weight of
    0 marks the question as unscored.
    """

    id: str
    text: str
    type: str
    options: tuple[Option, ...] = ()
    question_weight: float | None = None
    weight: float | None = None
    yes_is_positive: bool | None = None
    required: bool | None = None
    is_required: bool | None = None

    @property
    def effective_weight(self) -> float:
        """Weight used when scoring. Textarea questions are never scored."""
        if self.type == QuestionType.TEXTAREA.value:
            return 0
        if self.question_weight is not None:
            return self.question_weight
        if self.weight is not None:
            return self.weight
        return DEFAULT_QUESTION_WEIGHT

    @property
    def is_mandatory(self) -> bool:
        """Questions are required unless explicitly marked otherwise."""
        return self.required is not False and self.is_required is not False


@dataclass(frozen=True)
class Answer:
    """A client's answer to one question."""

    question_id: str
    value: AnswerValue = None
    comment: str | None = None


@dataclass(frozen=True)
class AnnotatedResponse:
    """An answer together with the score and weight computed at submission.

    Older stored responses may lack text, type, score or weight; readers
    fill those in with defaults rather than re-scoring.
    """

    question_id: str
    question_text: str | None
    type: str | None
    answer: AnswerValue
    score: float | None
    weight: float | None
    comment: str | None = None


@dataclass(frozen=True)
class Submission:
    """A scored check-in submission."""

    score: int
    total_questions: int
    answered_questions: int
    responses: tuple[AnnotatedResponse, ...] = ()
    submitted_at: datetime | None = None


@dataclass(frozen=True)
class SubmissionRecord:
    """A stored submission as read back for progress views."""

    submitted_at: datetime
    responses: tuple[AnnotatedResponse, ...] = ()
    id: str | None = None
    assignment_id: str | None = None
    form_id: str | None = None
    score: int | None = None


@dataclass(frozen=True)
class Measurement:
    """A body measurement entry (onboarding baseline or regular check)."""

    date: datetime
    body_weight: float | None = None
    is_baseline: bool = False
