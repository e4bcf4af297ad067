"""Per-question answer scoring.

Every answered question is converted into a score on a 0-10 scale plus the
weight it carries in the submission total:

- scale / rating: the value itself when it lies in 1-10, otherwise 0
- number: 0-100 mapped onto 1-10, other values divided by 10 and clamped
- multiple_choice / select: the option's own weight, or its position
  (first option 1, last option 10)
- boolean: 8 for the positive answer, 3 for the negative one
- text: 5 for any non-blank text
- textarea: never scored (score 0, weight 0)
- anything else: 5 for answering

Scoring is total over its input: malformed values score 0 and never raise.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any

from coachcheck.models.checkin import (
    AnswerValue,
    Question,
    QuestionType,
    is_unanswered,
    normalize_option,
    option_matches,
)

logger = logging.getLogger(__name__)

MIN_ITEM_SCORE = 1
MAX_ITEM_SCORE = 10
NEUTRAL_SCORE = 5

BOOLEAN_POSITIVE_SCORE = 8
BOOLEAN_NEGATIVE_SCORE = 3

YES_STRINGS = ("yes", "Yes")

UNSCORED_TYPES = frozenset({QuestionType.TEXTAREA.value})


@dataclass(frozen=True)
class AnswerScore:
    """Result of scoring a single answer."""

    score: float
    weight: float
    answered: bool

    @property
    def contributes(self) -> bool:
        """Whether this answer counts towards the submission total."""
        return self.answered and self.weight > 0


UNANSWERED = AnswerScore(score=0, weight=0, answered=False)


def _to_number(value: Any) -> float | None:
    """Coerce an answer to a finite float, or None if it is not numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


class AnswerScorer:
    """Scores one answer against the question it belongs to."""

    @classmethod
    def score(cls, question: Question, value: AnswerValue) -> AnswerScore:
        """Score an answer value for a question.

        Args:
            question: The question being answered
            value: Raw answer value (string, number, boolean or None)

        Returns:
            AnswerScore with a 0-10 score, the effective weight and whether
            the answer counts as answered
        """
        if is_unanswered(value):
            return UNANSWERED

        question_type = getattr(question.type, "value", question.type)
        if question_type in UNSCORED_TYPES:
            return AnswerScore(score=0, weight=0, answered=True)

        weight = question.effective_weight

        if question_type in (QuestionType.SCALE.value, QuestionType.RATING.value):
            score = cls._score_scale(value)
        elif question_type == QuestionType.NUMBER.value:
            score = cls._score_number(value)
        elif question_type in (
            QuestionType.MULTIPLE_CHOICE.value,
            QuestionType.SELECT.value,
        ):
            score = cls._score_choice(question, value)
            if score is None:
                logger.debug(
                    f"Answer {value!r} matches no option of question {question.id}"
                )
                return UNANSWERED
        elif question_type == QuestionType.BOOLEAN.value:
            score = cls._score_boolean(question, value)
        elif question_type == QuestionType.TEXT.value:
            if not str(value).strip():
                return UNANSWERED
            score = NEUTRAL_SCORE
        else:
            # Unknown types get full credit for answering
            score = NEUTRAL_SCORE

        return AnswerScore(score=score, weight=weight, answered=True)

    @classmethod
    def _score_scale(cls, value: AnswerValue) -> float:
        """Scale answers are already on 1-10."""
        number = _to_number(value)
        if number is None or number < MIN_ITEM_SCORE or number > MAX_ITEM_SCORE:
            return 0
        return number

    @classmethod
    def _score_number(cls, value: AnswerValue) -> float:
        """Map a free numeric answer onto 1-10."""
        number = _to_number(value)
        if number is None:
            return 0
        if 0 <= number <= 100:
            return MIN_ITEM_SCORE + (number / 100) * 9
        return min(MAX_ITEM_SCORE, max(MIN_ITEM_SCORE, number / 10))

    @classmethod
    def _score_choice(cls, question: Question, value: AnswerValue) -> float | None:
        """Score a selected option, or None when nothing matches."""
        options = [normalize_option(option) for option in question.options]
        if not options:
            return None

        selected = str(value)
        selected_index = next(
            (i for i, option in enumerate(options) if option_matches(option, selected)),
            -1,
        )
        if selected_index < 0:
            return None

        option_weight = options[selected_index].weight
        if option_weight is not None:
            return min(MAX_ITEM_SCORE, max(0, option_weight))

        num_options = len(options)
        if num_options == 1:
            return NEUTRAL_SCORE
        return MIN_ITEM_SCORE + (selected_index / (num_options - 1)) * 9

    @classmethod
    def _score_boolean(cls, question: Question, value: AnswerValue) -> float:
        """Yes/no answers, honouring whether yes is the good answer."""
        yes_is_positive = (
            True if question.yes_is_positive is None else question.yes_is_positive
        )
        is_yes = value is True or value in YES_STRINGS

        if yes_is_positive:
            return BOOLEAN_POSITIVE_SCORE if is_yes else BOOLEAN_NEGATIVE_SCORE
        return BOOLEAN_NEGATIVE_SCORE if is_yes else BOOLEAN_POSITIVE_SCORE


def score_answer(question: Question, value: AnswerValue) -> AnswerScore:
    """Score a single answer. See AnswerScorer.score."""
    return AnswerScorer.score(question, value)
