"""Submission-level aggregation of answer scores.

The overall check-in score is the weighted mean of the per-question scores,
expressed as a percentage of the maximum (every question scores at most 10):

    score = round(sum(score * weight) / (sum(weight) * 10) * 100)

Only answered questions with a non-zero weight take part. Unanswered
questions are dropped from the stored response list altogether.
"""

from dataclasses import dataclass
from datetime import datetime
from functools import reduce
from typing import Iterable, Mapping, Sequence

from coachcheck.models.checkin import (
    AnnotatedResponse,
    Answer,
    Question,
    Submission,
    is_unanswered,
)
from coachcheck.scoring.answers import MAX_ITEM_SCORE, AnswerScore, AnswerScorer
from coachcheck.utils.rounding import round_half_up


@dataclass(frozen=True)
class _Totals:
    """Running totals folded over a submission's answers."""

    weighted_score: float = 0
    weight: float = 0
    answered: int = 0

    def add(self, result: AnswerScore) -> "_Totals":
        if not result.contributes:
            return self
        return _Totals(
            weighted_score=self.weighted_score + result.score * result.weight,
            weight=self.weight + result.weight,
            answered=self.answered + 1,
        )

    @property
    def percentage(self) -> int:
        if self.weight <= 0:
            return 0
        return round_half_up(
            (self.weighted_score / (self.weight * MAX_ITEM_SCORE)) * 100
        )


def _index_answers(answers: Iterable[Answer] | Mapping[str, Answer]) -> dict[str, Answer]:
    if isinstance(answers, Mapping):
        return dict(answers)
    return {answer.question_id: answer for answer in answers}


def aggregate_responses(
    questions: Sequence[Question],
    answers: Iterable[Answer] | Mapping[str, Answer],
    submitted_at: datetime | None = None,
) -> Submission:
    """Score every answer of a check-in and combine them into one score.

    Args:
        questions: Form questions in display order
        answers: Client answers, as a list or keyed by question id
        submitted_at: Optional submission timestamp to carry on the result

    Returns:
        Submission with a 0-100 score, question counts and the annotated
        responses for every answered question
    """
    answers_by_question = _index_answers(answers)

    scored: list[tuple[AnnotatedResponse, AnswerScore]] = []
    for question in questions:
        answer = answers_by_question.get(question.id) or Answer(question_id=question.id)
        result = AnswerScorer.score(question, answer.value)
        scored.append(
            (
                AnnotatedResponse(
                    question_id=question.id,
                    question_text=question.text,
                    type=getattr(question.type, "value", question.type),
                    answer=answer.value,
                    score=result.score,
                    weight=result.weight,
                    comment=answer.comment,
                ),
                result,
            )
        )

    totals = reduce(lambda acc, item: acc.add(item[1]), scored, _Totals())

    return Submission(
        score=totals.percentage,
        total_questions=len(questions),
        answered_questions=totals.answered,
        responses=tuple(
            response for response, _ in scored if not is_unanswered(response.answer)
        ),
        submitted_at=submitted_at,
    )
