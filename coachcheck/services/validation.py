"""Required-answer validation for check-in submissions.

Runs before aggregation: a submission with unanswered required questions is
rejected outright rather than scored.
"""

from typing import Iterable, Mapping, Sequence

from coachcheck.models.checkin import Answer, AnswerValue, Question, is_unanswered


class MissingRequiredAnswersError(Exception):
    """Raised when required questions have no answer."""

    def __init__(self, indices: list[int]) -> None:
        self.indices = indices
        numbers = ", ".join(str(i) for i in indices)
        super().__init__(
            f"Please answer all required questions. Missing: questions {numbers}"
        )


def _is_blank(value: AnswerValue) -> bool:
    if is_unanswered(value):
        return True
    return isinstance(value, str) and not value.strip()


def find_unanswered_required(
    questions: Sequence[Question],
    answers: Iterable[Answer] | Mapping[str, Answer],
) -> list[int]:
    """Return 1-based positions of required questions left unanswered."""
    if isinstance(answers, Mapping):
        by_question = dict(answers)
    else:
        by_question = {answer.question_id: answer for answer in answers}

    missing = []
    for position, question in enumerate(questions, start=1):
        if not question.is_mandatory:
            continue
        answer = by_question.get(question.id)
        if answer is None or _is_blank(answer.value):
            missing.append(position)
    return missing


def validate_required_answers(
    questions: Sequence[Question],
    answers: Iterable[Answer] | Mapping[str, Answer],
) -> None:
    """Raise MissingRequiredAnswersError if any required question is blank."""
    missing = find_unanswered_required(questions, answers)
    if missing:
        raise MissingRequiredAnswersError(missing)
