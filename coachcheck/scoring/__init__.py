"""Scoring modules for check-in answers and submissions."""

from coachcheck.scoring.aggregate import aggregate_responses
from coachcheck.scoring.answers import AnswerScore, AnswerScorer, score_answer

__all__ = [
    "aggregate_responses",
    "AnswerScore",
    "AnswerScorer",
    "score_answer",
]
