"""Check-in service.

Ties the pure scoring and progress functions together for the API layer:
validates and scores a new submission, and builds a client's progress view
from their stored submissions. Nothing here reads or writes storage; callers
pass in already-fetched data and persist the results themselves.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Mapping, Sequence

from coachcheck.core.config import settings
from coachcheck.core.logging import scoring_events
from coachcheck.models.checkin import (
    Answer,
    Measurement,
    Question,
    QuestionType,
    Submission,
    SubmissionRecord,
    TrafficLight,
    Trend,
)
from coachcheck.scoring.aggregate import aggregate_responses
from coachcheck.services.dedupe import deduplicate_submissions
from coachcheck.services.insights import InsightRequest
from coachcheck.services.timeline import (
    QuestionTimeline,
    build_question_timeline,
    sort_submissions,
)
from coachcheck.services.traffic_light import (
    ScoringThresholds,
    get_profile,
    get_traffic_light_status,
)
from coachcheck.services.trends import (
    SCORE_RULE,
    BodyWeightSummary,
    classify_metric,
    progress_trend,
    summarize_body_weight,
)
from coachcheck.services.validation import validate_required_answers
from coachcheck.utils.time import utc_now

FREE_TEXT_TYPES = frozenset({QuestionType.TEXT.value, QuestionType.TEXTAREA.value})


@dataclass(frozen=True)
class ScoredCheckIn:
    """A scored submission with its overall traffic light."""

    submission: Submission
    status: TrafficLight
    profile: str
    thresholds: ScoringThresholds


@dataclass(frozen=True)
class ClientProgress:
    """Everything a progress screen needs for one client."""

    timeline: QuestionTimeline
    scores: tuple[int, ...]
    latest_score: int | None
    score_trend: Trend
    progress_trend: Trend
    body_weight: BodyWeightSummary

    def insight_request(self) -> InsightRequest | None:
        """Aggregated data for narrative insights, if there is any history."""
        if self.latest_score is None:
            return None
        # Newest first; prompts keep only the leading MAX_TEXT_RESPONSES
        entries = sorted(
            (
                entry
                for track in self.timeline.tracks
                for entry in track.weeks
                if entry.type in FREE_TEXT_TYPES and entry.answer not in (None, "")
            ),
            key=lambda entry: entry.week,
            reverse=True,
        )
        text_responses = [str(entry.answer) for entry in entries]
        return InsightRequest(
            current_score=self.latest_score,
            scores=self.scores,
            trend=self.score_trend,
            text_responses=tuple(text_responses),
        )


class CheckInService:
    """Service for scoring check-ins and building progress views."""

    def __init__(self, profile: str | None = None) -> None:
        self.profile = profile or settings.default_scoring_profile

    def score_submission(
        self,
        questions: Sequence[Question],
        answers: Iterable[Answer] | Mapping[str, Answer],
        submitted_at: datetime | None = None,
        profile: str | None = None,
    ) -> ScoredCheckIn:
        """Validate and score a new check-in submission.

        ``submitted_at`` defaults to the current UTC time.

        Raises:
            MissingRequiredAnswersError: If required questions are unanswered
            ValueError: If the scoring profile is unknown
        """
        if not isinstance(answers, Mapping):
            answers = list(answers)

        validate_required_answers(questions, answers)

        scoring_profile = get_profile(profile or self.profile)
        submission = aggregate_responses(questions, answers, submitted_at or utc_now())
        status = get_traffic_light_status(submission.score, scoring_profile.thresholds)

        scoring_events.scored(
            score=submission.score,
            status=status.value,
            profile=scoring_profile.key,
            answered=submission.answered_questions,
            total=submission.total_questions,
        )

        return ScoredCheckIn(
            submission=submission,
            status=status,
            profile=scoring_profile.key,
            thresholds=scoring_profile.thresholds,
        )

    def build_progress(
        self,
        records: Iterable[SubmissionRecord],
        measurements: Iterable[Measurement] = (),
    ) -> ClientProgress:
        """Build the question timeline, score trends and body weight view for one client."""
        unique = deduplicate_submissions(records)
        timeline = build_question_timeline(unique)

        scores = tuple(
            record.score for record in sort_submissions(unique) if record.score is not None
        )
        latest_score = scores[-1] if scores else None
        if latest_score is None:
            score_trend = Trend.STABLE
        else:
            score_trend = classify_metric(latest_score, scores[:-1], SCORE_RULE)

        scoring_events.progress_built(
            check_ins=len(unique),
            questions=len(timeline.tracks),
            trend=score_trend.value,
        )

        return ClientProgress(
            timeline=timeline,
            scores=scores,
            latest_score=latest_score,
            score_trend=score_trend,
            progress_trend=progress_trend(scores, delta=SCORE_RULE.delta),
            body_weight=summarize_body_weight(measurements),
        )
