"""Question progress timeline across a client's check-ins.

Coaches edit their forms over time: question wording is tweaked, weights
change, questions are added and retired. The timeline lines up every stored
response by question id so that each question gets one row with a status
per week, and records when a question first and last appeared and whether
its wording changed substantially along the way.

Stored scores are shown as they were computed at submission time. Weeks in
which a question was not asked are recorded as gaps, never as a zero score.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from coachcheck.models.checkin import (
    DEFAULT_QUESTION_WEIGHT,
    AnnotatedResponse,
    AnswerValue,
    QuestionType,
    SubmissionRecord,
    TrafficLight,
)
from coachcheck.utils.time import ensure_utc, format_week_date

logger = logging.getLogger(__name__)

# Fraction of characters that must differ before a wording change is flagged
SIGNIFICANT_CHANGE_RATIO = 0.2

GREEN_MIN_SCORE = 7
ORANGE_MIN_SCORE = 4

UNSCORED_TYPES = frozenset({QuestionType.TEXT.value, QuestionType.TEXTAREA.value})


def _normalize_text(text: str) -> str:
    return " ".join(text.lower().split())


def is_significant_text_change(
    previous: str,
    current: str,
    threshold: float = SIGNIFICANT_CHANGE_RATIO,
) -> bool:
    """Check whether a question's wording changed substantially.

    Both texts are lowercased, trimmed and whitespace-collapsed. The
    difference count is the number of positions that differ over the shared
    length plus the difference in length, relative to the longer text.

    Args:
        previous: Earlier question text
        current: Later question text
        threshold: Change ratio that must be exceeded

    Returns:
        True if more than ``threshold`` of the characters differ
    """
    a = _normalize_text(previous)
    b = _normalize_text(current)
    if a == b:
        return False

    max_len = max(len(a), len(b))
    if max_len == 0:
        return False

    differences = sum(1 for x, y in zip(a, b) if x != y)
    differences += abs(len(a) - len(b))

    return differences / max_len > threshold


@dataclass(frozen=True)
class TextVersion:
    """A distinct wording of a question and the week it first appeared."""

    text: str
    first_week: int


@dataclass(frozen=True)
class QuestionIdentity:
    """The wording history of one question id.

    ``versions`` holds the first wording and every later wording that was a
    significant change from the text shown the week before. ``current_text``
    is always the most recently seen wording, significant or not.
    """

    id: str
    versions: tuple[TextVersion, ...]
    current_text: str

    @classmethod
    def start(cls, question_id: str, text: str, week: int) -> "QuestionIdentity":
        return cls(
            id=question_id,
            versions=(TextVersion(text=text, first_week=week),),
            current_text=text,
        )

    def observe(self, text: str, week: int) -> "QuestionIdentity":
        """Return the identity after seeing ``text`` in ``week``."""
        versions = self.versions
        if (
            text != self.current_text
            and is_significant_text_change(self.current_text, text)
            and text not in self.text_changes
        ):
            versions = versions + (TextVersion(text=text, first_week=week),)
        return QuestionIdentity(id=self.id, versions=versions, current_text=text)

    @property
    def text_changes(self) -> list[str]:
        return [version.text for version in self.versions]


def week_status(score: float, weight: float, question_type: str) -> TrafficLight:
    """Traffic light for one question in one week."""
    if weight <= 0 or question_type in UNSCORED_TYPES:
        return TrafficLight.GREY
    if score >= GREEN_MIN_SCORE:
        return TrafficLight.GREEN
    if score >= ORANGE_MIN_SCORE:
        return TrafficLight.ORANGE
    return TrafficLight.RED


@dataclass(frozen=True)
class WeekEntry:
    """A question's stored result in one week."""

    week: int
    date: str
    score: float
    status: TrafficLight
    answer: AnswerValue
    type: str
    weight: float


@dataclass(frozen=True)
class QuestionTrack:
    """One question's row in the progress grid."""

    question_id: str
    question_text: str
    weeks: tuple[WeekEntry, ...]
    first_seen_week: int
    last_seen_week: int
    is_active: bool
    text_changes: tuple[str, ...]
    gaps: tuple[int, ...] = ()

    @property
    def is_new(self) -> bool:
        """Question was added after the first check-in."""
        return self.first_seen_week > 1

    @property
    def has_text_changes(self) -> bool:
        return len(self.text_changes) > 1

    def cells(self, total_weeks: int) -> list[TrafficLight | None]:
        """Status per week 1..total_weeks, with None where the question was absent."""
        by_week = {entry.week: entry.status for entry in self.weeks}
        return [by_week.get(week) for week in range(1, total_weeks + 1)]


@dataclass(frozen=True)
class QuestionTimeline:
    """All question tracks for one client."""

    tracks: tuple[QuestionTrack, ...] = ()
    total_weeks: int = 0
    week_dates: tuple[str, ...] = ()

    def active_tracks(self) -> list[QuestionTrack]:
        """Tracks for questions present in the latest check-in."""
        return [track for track in self.tracks if track.is_active]

    def get(self, question_id: str) -> QuestionTrack | None:
        return next(
            (track for track in self.tracks if track.question_id == question_id),
            None,
        )


def _response_text(response: AnnotatedResponse) -> str:
    return response.question_text or f"Question {response.question_id[:8]}"


def _week_entry(week: int, date: str, response: AnnotatedResponse) -> WeekEntry:
    score = response.score or 0
    weight = DEFAULT_QUESTION_WEIGHT if response.weight is None else response.weight
    question_type = response.type or QuestionType.TEXT.value
    return WeekEntry(
        week=week,
        date=date,
        score=score,
        status=week_status(score, weight, question_type),
        answer=response.answer,
        type=question_type,
        weight=weight,
    )


def sort_submissions(records: Iterable[SubmissionRecord]) -> list[SubmissionRecord]:
    """Submissions with at least one response, oldest first."""
    return sorted(
        (record for record in records if record.responses),
        key=lambda record: ensure_utc(record.submitted_at),
    )


def build_question_timeline(records: Sequence[SubmissionRecord]) -> QuestionTimeline:
    """Reconcile question identities across a client's submissions.

    Submissions are expected to be deduplicated already (see
    ``deduplicate_submissions``). Each remaining submission with responses
    becomes one week, numbered from 1 in ``submitted_at`` order.

    Args:
        records: The client's stored submissions

    Returns:
        QuestionTimeline with one track per question id, in order of first
        appearance
    """
    ordered = sort_submissions(records)
    if not ordered:
        return QuestionTimeline()

    total_weeks = len(ordered)
    week_dates = tuple(format_week_date(record.submitted_at) for record in ordered)

    identities: dict[str, QuestionIdentity] = {}
    entries: dict[str, list[WeekEntry]] = {}
    seen_weeks: dict[str, list[int]] = {}

    for week, record in enumerate(ordered, start=1):
        present_this_week: set[str] = set()
        for response in record.responses:
            question_id = response.question_id
            if not question_id or question_id in present_this_week:
                continue
            present_this_week.add(question_id)

            text = _response_text(response)
            identity = identities.get(question_id)
            if identity is None:
                identities[question_id] = QuestionIdentity.start(question_id, text, week)
                entries[question_id] = []
                seen_weeks[question_id] = []
            else:
                identities[question_id] = identity.observe(text, week)

            entries[question_id].append(_week_entry(week, week_dates[week - 1], response))
            seen_weeks[question_id].append(week)

    tracks = []
    for question_id, identity in identities.items():
        weeks_present = seen_weeks[question_id]
        present = set(weeks_present)
        tracks.append(
            QuestionTrack(
                question_id=question_id,
                question_text=identity.current_text,
                weeks=tuple(entries[question_id]),
                first_seen_week=weeks_present[0],
                last_seen_week=weeks_present[-1],
                is_active=weeks_present[-1] == total_weeks,
                text_changes=tuple(identity.text_changes),
                gaps=tuple(
                    week
                    for week in range(1, total_weeks + 1)
                    if week not in present
                ),
            )
        )

    logger.debug(
        f"Built question timeline: {len(tracks)} questions over {total_weeks} weeks"
    )

    return QuestionTimeline(
        tracks=tuple(tracks),
        total_weeks=total_weeks,
        week_dates=week_dates,
    )
