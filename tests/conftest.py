"""Pytest configuration and fixtures."""

from collections.abc import Generator
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from coachcheck.main import app
from coachcheck.models.checkin import AnnotatedResponse, Question, SubmissionRecord


@pytest.fixture(scope="function")
def client() -> Generator[TestClient, None, None]:
    """Create FastAPI test client."""
    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def weekly_form() -> list[Question]:
    """A typical weekly check-in form."""
    return [
        Question(id="energy", text="Rate your energy this week", type="scale"),
        Question(
            id="sessions",
            text="How many sessions did you complete?",
            type="multiple_choice",
            options=("0", "1-2", "3-4", "5+"),
        ),
        Question(
            id="alcohol",
            text="Did you drink alcohol this week?",
            type="boolean",
            yes_is_positive=False,
        ),
        Question(
            id="notes",
            text="Anything else to share?",
            type="textarea",
            weight=5,
            required=False,
        ),
    ]


def make_response(
    question_id: str,
    score: float,
    text: str | None = None,
    weight: float | None = 5,
    type: str | None = "scale",
    answer=None,
) -> AnnotatedResponse:
    """Build a stored annotated response."""
    return AnnotatedResponse(
        question_id=question_id,
        question_text=text if text is not None else f"Question text for {question_id}",
        type=type,
        answer=answer if answer is not None else score,
        score=score,
        weight=weight,
    )


def make_record(
    week: int,
    *responses: AnnotatedResponse,
    score: int | None = None,
    assignment_id: str | None = None,
    form_id: str | None = "form-1",
    start: datetime = datetime(2026, 1, 5, 9, 0, tzinfo=timezone.utc),
) -> SubmissionRecord:
    """Build a stored submission for the given 1-based week."""
    return SubmissionRecord(
        submitted_at=start + timedelta(weeks=week - 1),
        responses=tuple(responses),
        assignment_id=assignment_id if assignment_id is not None else f"assignment-{week}",
        form_id=form_id,
        score=score,
    )


@pytest.fixture
def response_factory():
    """Factory for stored annotated responses."""
    return make_response


@pytest.fixture
def record_factory():
    """Factory for stored submissions."""
    return make_record
