"""Tests for the check-in scoring, progress and trend endpoints.

Payloads use the camelCase field names that forms and submissions are
stored with.
"""

from typing import Any
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from coachcheck.api.deps import get_insight_service
from coachcheck.main import app
from coachcheck.services.insights import InsightService


@pytest.fixture
def form_payload() -> list[dict[str, Any]]:
    return [
        {"id": "energy", "text": "Rate your energy", "type": "scale", "questionWeight": 5},
        {
            "id": "sessions",
            "text": "Sessions completed",
            "type": "multiple_choice",
            "options": ["0", "1-2", "3-4", "5+"],
        },
        {
            "id": "alcohol",
            "text": "Any alcohol?",
            "type": "boolean",
            "yesIsPositive": False,
        },
        {"id": "notes", "text": "Anything else?", "type": "textarea", "required": False},
    ]


def stored_submission(week: int, score: int, energy: float, note: str | None = None) -> dict:
    responses = [
        {
            "questionId": "energy",
            "questionText": "Rate your energy",
            "type": "scale",
            "answer": energy,
            "score": energy,
            "weight": 5,
        }
    ]
    if note is not None:
        responses.append(
            {
                "questionId": "notes",
                "questionText": "Anything else?",
                "type": "textarea",
                "answer": note,
                "score": 0,
                "weight": 0,
            }
        )
    return {
        "id": f"sub-{week}",
        "assignmentId": f"assignment-{week}",
        "formId": "weekly",
        "submittedAt": f"2026-06-{week * 7:02d}T09:00:00Z",
        "score": score,
        "responses": responses,
    }


class TestScoreEndpoint:
    """Tests for POST /api/v1/checkins/score."""

    def test_score_submission(self, client: TestClient, form_payload) -> None:
        response = client.post(
            "/api/v1/checkins/score",
            json={
                "questions": form_payload,
                "answers": [
                    {"questionId": "energy", "answer": 7},
                    {"questionId": "sessions", "answer": "5+"},
                    {"questionId": "alcohol", "answer": "no"},
                    {"questionId": "notes", "answer": "Good week", "comment": "thanks"},
                ],
                "submittedAt": "2026-06-01T09:00:00Z",
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["score"] == 83
        assert data["totalQuestions"] == 4
        assert data["answeredQuestions"] == 3
        assert data["status"] == "orange"
        assert data["scoringProfile"] == "moderate"

        notes = next(r for r in data["responses"] if r["questionId"] == "notes")
        assert notes["score"] == 0
        assert notes["weight"] == 0
        assert notes["comment"] == "thanks"

    def test_textarea_does_not_dilute_score(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/checkins/score",
            json={
                "questions": [
                    {"id": "mood", "text": "Mood", "type": "scale", "weight": 5},
                    {"id": "notes", "text": "Notes", "type": "textarea", "weight": 5},
                ],
                "answers": [
                    {"questionId": "mood", "answer": 8},
                    {"questionId": "notes", "answer": "feeling good"},
                ],
            },
        )

        assert response.status_code == 200
        assert response.json()["score"] == 80

    def test_weighted_options(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/checkins/score",
            json={
                "questions": [
                    {
                        "id": "diet",
                        "text": "Diet adherence",
                        "type": "select",
                        "options": [
                            {"text": "Off plan", "weight": 2},
                            {"text": "Mostly", "weight": 7},
                            {"text": "Fully", "weight": 10},
                        ],
                    }
                ],
                "answers": [{"questionId": "diet", "answer": "Mostly"}],
            },
        )

        assert response.status_code == 200
        assert response.json()["score"] == 70

    def test_numeric_options(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/checkins/score",
            json={
                "questions": [
                    {"id": "meals", "text": "Meals on plan", "type": "select", "options": [1, 2, 3]}
                ],
                "answers": [{"questionId": "meals", "answer": 3}],
            },
        )

        assert response.status_code == 200
        assert response.json()["score"] == 100

    @pytest.mark.parametrize("field", ["questionWeight", "weight"])
    def test_negative_weight_rejected(self, client: TestClient, field) -> None:
        response = client.post(
            "/api/v1/checkins/score",
            json={
                "questions": [
                    {"id": "a", "text": "A", "type": "scale", "questionWeight": 10},
                    {"id": "b", "text": "B", "type": "scale", field: -5},
                ],
                "answers": [
                    {"questionId": "a", "answer": 10},
                    {"questionId": "b", "answer": 1},
                ],
            },
        )

        assert response.status_code == 422

    def test_missing_required_answers(self, client: TestClient, form_payload) -> None:
        response = client.post(
            "/api/v1/checkins/score",
            json={
                "questions": form_payload,
                "answers": [{"questionId": "sessions", "answer": "0"}],
            },
        )

        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["missing_questions"] == [1, 3]
        assert "Missing: questions 1, 3" in detail["message"]

    def test_unknown_profile(self, client: TestClient, form_payload) -> None:
        response = client.post(
            "/api/v1/checkins/score",
            json={
                "questions": form_payload,
                "answers": [
                    {"questionId": "energy", "answer": 7},
                    {"questionId": "sessions", "answer": "0"},
                    {"questionId": "alcohol", "answer": True},
                ],
                "scoringProfile": "elite",
            },
        )

        assert response.status_code == 400

    def test_submitted_at_defaulted(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/checkins/score",
            json={
                "questions": [{"id": "mood", "text": "Mood", "type": "scale"}],
                "answers": [{"questionId": "mood", "answer": 6}],
            },
        )

        assert response.status_code == 200
        assert response.json()["submittedAt"] is not None

    def test_empty_form_rejected(self, client: TestClient) -> None:
        response = client.post("/api/v1/checkins/score", json={"questions": []})

        assert response.status_code == 422


class TestProgressEndpoint:
    """Tests for POST /api/v1/checkins/progress."""

    def test_progress_view(self, client: TestClient) -> None:
        submissions = [
            stored_submission(1, 55, 5, note="Tired"),
            stored_submission(2, 60, 6),
            stored_submission(3, 78, 8, note="Much better"),
        ]

        response = client.post(
            "/api/v1/checkins/progress", json={"submissions": submissions}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["totalWeeks"] == 3
        assert data["weekDates"] == ["07/06/2026", "14/06/2026", "21/06/2026"]
        assert data["scores"] == [55, 60, 78]
        assert data["latestScore"] == 78
        assert data["scoreTrend"] == "improving"

        energy, notes = data["questions"]
        assert energy["questionId"] == "energy"
        assert [w["status"] for w in energy["weeks"]] == ["orange", "orange", "green"]
        assert energy["isActive"] is True
        assert notes["gaps"] == [2]
        assert notes["firstSeenWeek"] == 1
        assert notes["lastSeenWeek"] == 3
        assert {w["status"] for w in notes["weeks"]} == {"grey"}

    def test_empty_history(self, client: TestClient) -> None:
        response = client.post("/api/v1/checkins/progress", json={"submissions": []})

        assert response.status_code == 200
        data = response.json()
        assert data["totalWeeks"] == 0
        assert data["questions"] == []
        assert data["latestScore"] is None
        assert data["scoreTrend"] == "stable"
        assert data["bodyWeight"] == {
            "baseline": None,
            "current": None,
            "change": 0,
            "trend": None,
        }

    def test_body_weight_view(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/checkins/progress",
            json={
                "submissions": [stored_submission(1, 70, 7)],
                "measurements": [
                    {"date": "2026-06-01T08:00:00Z", "bodyWeight": 90.0, "isBaseline": True},
                    {"date": "2026-06-15T08:00:00Z", "bodyWeight": 91.0},
                ],
            },
        )

        assert response.status_code == 200
        body_weight = response.json()["bodyWeight"]
        assert body_weight["baseline"] == 90.0
        assert body_weight["current"] == 91.0
        assert body_weight["change"] == -1.0
        assert body_weight["trend"] == "declining"

    def test_non_positive_body_weight_rejected(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/checkins/progress",
            json={"measurements": [{"date": "2026-06-01T08:00:00Z", "bodyWeight": 0}]},
        )

        assert response.status_code == 422


class TestInsightsEndpoint:
    """Tests for POST /api/v1/checkins/insights."""

    def test_generates_with_injected_generator(self, client: TestClient) -> None:
        generator = AsyncMock(return_value="Energy is trending up.")
        app.dependency_overrides[get_insight_service] = lambda: InsightService(
            generator=generator, model_id="test-model", model_version="1"
        )

        response = client.post(
            "/api/v1/checkins/insights",
            json={
                "submissions": [
                    stored_submission(1, 55, 5, note="Tired"),
                    stored_submission(2, 78, 8, note="Much better"),
                ]
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["text"] == "Energy is trending up."
        assert data["model_id"] == "test-model"
        assert len(data["prompt_hash"]) == 64
        prompt = generator.await_args.args[0]
        assert "- Tired" in prompt
        assert "- Much better" in prompt

    def test_no_scored_history(self, client: TestClient) -> None:
        response = client.post("/api/v1/checkins/insights", json={"submissions": []})

        assert response.status_code == 400


class TestScoringProfilesEndpoint:
    """Tests for GET /api/v1/checkins/scoring-profiles."""

    def test_lists_profiles(self, client: TestClient) -> None:
        response = client.get("/api/v1/checkins/scoring-profiles")

        assert response.status_code == 200
        profiles = {p["key"]: p for p in response.json()}
        assert set(profiles) == {"lifestyle", "high-performance", "moderate", "custom"}
        assert profiles["moderate"]["redMax"] == 60
        assert profiles["moderate"]["orangeMax"] == 85
        assert profiles["moderate"]["ranges"] == "Red: 0-60% | Orange: 61-85% | Green: 86-100%"


class TestTrendEndpoint:
    """Tests for POST /api/v1/trends/classify."""

    def test_higher_is_better(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/trends/classify",
            json={"current": 80, "historical": [60, 70]},
        )

        assert response.status_code == 200
        assert response.json() == {"trend": "improving", "baseline": 65.0}

    def test_lower_is_better(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/trends/classify",
            json={
                "current": 78.0,
                "historical": [80.0],
                "direction": "lower_is_better",
                "delta": 0.5,
            },
        )

        assert response.status_code == 200
        assert response.json()["trend"] == "improving"

    def test_no_history_is_stable(self, client: TestClient) -> None:
        response = client.post("/api/v1/trends/classify", json={"current": 50})

        assert response.json() == {"trend": "stable", "baseline": 50.0}

    def test_negative_delta_rejected(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/trends/classify", json={"current": 50, "delta": -1}
        )

        assert response.status_code == 422
