"""Check-in scoring and progress endpoints.

Callers send already-fetched form questions and stored submissions; results
are returned for the caller to persist or render.
"""

from datetime import datetime

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from coachcheck.api.deps import CheckInServiceDep, InsightServiceDep
from coachcheck.schemas.checkin import (
    AnnotatedResponseOut,
    BodyWeightOut,
    MissingAnswersResponse,
    ProgressRequest,
    ProgressResponse,
    QuestionTrackOut,
    ScoreCheckInRequest,
    ScoredSubmissionResponse,
    ScoringProfileResponse,
    WeekEntryOut,
)
from coachcheck.services.insights import InsightsDisabledError
from coachcheck.services.traffic_light import SCORING_PROFILES, describe_thresholds
from coachcheck.services.validation import MissingRequiredAnswersError

router = APIRouter()


class InsightResponse(BaseModel):
    """Generated insight draft."""

    text: str
    model_id: str
    model_version: str
    prompt_template_version: str
    prompt_hash: str
    source_data_hash: str
    generated_at: datetime

    model_config = {"protected_namespaces": ()}


@router.post(
    "/score",
    response_model=ScoredSubmissionResponse,
    responses={status.HTTP_422_UNPROCESSABLE_ENTITY: {"model": MissingAnswersResponse}},
)
async def score_checkin(
    request: ScoreCheckInRequest,
    service: CheckInServiceDep,
) -> ScoredSubmissionResponse:
    """Validate and score a check-in submission."""
    questions = [q.to_domain() for q in request.questions]
    answers = [a.to_domain() for a in request.answers]

    try:
        scored = service.score_submission(
            questions,
            answers,
            submitted_at=request.submitted_at,
            profile=request.scoring_profile,
        )
    except MissingRequiredAnswersError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": str(e), "missing_questions": e.indices},
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    submission = scored.submission
    return ScoredSubmissionResponse(
        score=submission.score,
        total_questions=submission.total_questions,
        answered_questions=submission.answered_questions,
        responses=[AnnotatedResponseOut.from_domain(r) for r in submission.responses],
        submitted_at=submission.submitted_at,
        status=scored.status,
        scoring_profile=scored.profile,
    )


@router.post(
    "/progress",
    response_model=ProgressResponse,
)
async def build_progress(
    request: ProgressRequest,
    service: CheckInServiceDep,
) -> ProgressResponse:
    """Build the per-question progress grid, score trends and body weight view for a client."""
    progress = service.build_progress(
        (s.to_domain() for s in request.submissions),
        [m.to_domain() for m in request.measurements],
    )
    timeline = progress.timeline
    body_weight = progress.body_weight

    return ProgressResponse(
        total_weeks=timeline.total_weeks,
        week_dates=list(timeline.week_dates),
        questions=[
            QuestionTrackOut(
                question_id=track.question_id,
                question_text=track.question_text,
                weeks=[
                    WeekEntryOut(
                        week=entry.week,
                        date=entry.date,
                        score=entry.score,
                        status=entry.status,
                        answer=entry.answer,
                        type=entry.type,
                        weight=entry.weight,
                    )
                    for entry in track.weeks
                ],
                first_seen_week=track.first_seen_week,
                last_seen_week=track.last_seen_week,
                is_active=track.is_active,
                text_changes=list(track.text_changes),
                gaps=list(track.gaps),
            )
            for track in timeline.tracks
        ],
        scores=list(progress.scores),
        latest_score=progress.latest_score,
        score_trend=progress.score_trend,
        progress_trend=progress.progress_trend,
        body_weight=BodyWeightOut(
            baseline=body_weight.baseline,
            current=body_weight.current,
            change=body_weight.change,
            trend=body_weight.trend,
        ),
    )


@router.post(
    "/insights",
    response_model=InsightResponse,
)
async def generate_insights(
    request: ProgressRequest,
    service: CheckInServiceDep,
    insight_service: InsightServiceDep,
) -> InsightResponse:
    """Generate a narrative insight draft from a client's check-ins."""
    progress = service.build_progress(
        (s.to_domain() for s in request.submissions),
        [m.to_domain() for m in request.measurements],
    )
    insight_request = progress.insight_request()

    if insight_request is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No scored check-ins to generate insights from",
        )

    try:
        insight = await insight_service.generate(insight_request)
    except InsightsDisabledError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e),
        )

    return InsightResponse(
        text=insight.text,
        model_id=insight.model_id,
        model_version=insight.model_version,
        prompt_template_version=insight.prompt_template_version,
        prompt_hash=insight.prompt_hash,
        source_data_hash=insight.source_data_hash,
        generated_at=insight.generated_at,
    )


@router.get(
    "/scoring-profiles",
    response_model=list[ScoringProfileResponse],
)
async def list_scoring_profiles() -> list[ScoringProfileResponse]:
    """List the traffic light profiles coaches can assign to clients."""
    return [
        ScoringProfileResponse(
            key=profile.key,
            name=profile.name,
            description=profile.description,
            red_max=profile.thresholds.red_max,
            orange_max=profile.thresholds.orange_max,
            ranges=describe_thresholds(profile.thresholds),
        )
        for profile in SCORING_PROFILES.values()
    ]
