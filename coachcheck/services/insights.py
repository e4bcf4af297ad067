"""Narrative insight drafts for coaches.

Builds a versioned prompt from a client's aggregated scores, trend and
free-text answers and passes it to an insight generator. The generator is an
external collaborator (an LLM client in production); this module only
records what was asked and what came back, with hashes so a draft can be
traced to the exact data and prompt it was produced from.
"""

import hashlib
import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Awaitable, Callable, Sequence

from coachcheck.core.config import settings
from coachcheck.core.logging import get_logger
from coachcheck.models.checkin import Trend
from coachcheck.utils.time import utc_now

logger = get_logger(__name__)

# Async callable taking a prompt and returning generated text
InsightGenerator = Callable[[str], Awaitable[str]]

# Keep prompts bounded for clients with long histories
MAX_TEXT_RESPONSES = 20

PROMPT_TEMPLATES = {
    "check_in_insights": {
        "version": "1.0.0",
        "template": """Summarize a coaching client's recent check-ins for their coach.

Score Data:
- Latest Score: {current_score}%
- Check-ins Analysed: {check_in_count}
- Score History: {score_history}
- Trend: {trend}

Client Comments:
{text_responses}

Instructions:
- Write in a supportive, practical coaching tone
- Identify recurring themes and wins
- Flag anything the coach should follow up on
- Keep the summary under 200 words

Coach Summary:""",
    },
}


class InsightsDisabledError(Exception):
    """Raised when insight generation is switched off in settings."""

    pass


@dataclass(frozen=True)
class InsightRequest:
    """Aggregated data an insight is generated from."""

    current_score: int
    scores: Sequence[int]
    trend: Trend
    text_responses: Sequence[str] = field(default_factory=tuple)


@dataclass(frozen=True)
class Insight:
    """A generated insight draft and its provenance."""

    text: str
    model_id: str
    model_version: str
    prompt_template_version: str
    prompt_hash: str
    source_data_hash: str
    generated_at: datetime


async def placeholder_generator(prompt: str) -> str:
    """Generator used when no AI client is configured."""
    return """[AI-Generated Draft - Requires Coach Review]

Check-in Summary:

1. Scores have been processed and compared with earlier check-ins
2. Client comments have been collected for review
3. Follow-up suggestions will appear once an insight model is configured

This draft requires coach review before being shared with the client."""


class InsightService:
    """Service for generating coach-facing insight drafts."""

    def __init__(
        self,
        generator: InsightGenerator | None = None,
        model_id: str | None = None,
        model_version: str | None = None,
    ) -> None:
        self.generator = generator or placeholder_generator
        self.model_id = model_id or settings.insight_model_id
        self.model_version = model_version or settings.insight_model_version

    @staticmethod
    def compute_hash(content: str) -> str:
        """Compute SHA-256 hash."""
        return hashlib.sha256(content.encode("utf-8")).hexdigest()

    def build_prompt(self, request: InsightRequest) -> tuple[str, str]:
        """Render the prompt and return it with the template version."""
        template_info = PROMPT_TEMPLATES["check_in_insights"]

        texts = [t.strip() for t in request.text_responses if t and t.strip()]
        text_block = "\n".join(
            f"- {text}" for text in texts[:MAX_TEXT_RESPONSES]
        ) or "No comments provided"

        prompt = template_info["template"].format(
            current_score=request.current_score,
            check_in_count=len(request.scores),
            score_history=", ".join(str(s) for s in request.scores) or "None",
            trend=request.trend.value,
            text_responses=text_block,
        )
        return prompt, template_info["version"]

    async def generate(self, request: InsightRequest) -> Insight:
        """Generate an insight draft for aggregated check-in data.

        Raises:
            InsightsDisabledError: If insights are disabled in settings
        """
        if not settings.insights_enabled:
            raise InsightsDisabledError("Insight generation is disabled")

        prompt, version = self.build_prompt(request)
        source_data = {
            "current_score": request.current_score,
            "scores": list(request.scores),
            "trend": request.trend.value,
            "text_responses": list(request.text_responses),
        }

        text = await self.generator(prompt)

        insight = Insight(
            text=text,
            model_id=self.model_id,
            model_version=self.model_version,
            prompt_template_version=version,
            prompt_hash=self.compute_hash(prompt),
            source_data_hash=self.compute_hash(json.dumps(source_data, sort_keys=True)),
            generated_at=utc_now(),
        )

        logger.info(
            f"Generated insight with {self.model_id} "
            f"(template {version}, prompt {insight.prompt_hash[:8]})"
        )

        return insight
