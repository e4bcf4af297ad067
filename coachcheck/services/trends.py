"""Trend classification for scores and body measurements.

A current value is compared with the mean of its history. Whether a rise
counts as improvement depends on the metric: check-in scores should go up,
body weight (for most coaching goals) should come down. The direction is
always passed in, never assumed.
"""

import math
from dataclasses import dataclass
from enum import Enum
from statistics import fmean
from typing import Iterable, Sequence

from coachcheck.core.config import settings
from coachcheck.models.checkin import Measurement, Trend
from coachcheck.utils.time import ensure_utc

DEFAULT_TREND_DELTA = 5.0


class MetricDirection(str, Enum):
    """Which way a metric has to move to count as improving."""

    HIGHER_IS_BETTER = "higher_is_better"
    LOWER_IS_BETTER = "lower_is_better"


@dataclass(frozen=True)
class MetricRule:
    """Trend rule for a named metric."""

    name: str
    direction: MetricDirection
    delta: float


SCORE_RULE = MetricRule(
    name="score",
    direction=MetricDirection.HIGHER_IS_BETTER,
    delta=settings.score_trend_delta,
)

BODY_WEIGHT_RULE = MetricRule(
    name="body_weight",
    direction=MetricDirection.LOWER_IS_BETTER,
    delta=settings.body_weight_trend_delta,
)


def baseline_of(current: float, historical: Sequence[float]) -> float:
    """Mean of the history, or the current value when there is none."""
    if not historical:
        return current
    return fmean(historical)


def classify_trend(
    current: float,
    historical: Sequence[float],
    direction: MetricDirection = MetricDirection.HIGHER_IS_BETTER,
    delta: float = DEFAULT_TREND_DELTA,
) -> Trend:
    """Label the current value against its historical average.

    Args:
        current: Latest value
        historical: Earlier values (any order)
        direction: Whether higher or lower values are better
        delta: Change from the average that must be exceeded

    Returns:
        IMPROVING, DECLINING or STABLE. An empty history is always STABLE.
    """
    baseline = baseline_of(current, historical)

    if current > baseline + delta:
        moved_up = True
    elif current < baseline - delta:
        moved_up = False
    else:
        return Trend.STABLE

    if direction == MetricDirection.LOWER_IS_BETTER:
        moved_up = not moved_up
    return Trend.IMPROVING if moved_up else Trend.DECLINING


def classify_metric(current: float, historical: Sequence[float], rule: MetricRule) -> Trend:
    """Classify using a named metric rule."""
    return classify_trend(current, historical, rule.direction, rule.delta)


def progress_trend(
    scores: Sequence[float],
    delta: float = DEFAULT_TREND_DELTA,
    direction: MetricDirection = MetricDirection.HIGHER_IS_BETTER,
) -> Trend:
    """Compare the later half of a series with the earlier half.

    The first half takes the extra element when the length is odd. Fewer
    than two values are always STABLE.
    """
    if len(scores) < 2:
        return Trend.STABLE
    split = math.ceil(len(scores) / 2)
    first_half, second_half = scores[:split], scores[split:]
    return classify_trend(fmean(second_half), first_half, direction, delta)


@dataclass(frozen=True)
class BodyWeightSummary:
    """Body weight progress between the baseline and the latest entry."""

    baseline: float | None
    current: float | None
    change: float  # Positive means weight lost
    trend: Trend | None  # None when there is nothing to compare


def summarize_body_weight(
    measurements: Iterable[Measurement],
    rule: MetricRule = BODY_WEIGHT_RULE,
) -> BodyWeightSummary:
    """Summarize body weight against the onboarding baseline.

    The baseline is the entry flagged ``is_baseline`` or, failing that, the
    earliest weighed entry. Entries without a body weight are ignored.
    """
    weighed = sorted(
        (m for m in measurements if m.body_weight is not None),
        key=lambda m: ensure_utc(m.date),
    )
    if not weighed:
        return BodyWeightSummary(baseline=None, current=None, change=0, trend=None)

    baseline_entry = next((m for m in weighed if m.is_baseline), weighed[0])
    latest = weighed[-1]
    baseline = baseline_entry.body_weight
    current = latest.body_weight

    trend = None
    if latest is not baseline_entry:
        trend = classify_metric(current, [baseline], rule)

    return BodyWeightSummary(
        baseline=baseline,
        current=current,
        change=baseline - current,
        trend=trend,
    )
