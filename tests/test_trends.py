"""Tests for trend classification."""

from datetime import datetime, timezone

import pytest

from coachcheck.models.checkin import Measurement, Trend
from coachcheck.services.trends import (
    BODY_WEIGHT_RULE,
    SCORE_RULE,
    MetricDirection,
    baseline_of,
    classify_metric,
    classify_trend,
    progress_trend,
    summarize_body_weight,
)


class TestClassifyTrend:
    """Tests for comparing a value with its history."""

    def test_higher_is_better_improving(self) -> None:
        assert classify_trend(80, [70, 72, 74]) == Trend.IMPROVING

    def test_higher_is_better_declining(self) -> None:
        assert classify_trend(60, [70, 72, 74]) == Trend.DECLINING

    def test_within_delta_is_stable(self) -> None:
        assert classify_trend(75, [70, 72, 74]) == Trend.STABLE

    def test_boundary_is_stable(self) -> None:
        """Moving exactly by the delta is not enough."""
        assert classify_trend(75, [70]) == Trend.STABLE
        assert classify_trend(65, [70]) == Trend.STABLE

    def test_empty_history_is_stable(self) -> None:
        assert classify_trend(90, []) == Trend.STABLE

    def test_lower_is_better_reverses_labels(self) -> None:
        """A falling value is improvement when lower is better."""
        assert (
            classify_trend(70, [80], MetricDirection.LOWER_IS_BETTER, delta=0.5)
            == Trend.IMPROVING
        )
        assert (
            classify_trend(82, [80], MetricDirection.LOWER_IS_BETTER, delta=0.5)
            == Trend.DECLINING
        )

    def test_custom_delta(self) -> None:
        assert classify_trend(72, [70], delta=1) == Trend.IMPROVING
        assert classify_trend(72, [70], delta=3) == Trend.STABLE

    def test_baseline_is_mean(self) -> None:
        assert baseline_of(50, [60, 70, 80]) == pytest.approx(70)
        assert baseline_of(50, []) == 50


class TestMetricRules:
    """Tests for the named score and body weight rules."""

    def test_score_rule(self) -> None:
        assert SCORE_RULE.direction == MetricDirection.HIGHER_IS_BETTER
        assert SCORE_RULE.delta == 5.0
        assert classify_metric(85, [70], SCORE_RULE) == Trend.IMPROVING

    def test_body_weight_rule(self) -> None:
        assert BODY_WEIGHT_RULE.direction == MetricDirection.LOWER_IS_BETTER
        assert BODY_WEIGHT_RULE.delta == 0.5
        assert classify_metric(79.8, [80], BODY_WEIGHT_RULE) == Trend.STABLE
        assert classify_metric(79, [80], BODY_WEIGHT_RULE) == Trend.IMPROVING


class TestProgressTrend:
    """Tests for the first-half versus second-half comparison."""

    def test_rising_series(self) -> None:
        assert progress_trend([50, 52, 70, 72]) == Trend.IMPROVING

    def test_falling_series(self) -> None:
        assert progress_trend([80, 78, 60, 58]) == Trend.DECLINING

    def test_flat_series(self) -> None:
        assert progress_trend([70, 72, 71, 73]) == Trend.STABLE

    def test_odd_length_first_half_larger(self) -> None:
        """[60, 60, 60] vs [90, 90]: first half is the first three values."""
        assert progress_trend([60, 60, 60, 90, 90]) == Trend.IMPROVING

    @pytest.mark.parametrize("scores", [[], [75]])
    def test_short_series_stable(self, scores) -> None:
        assert progress_trend(scores) == Trend.STABLE


class TestBodyWeightSummary:
    """Tests for body weight progress."""

    @staticmethod
    def measurement(day: int, body_weight, is_baseline: bool = False) -> Measurement:
        return Measurement(
            date=datetime(2026, 3, day, tzinfo=timezone.utc),
            body_weight=body_weight,
            is_baseline=is_baseline,
        )

    def test_weight_loss_is_improving(self) -> None:
        summary = summarize_body_weight(
            [self.measurement(1, 82.0), self.measurement(8, 81.0), self.measurement(15, 80.0)]
        )

        assert summary.baseline == 82.0
        assert summary.current == 80.0
        assert summary.change == pytest.approx(2.0)
        assert summary.trend == Trend.IMPROVING

    def test_weight_gain_is_declining(self) -> None:
        summary = summarize_body_weight([self.measurement(1, 80.0), self.measurement(8, 81.5)])

        assert summary.change == pytest.approx(-1.5)
        assert summary.trend == Trend.DECLINING

    def test_flagged_baseline_preferred(self) -> None:
        summary = summarize_body_weight(
            [
                self.measurement(1, 90.0),
                self.measurement(8, 85.0, is_baseline=True),
                self.measurement(15, 84.8),
            ]
        )

        assert summary.baseline == 85.0
        assert summary.trend == Trend.STABLE

    def test_entries_without_weight_ignored(self) -> None:
        summary = summarize_body_weight(
            [self.measurement(1, 80.0), self.measurement(8, None), self.measurement(3, 79.0)]
        )

        assert summary.current == 79.0

    def test_single_entry_has_no_trend(self) -> None:
        summary = summarize_body_weight([self.measurement(1, 80.0, is_baseline=True)])

        assert summary.trend is None
        assert summary.change == 0

    def test_no_measurements(self) -> None:
        summary = summarize_body_weight([])

        assert summary.baseline is None
        assert summary.current is None
        assert summary.trend is None
