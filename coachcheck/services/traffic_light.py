"""Traffic light thresholds for overall check-in scores.

Coaches pick a scoring profile per client. Each profile sets the highest
score that is still red and the highest that is still orange; anything
above is green.
"""

from dataclasses import dataclass

from coachcheck.models.checkin import TrafficLight


@dataclass(frozen=True)
class ScoringThresholds:
    """Upper bounds (inclusive) of the red and orange bands."""

    red_max: int
    orange_max: int


@dataclass(frozen=True)
class ScoringProfile:
    """Named threshold preset."""

    key: str
    name: str
    description: str
    thresholds: ScoringThresholds


SCORING_PROFILES: dict[str, ScoringProfile] = {
    "lifestyle": ScoringProfile(
        key="lifestyle",
        name="Lifestyle",
        description="General wellness, flexible approach - More lenient standards",
        thresholds=ScoringThresholds(red_max=33, orange_max=80),
    ),
    "high-performance": ScoringProfile(
        key="high-performance",
        name="High Performance",
        description="Elite athletes, competitive clients - Stricter standards",
        thresholds=ScoringThresholds(red_max=75, orange_max=89),
    ),
    "moderate": ScoringProfile(
        key="moderate",
        name="Moderate",
        description="Active clients, good adherence expected",
        thresholds=ScoringThresholds(red_max=60, orange_max=85),
    ),
    "custom": ScoringProfile(
        key="custom",
        name="Custom",
        description="Customized thresholds for specific needs",
        thresholds=ScoringThresholds(red_max=70, orange_max=85),
    ),
}


def get_profile(key: str) -> ScoringProfile:
    """Look up a scoring profile by key.

    Raises:
        ValueError: If the profile is unknown
    """
    try:
        return SCORING_PROFILES[key]
    except KeyError:
        raise ValueError(f"Unknown scoring profile: {key}") from None


def get_traffic_light_status(score: float, thresholds: ScoringThresholds) -> TrafficLight:
    """Traffic light for an overall 0-100 score."""
    if score <= thresholds.red_max:
        return TrafficLight.RED
    if score <= thresholds.orange_max:
        return TrafficLight.ORANGE
    return TrafficLight.GREEN


def describe_thresholds(thresholds: ScoringThresholds) -> str:
    """Human-readable score ranges, e.g. for coach settings screens."""
    return (
        f"Red: 0-{thresholds.red_max}% | "
        f"Orange: {thresholds.red_max + 1}-{thresholds.orange_max}% | "
        f"Green: {thresholds.orange_max + 1}-100%"
    )
