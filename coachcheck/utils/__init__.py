"""Utility functions."""

from coachcheck.utils.rounding import round_half_up
from coachcheck.utils.time import ensure_utc, format_week_date, utc_now

__all__ = ["utc_now", "ensure_utc", "format_week_date", "round_half_up"]
