"""Time and datetime utilities."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Get current UTC datetime.

    Returns:
        Current datetime in UTC timezone
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_week_date(dt: datetime) -> str:
    """Format a submission timestamp the way progress grids label weeks.

    Args:
        dt: Submission datetime

    Returns:
        Date string in dd/mm/yyyy form
    """
    return ensure_utc(dt).strftime("%d/%m/%Y")

