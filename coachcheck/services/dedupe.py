"""Collapse repeated submissions before building progress views.

Clients occasionally submit the same check-in more than once. Submissions
for the same assignment, or without an assignment but for the same form on
the same calendar day, are reduced to the most recent one.
"""

from typing import Iterable

from coachcheck.models.checkin import SubmissionRecord
from coachcheck.utils.time import ensure_utc


def dedupe_key(record: SubmissionRecord) -> str:
    """Key identifying submissions that answer the same check-in."""
    if record.assignment_id:
        return record.assignment_id
    day = ensure_utc(record.submitted_at).date().isoformat()
    return f"{record.form_id or 'unknown'}-{day}"


def deduplicate_submissions(
    records: Iterable[SubmissionRecord],
) -> list[SubmissionRecord]:
    """Keep only the latest submission per assignment (or form and day).

    The order in which keys are first encountered is preserved.
    """
    latest: dict[str, SubmissionRecord] = {}
    for record in records:
        key = dedupe_key(record)
        existing = latest.get(key)
        if existing is None or ensure_utc(record.submitted_at) > ensure_utc(
            existing.submitted_at
        ):
            latest[key] = record
    return list(latest.values())
