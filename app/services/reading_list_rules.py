"""
Date rules for reading list items.

Pure functions, no I/O: handlers call validate_reading_list_dates on the
merged state before anything is written.
"""

from datetime import datetime, timezone
from typing import Optional

from app.models.common import ReadingStatus

STARTED_AT_REQUIRED = "startedAt is required for status 'reading' or 'completed'"
COMPLETED_AT_REQUIRED = "completedAt is required for status 'completed'"
COMPLETED_BEFORE_STARTED = "completedAt cannot be before startedAt"


def normalize_timestamp(value: Optional[datetime]) -> Optional[datetime]:
    """Naive UTC, the form Mongo hands back, so stored and incoming values compare."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def validate_reading_list_dates(
    status: Optional[ReadingStatus],
    started_at: Optional[datetime],
    completed_at: Optional[datetime],
) -> Optional[str]:
    """Return the first violated rule's message, or None when the dates are valid."""
    if status in (ReadingStatus.READING, ReadingStatus.COMPLETED) and started_at is None:
        return STARTED_AT_REQUIRED

    if status == ReadingStatus.COMPLETED and completed_at is None:
        return COMPLETED_AT_REQUIRED

    if started_at is not None and completed_at is not None:
        if normalize_timestamp(completed_at) < normalize_timestamp(started_at):
            return COMPLETED_BEFORE_STARTED

    return None
