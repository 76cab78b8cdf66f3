"""Timestamp normalization shared by the models and the sync diff."""

from datetime import UTC, datetime


def normalize_timestamp(value: datetime) -> datetime:
    """Make a timestamp timezone-aware, treating naive values as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
