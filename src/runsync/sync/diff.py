"""New-workout detection against previously synced timestamps."""

from bisect import bisect_left
from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta

from ..models.timestamps import normalize_timestamp
from ..models.workout import BasicWorkout

DEFAULT_TOLERANCE = timedelta(seconds=60)


def is_synced(
    start_time: datetime,
    sorted_existing: Sequence[datetime],
    tolerance: timedelta = DEFAULT_TOLERANCE,
) -> bool:
    """Whether any existing timestamp lies within tolerance of start_time (inclusive)."""
    start_time = normalize_timestamp(start_time)
    index = bisect_left(sorted_existing, start_time - tolerance)
    return index < len(sorted_existing) and sorted_existing[index] <= start_time + tolerance


def new_records(
    candidates: Sequence[BasicWorkout],
    existing_timestamps: Iterable[datetime],
    tolerance: timedelta = DEFAULT_TOLERANCE,
) -> list[BasicWorkout]:
    """
    Return the candidates that have not been synced yet.

    A candidate counts as synced when a remote timestamp is within tolerance of
    its start time, so two runs on the same day stay distinct while the small
    precision differences between source and store are absorbed.

    Args:
        candidates: Workout summaries from the source
        existing_timestamps: Start times already present in the remote store
        tolerance: Maximum distance between matching timestamps

    Returns:
        Unsynced candidates in their original order
    """
    existing = sorted(normalize_timestamp(ts) for ts in existing_timestamps)
    return [c for c in candidates if not is_synced(c.start_time, existing, tolerance)]
