"""Heart rate aggregation over time windows."""

from collections.abc import Sequence
from datetime import datetime

from ..models.heart_rate import HeartRateSample, HeartRateStats
from ..models.split import Split
from ..models.timestamps import normalize_timestamp


def aggregate(
    samples: Sequence[HeartRateSample],
    window_start: datetime,
    window_end: datetime,
) -> HeartRateStats:
    """
    Average, max and min bpm of the samples inside [window_start, window_end].

    A window without samples yields empty stats rather than zeros. Naive bounds
    are read as UTC.
    """
    window_start = normalize_timestamp(window_start)
    window_end = normalize_timestamp(window_end)
    bpms = [s.bpm for s in samples if window_start <= s.timestamp <= window_end]
    if not bpms:
        return HeartRateStats()

    return HeartRateStats(
        average=sum(bpms) / len(bpms),
        maximum=max(bpms),
        minimum=min(bpms),
    )


def enrich_splits_with_heart_rate(
    splits: Sequence[Split],
    samples: Sequence[HeartRateSample],
) -> list[Split]:
    """
    Attach per-split heart rate statistics.

    Each split is aggregated over its own start/end bounds. The input splits are
    not modified; splits without bounds are copied as they are.

    Args:
        splits: Splits from calculate_splits()
        samples: Heart rate samples of the same workout

    Returns:
        New list of splits with heart rate fields populated where data exists
    """
    enriched: list[Split] = []
    for split in splits:
        if split.start_time is None or split.end_time is None:
            enriched.append(split.model_copy())
            continue

        stats = aggregate(samples, split.start_time, split.end_time)
        enriched.append(
            split.model_copy(
                update={
                    "average_heart_rate": stats.average,
                    "max_heart_rate": stats.maximum,
                    "min_heart_rate": stats.minimum,
                }
            )
        )
    return enriched


def with_elapsed(
    samples: Sequence[HeartRateSample], workout_start: datetime
) -> list[HeartRateSample]:
    """Copy samples with elapsed_seconds measured from workout_start (naive = UTC)."""
    workout_start = normalize_timestamp(workout_start)
    return [
        s.model_copy(update={"elapsed_seconds": (s.timestamp - workout_start).total_seconds()})
        for s in samples
    ]
