"""Route and heart rate analytics for a single workout."""

from .distance import haversine_meters, pace_per_km, pace_percentiles, total_distance
from .heart_rate import aggregate, enrich_splits_with_heart_rate, with_elapsed
from .segments import calculate_pace_percentiles, calculate_route_segments
from .splits import calculate_splits

__all__ = [
    "calculate_splits",
    "calculate_route_segments",
    "calculate_pace_percentiles",
    "enrich_splits_with_heart_rate",
    "aggregate",
    "with_elapsed",
    "haversine_meters",
    "pace_per_km",
    "pace_percentiles",
    "total_distance",
]
