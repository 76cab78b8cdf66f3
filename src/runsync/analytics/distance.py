"""Distance and pace math shared by the route analytics."""

import math
from collections.abc import Sequence

from ..models.route import LocationFix

EARTH_RADIUS_METERS = 6371000.0

# Running sums of many GPS legs drift by tiny amounts; a split that is short of
# its interval by less than this still closes.
DISTANCE_EPSILON_METERS = 1e-6

DEFAULT_FAST_PACE = 300.0
DEFAULT_SLOW_PACE = 600.0
MIN_SEGMENTS_FOR_PERCENTILE = 10


def haversine_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points in meters."""
    p1 = math.radians(lat1)
    p2 = math.radians(lat2)
    dp = math.radians(lat2 - lat1)
    dl = math.radians(lon2 - lon1)
    a = math.sin(dp / 2) ** 2 + math.cos(p1) * math.cos(p2) * math.sin(dl / 2) ** 2
    return 2 * EARTH_RADIUS_METERS * math.asin(min(1.0, math.sqrt(a)))


def fix_distance(a: LocationFix, b: LocationFix) -> float:
    """Distance between two GPS fixes in meters."""
    return haversine_meters(a.latitude, a.longitude, b.latitude, b.longitude)


def total_distance(locations: Sequence[LocationFix]) -> float:
    """Accumulated distance along a trace in meters."""
    return math.fsum(fix_distance(locations[i - 1], locations[i]) for i in range(1, len(locations)))


def reached(accumulated: float, target: float) -> bool:
    """Whether an accumulated distance has reached a threshold."""
    return accumulated >= target - DISTANCE_EPSILON_METERS


def pace_per_km(duration_seconds: float, distance_meters: float) -> float | None:
    """
    Pace in seconds per kilometer.

    Returns None for a zero distance; the pace is undefined, not zero.
    """
    if distance_meters <= 0:
        return None
    return duration_seconds / (distance_meters / 1000)


def pace_percentiles(paces: Sequence[float]) -> tuple[float, float]:
    """
    Fast and slow pace bounds for a pace-to-color gradient.

    The fast bound is the minimum pace. With 10 or more paces the slow bound is
    the value at rank floor(0.9 * n) of the ascending sort, which leaves the
    slowest tenth (stoplights, photo stops) out of the gradient.

    Args:
        paces: Paces in seconds per kilometer

    Returns:
        (fast_pace, slow_pace)
    """
    if not paces:
        return DEFAULT_FAST_PACE, DEFAULT_SLOW_PACE

    fast = min(paces)
    if len(paces) < MIN_SEGMENTS_FOR_PERCENTILE:
        return fast, max(paces)

    ordered = sorted(paces)
    return fast, ordered[len(ordered) * 9 // 10]
