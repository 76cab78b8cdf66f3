"""Pace-colored route segments for map rendering."""

from collections.abc import Sequence

from ..models.route import Coordinate, LocationFix, RouteSegment
from .distance import fix_distance, pace_percentiles, reached

DEFAULT_SEGMENT_METERS = 100.0


def calculate_route_segments(
    locations: Sequence[LocationFix],
    segment_distance: float = DEFAULT_SEGMENT_METERS,
) -> list[RouteSegment]:
    """
    Cut a GPS trace into fixed-distance segments tagged with pace.

    Each segment keeps its full coordinate path and starts at the previous
    segment's last point. Pace is always seconds per kilometer. A trailing
    partial segment is kept only if it is longer than half of segment_distance.

    Args:
        locations: GPS fixes in recording order
        segment_distance: Target segment length in meters

    Returns:
        Segments in route order; empty when fewer than two fixes are given
    """
    if len(locations) < 2 or segment_distance <= 0:
        return []

    segments: list[RouteSegment] = []
    coords: list[Coordinate] = [locations[0].coordinate]
    start_index = 0
    accumulated = 0.0

    for i in range(1, len(locations)):
        accumulated += fix_distance(locations[i - 1], locations[i])
        coords.append(locations[i].coordinate)

        if reached(accumulated, segment_distance):
            segment = _make_segment(coords, accumulated, locations[start_index], locations[i])
            segments.append(segment)
            coords = [locations[i].coordinate]
            start_index = i
            accumulated = 0.0

    if accumulated > segment_distance / 2 and len(coords) >= 2:
        segments.append(_make_segment(coords, accumulated, locations[start_index], locations[-1]))

    return segments


def calculate_pace_percentiles(segments: Sequence[RouteSegment]) -> tuple[float, float]:
    """(fast_pace, slow_pace) bounds for coloring segments, see pace_percentiles()."""
    return pace_percentiles([segment.pace_per_km for segment in segments])


def _make_segment(
    coords: list[Coordinate],
    distance: float,
    start: LocationFix,
    end: LocationFix,
) -> RouteSegment:
    elapsed = max(0.0, (end.timestamp - start.timestamp).total_seconds())
    return RouteSegment(coordinates=list(coords), pace_per_km=elapsed / (distance / 1000))
