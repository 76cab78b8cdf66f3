"""Per-kilometer / per-mile splits from a GPS trace."""

import logging
from collections.abc import Sequence

from ..models.route import LocationFix
from ..models.split import Split
from ..models.units import DistanceUnit
from .distance import fix_distance, reached

logger = logging.getLogger(__name__)


def calculate_splits(
    locations: Sequence[LocationFix],
    unit: DistanceUnit = DistanceUnit.KILOMETERS,
) -> list[Split]:
    """
    Split a GPS trace into fixed-distance splits.

    A split closes at the first fix where the distance accumulated since the
    previous closing fix reaches the unit interval (1000 m or 1609.34 m). Its
    duration is the time between the fix that opened the window and the fix
    that closed it. A trailing remainder becomes a final split only when it is
    longer than the unit's minimum fraction (100 m or 160 m); otherwise it is
    dropped.

    Args:
        locations: GPS fixes in recording order
        unit: Split unit

    Returns:
        Splits numbered from 1; empty when fewer than two fixes are given
    """
    if len(locations) < 2:
        return []

    interval = unit.split_interval_meters
    splits: list[Split] = []
    split_number = 1
    start_index = 0
    accumulated = 0.0

    for i in range(1, len(locations)):
        accumulated += fix_distance(locations[i - 1], locations[i])

        if reached(accumulated, interval):
            splits.append(
                _make_split(split_number, unit, accumulated, locations[start_index], locations[i])
            )
            split_number += 1
            start_index = i
            accumulated = 0.0

    last_index = len(locations) - 1
    if accumulated > unit.min_fraction_meters and start_index < last_index:
        splits.append(
            _make_split(
                split_number, unit, accumulated, locations[start_index], locations[last_index]
            )
        )
    elif accumulated > 0:
        logger.debug(f"Dropped {accumulated:.1f} m remainder (< {unit.min_fraction_meters} m)")

    return splits


def _make_split(
    number: int,
    unit: DistanceUnit,
    distance: float,
    start: LocationFix,
    end: LocationFix,
) -> Split:
    return Split(
        split_number=number,
        split_unit=unit,
        distance_meters=distance,
        duration_seconds=max(0.0, (end.timestamp - start.timestamp).total_seconds()),
        start_time=start.timestamp,
        end_time=end.timestamp,
    )
