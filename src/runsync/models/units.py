"""Distance units and display helpers for runs."""

import math
from enum import StrEnum

KM_TO_MILES = 0.621371
MILES_TO_KM = 1.60934

METERS_PER_KILOMETER = 1000.0
METERS_PER_MILE = 1609.34


class DistanceUnit(StrEnum):
    """Unit used for splits and pace display."""

    KILOMETERS = "km"
    MILES = "mi"

    @property
    def split_interval_meters(self) -> float:
        """Distance covered by one full split."""
        if self is DistanceUnit.MILES:
            return METERS_PER_MILE
        return METERS_PER_KILOMETER

    @property
    def min_fraction_meters(self) -> float:
        """Shortest trailing remainder that still counts as its own split."""
        if self is DistanceUnit.MILES:
            return 160.0
        return 100.0


def km_to_miles(kilometers: float) -> float:
    """Convert kilometers to miles."""
    return kilometers * KM_TO_MILES


def format_distance(
    kilometers: float, unit: DistanceUnit = DistanceUnit.KILOMETERS, decimals: int = 2
) -> str:
    """
    Format a distance for display.

    Args:
        kilometers: Distance in kilometers
        unit: Unit to display in
        decimals: Number of decimal places

    Returns:
        e.g. "5.23 km" or "3.25 mi"
    """
    value = kilometers if unit is DistanceUnit.KILOMETERS else km_to_miles(kilometers)
    return f"{value:.{decimals}f} {unit.value}"


def format_pace(
    seconds_per_km: float | None, unit: DistanceUnit = DistanceUnit.KILOMETERS
) -> str:
    """
    Format a pace given in seconds per kilometer.

    Args:
        seconds_per_km: Pace in seconds per kilometer (None when undefined)
        unit: Unit to display in

    Returns:
        e.g. "5:30 /km" or "8:51 /mi", or "--:--" when the pace is undefined
    """
    if seconds_per_km is None or seconds_per_km <= 0 or not math.isfinite(seconds_per_km):
        return "--:--"

    pace = seconds_per_km if unit is DistanceUnit.KILOMETERS else seconds_per_km * MILES_TO_KM
    minutes = int(pace) // 60
    seconds = int(pace) % 60
    return f"{minutes}:{seconds:02d} /{unit.value}"


def format_duration(seconds: float) -> str:
    """Format elapsed seconds as H:MM:SS, or M:SS under an hour."""
    total = int(seconds)
    hours = total // 3600
    minutes = (total % 3600) // 60
    secs = total % 60
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"
