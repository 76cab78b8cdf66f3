"""GPS route models: location fixes and pace-colored route segments."""

import colorsys
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from .timestamps import normalize_timestamp

# Used when the pace range collapses (slow <= fast)
NEUTRAL_SEGMENT_COLOR = "#ffd60a"


class Coordinate(BaseModel):
    """A point on the map."""

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)

    model_config = {"frozen": True}


class LocationFix(BaseModel):
    """One GPS fix from a workout route."""

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    timestamp: datetime = Field(description="Time the fix was recorded")

    model_config = {"frozen": True}

    @field_validator("timestamp")
    @classmethod
    def _aware_timestamp(cls, value: datetime) -> datetime:
        return normalize_timestamp(value)

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(latitude=self.latitude, longitude=self.longitude)


class RouteSegment(BaseModel):
    """
    A fixed-distance slice of a route tagged with its pace.

    The first coordinate repeats the last coordinate of the previous segment so
    consecutive segments render as one continuous line.
    """

    coordinates: list[Coordinate] = Field(
        description="Ordered coordinate path of the segment",
    )
    pace_per_km: float = Field(
        description="Pace over the segment in seconds per kilometer",
        ge=0,
    )

    @field_validator("coordinates")
    @classmethod
    def _at_least_two_points(cls, value: list[Coordinate]) -> list[Coordinate]:
        if len(value) < 2:
            raise ValueError("a route segment needs at least two coordinates")
        return value

    def color(self, fast_pace: float, slow_pace: float) -> str:
        """Gradient color for this segment, see pace_color()."""
        return pace_color(self.pace_per_km, fast_pace, slow_pace)


def pace_fraction(pace: float, fast_pace: float, slow_pace: float) -> float | None:
    """
    Normalize a pace into [0, 1] between the fast and slow bounds.

    Returns None when the bounds do not form a range.
    """
    if slow_pace <= fast_pace:
        return None
    return min(1.0, max(0.0, (pace - fast_pace) / (slow_pace - fast_pace)))


def pace_color(pace: float, fast_pace: float, slow_pace: float) -> str:
    """
    Map a pace onto a green (fast) to red (slow) gradient.

    Args:
        pace: Segment pace in seconds per kilometer
        fast_pace: Pace that maps to green
        slow_pace: Pace that maps to red

    Returns:
        Hex color string like '#21e52a'
    """
    t = pace_fraction(pace, fast_pace, slow_pace)
    if t is None:
        return NEUTRAL_SEGMENT_COLOR

    hue = 0.33 * (1.0 - t)
    r, g, b = colorsys.hsv_to_rgb(hue, 0.85, 0.9)
    return f"#{round(r * 255):02x}{round(g * 255):02x}{round(b * 255):02x}"
