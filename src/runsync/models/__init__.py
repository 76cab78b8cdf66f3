"""Data models for RunSync."""

from .heart_rate import HeartRateSample, HeartRateStats
from .route import Coordinate, LocationFix, RouteSegment, pace_color, pace_fraction
from .split import Split
from .timestamps import normalize_timestamp
from .units import (
    DistanceUnit,
    format_distance,
    format_duration,
    format_pace,
    km_to_miles,
)
from .workout import BasicWorkout, WorkoutDetail, WorkoutRecord

__all__ = [
    # Workouts
    "BasicWorkout",
    "WorkoutDetail",
    "WorkoutRecord",
    # Route analytics
    "Split",
    "Coordinate",
    "LocationFix",
    "RouteSegment",
    "pace_color",
    "pace_fraction",
    # Heart rate
    "HeartRateSample",
    "HeartRateStats",
    # Units
    "DistanceUnit",
    "km_to_miles",
    "format_distance",
    "format_duration",
    "format_pace",
    # Timestamps
    "normalize_timestamp",
]
