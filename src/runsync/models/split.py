"""Split data model for per-kilometer/per-mile pace tracking."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from .timestamps import normalize_timestamp
from .units import DistanceUnit, format_pace


class Split(BaseModel):
    """
    Represents a single split (kilometer or mile) of a run.

    Computed from the GPS trace, never persisted. Start/end bounds are kept so
    the split can later be enriched with heart-rate statistics for its window.
    """

    split_number: int = Field(
        description="Sequential split number (1, 2, 3, etc.)",
        ge=1,
    )
    split_unit: DistanceUnit = Field(
        default=DistanceUnit.KILOMETERS,
        description="Unit of measurement: 'km' for kilometers, 'mi' for miles",
    )

    # Per-split metrics
    distance_meters: float = Field(
        description="Distance covered in this split (meters)",
        ge=0,
    )
    duration_seconds: float = Field(
        description="Time spent in this split (seconds)",
        ge=0,
    )

    # Time bounds used for heart-rate enrichment
    start_time: datetime | None = Field(
        default=None,
        description="Timestamp of the fix that opened this split",
    )
    end_time: datetime | None = Field(
        default=None,
        description="Timestamp of the fix that closed this split",
    )

    # Heart rate within the split window
    average_heart_rate: float | None = Field(
        default=None,
        description="Average heart rate in this split (beats per minute)",
        ge=0,
    )
    max_heart_rate: float | None = Field(
        default=None,
        description="Maximum heart rate in this split (beats per minute)",
        ge=0,
    )
    min_heart_rate: float | None = Field(
        default=None,
        description="Minimum heart rate in this split (beats per minute)",
        ge=0,
    )

    model_config = {"populate_by_name": True}

    @field_validator("start_time", "end_time")
    @classmethod
    def _aware_bounds(cls, value: datetime | None) -> datetime | None:
        return None if value is None else normalize_timestamp(value)

    @property
    def pace_per_km(self) -> float:
        """Pace in seconds per kilometer (0 for an empty split)."""
        if self.distance_meters <= 0:
            return 0.0
        return self.duration_seconds / (self.distance_meters / 1000)

    @property
    def is_full(self) -> bool:
        """Whether the split covers (roughly) one whole unit."""
        interval = self.split_unit.split_interval_meters
        return interval * 0.95 <= self.distance_meters <= interval * 1.05

    @property
    def label(self) -> str:
        """Display label, e.g. "3 km" for a full split or "0.45 km" for a remainder."""
        if self.is_full:
            return f"{self.split_number} {self.split_unit.value}"
        fraction = self.distance_meters / self.split_unit.split_interval_meters
        return f"{fraction:.2f} {self.split_unit.value}"

    def formatted_pace(self) -> str:
        return format_pace(self.pace_per_km, self.split_unit)
