"""Workout data models: basic summaries, detail metrics and synced records."""

from datetime import datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator

from .timestamps import normalize_timestamp
from .units import DistanceUnit, format_distance, format_duration, format_pace


class BasicWorkout(BaseModel):
    """
    Identity-bearing workout summary used for cheap diffing.

    Carries only what the workout source can list without per-workout queries.
    """

    source_id: str = Field(
        description="Opaque workout identifier assigned by the workout source",
        alias="id",
    )
    start_time: datetime = Field(
        description="Workout start timestamp",
        alias="startTime",
    )
    distance_meters: float = Field(
        description="Total distance in meters",
        alias="distanceMeters",
        ge=0,
    )
    duration_seconds: float = Field(
        description="Total duration in seconds",
        alias="durationSeconds",
        ge=0,
    )

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator("start_time")
    @classmethod
    def _aware_start(cls, value: datetime) -> datetime:
        return normalize_timestamp(value)


class WorkoutDetail(BaseModel):
    """Per-workout metrics that are expensive to fetch from the source."""

    calories_burned: float | None = Field(
        default=None,
        description="Active energy burned (kcal)",
        alias="caloriesBurned",
        ge=0,
    )
    average_heart_rate: float | None = Field(
        default=None,
        description="Average heart rate (bpm)",
        alias="avgHeartRate",
        ge=0,
    )
    max_heart_rate: float | None = Field(
        default=None,
        description="Maximum heart rate (bpm)",
        alias="maxHeartRate",
        ge=0,
    )
    min_heart_rate: float | None = Field(
        default=None,
        description="Minimum heart rate (bpm)",
        alias="minHeartRate",
        ge=0,
    )
    cadence: float | None = Field(
        default=None,
        description="Average cadence (steps per minute)",
        ge=0,
    )
    stride_length: float | None = Field(
        default=None,
        description="Average stride length (meters)",
        alias="strideLength",
        ge=0,
    )
    step_count: int | None = Field(
        default=None,
        description="Total steps taken",
        alias="stepCount",
        ge=0,
    )

    model_config = {"populate_by_name": True}


class WorkoutRecord(BaseModel):
    """
    One completed run.

    Starts out as a basic record (identity fields only) and is promoted to a
    detailed record with with_detail() once it is known to be new.
    """

    id: UUID = Field(
        default_factory=uuid4,
        description="Local identifier assigned before remote persistence",
    )
    source_id: str | None = Field(
        default=None,
        description="Identifier of the workout at the source",
    )
    start_time: datetime = Field(description="Workout start timestamp")
    distance_meters: float = Field(description="Total distance in meters", ge=0)
    duration_seconds: float = Field(description="Total duration in seconds", ge=0)

    calories_burned: float | None = Field(default=None, ge=0)
    average_heart_rate: float | None = Field(default=None, ge=0)
    max_heart_rate: float | None = Field(default=None, ge=0)
    min_heart_rate: float | None = Field(default=None, ge=0)
    cadence: float | None = Field(default=None, ge=0)
    stride_length: float | None = Field(default=None, ge=0)
    step_count: int | None = Field(default=None, ge=0)

    @field_validator("start_time")
    @classmethod
    def _aware_start(cls, value: datetime) -> datetime:
        return normalize_timestamp(value)

    @classmethod
    def from_basic(cls, basic: BasicWorkout) -> "WorkoutRecord":
        """Build a basic record from a source summary."""
        return cls(
            source_id=basic.source_id,
            start_time=basic.start_time,
            distance_meters=basic.distance_meters,
            duration_seconds=basic.duration_seconds,
        )

    def with_detail(self, detail: WorkoutDetail) -> "WorkoutRecord":
        """
        Return a detailed copy of this record.

        Cadence is derived from the step count when the source did not report it.

        Args:
            detail: Metrics fetched from the workout source

        Returns:
            New WorkoutRecord with all detail fields populated
        """
        cadence = detail.cadence
        if cadence is None and detail.step_count is not None and self.duration_seconds > 0:
            cadence = detail.step_count / (self.duration_seconds / 60.0)

        return self.model_copy(
            update={
                "calories_burned": detail.calories_burned,
                "average_heart_rate": detail.average_heart_rate,
                "max_heart_rate": detail.max_heart_rate,
                "min_heart_rate": detail.min_heart_rate,
                "cadence": cadence,
                "stride_length": detail.stride_length,
                "step_count": detail.step_count,
            }
        )

    @property
    def distance_km(self) -> float:
        return self.distance_meters / 1000.0

    @property
    def average_pace_per_km(self) -> float | None:
        """Average pace in seconds per kilometer, None for zero-distance workouts."""
        if self.distance_km <= 0:
            return None
        return self.duration_seconds / self.distance_km

    @property
    def is_detailed(self) -> bool:
        return any(
            value is not None
            for value in (
                self.calories_burned,
                self.average_heart_rate,
                self.cadence,
                self.stride_length,
                self.step_count,
            )
        )

    def formatted_distance(self, unit: DistanceUnit = DistanceUnit.KILOMETERS) -> str:
        return format_distance(self.distance_km, unit)

    def formatted_duration(self) -> str:
        return format_duration(self.duration_seconds)

    def formatted_pace(self, unit: DistanceUnit = DistanceUnit.KILOMETERS) -> str:
        return format_pace(self.average_pace_per_km, unit)
