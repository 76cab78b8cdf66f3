"""Heart rate sample and window statistics models."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from .timestamps import normalize_timestamp


class HeartRateSample(BaseModel):
    """One instantaneous heart rate reading during a workout."""

    timestamp: datetime = Field(description="Time of the reading")
    bpm: float = Field(description="Heart rate in beats per minute", ge=0)
    elapsed_seconds: float = Field(
        default=0.0,
        description="Seconds since the workout started",
        alias="elapsedSeconds",
    )

    model_config = {"populate_by_name": True}

    @field_validator("timestamp")
    @classmethod
    def _aware_timestamp(cls, value: datetime) -> datetime:
        return normalize_timestamp(value)


class HeartRateStats(BaseModel):
    """Average/max/min heart rate over a time window. All None when no samples fell inside."""

    average: float | None = None
    maximum: float | None = None
    minimum: float | None = None

    @property
    def is_empty(self) -> bool:
        return self.average is None
