"""Interfaces the sync engine expects from its collaborators."""

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

from ..models.heart_rate import HeartRateSample
from ..models.route import LocationFix
from ..models.workout import BasicWorkout, WorkoutDetail, WorkoutRecord


class WorkoutSource(Protocol):
    """Where workouts are recorded (a phone's health store, a watch export service...)."""

    def request_authorization(self) -> None:
        """Raise AuthorizationDenied or SourceUnavailable when access is not possible."""
        ...

    def fetch_basic_workouts(self) -> list[BasicWorkout]:
        """All-time workout summaries, most recent first."""
        ...

    def fetch_workout_detail(self, workout_id: str) -> WorkoutDetail: ...

    def fetch_location_trace(self, workout_id: str) -> list[LocationFix]: ...

    def fetch_heart_rate_samples(
        self, workout_id: str, workout_start: datetime | None = None
    ) -> list[HeartRateSample]: ...


class RecordStore(Protocol):
    """Remote store of synced workouts."""

    def existing_timestamps(self, user_id: str) -> set[datetime]:
        """Start timestamps of every workout already synced for the user."""
        ...

    def write_records(self, user_id: str, records: Sequence[WorkoutRecord]) -> int:
        """
        Append records for the user.

        Returns the number written; raises WriteFailed with the count written so far
        if a write fails partway.
        """
        ...
