"""Workout synchronization between a workout source and the remote record store."""

from .adapters import RecordStore, WorkoutSource
from .diff import DEFAULT_TOLERANCE, new_records
from .engine import SyncEngine
from .errors import (
    AuthorizationDenied,
    FetchFailed,
    SourceUnavailable,
    SyncCancelled,
    SyncError,
    WriteFailed,
)
from .phase import PhaseKind, SyncPhase

__all__ = [
    "SyncEngine",
    "SyncPhase",
    "PhaseKind",
    "new_records",
    "DEFAULT_TOLERANCE",
    "WorkoutSource",
    "RecordStore",
    # Errors
    "SyncError",
    "AuthorizationDenied",
    "SourceUnavailable",
    "FetchFailed",
    "WriteFailed",
    "SyncCancelled",
]
