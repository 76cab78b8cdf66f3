"""Sync pipeline phases."""

from enum import StrEnum

from pydantic import BaseModel


class PhaseKind(StrEnum):
    IDLE = "idle"
    CONNECTING = "connecting"
    FETCHING = "fetching"
    SYNCING = "syncing"
    COMPLETED = "completed"
    FAILED = "failed"


TERMINAL_KINDS = frozenset({PhaseKind.COMPLETED, PhaseKind.FAILED})


class SyncPhase(BaseModel):
    """
    One state of a sync run.

    Runs move strictly forward through
    IDLE -> CONNECTING -> FETCHING -> SYNCING(current, total) -> COMPLETED(count) | FAILED.
    Use the classmethod constructors rather than building instances directly.
    """

    kind: PhaseKind
    current: int = 0
    total: int = 0
    count: int = 0
    error: Exception | None = None

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @classmethod
    def idle(cls) -> "SyncPhase":
        return cls(kind=PhaseKind.IDLE)

    @classmethod
    def connecting(cls) -> "SyncPhase":
        return cls(kind=PhaseKind.CONNECTING)

    @classmethod
    def fetching(cls) -> "SyncPhase":
        return cls(kind=PhaseKind.FETCHING)

    @classmethod
    def syncing(cls, current: int, total: int) -> "SyncPhase":
        return cls(kind=PhaseKind.SYNCING, current=current, total=total)

    @classmethod
    def completed(cls, count: int) -> "SyncPhase":
        return cls(kind=PhaseKind.COMPLETED, count=count)

    @classmethod
    def failed(cls, error: Exception | None = None) -> "SyncPhase":
        return cls(kind=PhaseKind.FAILED, error=error)

    @property
    def is_terminal(self) -> bool:
        return self.kind in TERMINAL_KINDS

    @property
    def is_failed(self) -> bool:
        return self.kind is PhaseKind.FAILED

    @property
    def message(self) -> str:
        """Status line for display."""
        match self.kind:
            case PhaseKind.CONNECTING:
                return "Connecting to workout source..."
            case PhaseKind.FETCHING:
                return "Fetching data..."
            case PhaseKind.SYNCING:
                return f"Syncing... {self.current}/{self.total}"
            case PhaseKind.COMPLETED:
                if self.count > 0:
                    return f"{self.count} new records synced"
                return "Sync complete"
            case PhaseKind.FAILED:
                return "Sync failed"
            case _:
                return ""

    @property
    def progress(self) -> float:
        """Overall progress between 0.0 and 1.0."""
        match self.kind:
            case PhaseKind.CONNECTING:
                return 0.1
            case PhaseKind.FETCHING:
                return 0.3
            case PhaseKind.SYNCING:
                if self.total <= 0:
                    return 0.5
                return 0.3 + 0.7 * self.current / self.total
            case PhaseKind.COMPLETED:
                return 1.0
            case _:
                return 0.0

    def __str__(self) -> str:
        match self.kind:
            case PhaseKind.SYNCING:
                return f"syncing({self.current}/{self.total})"
            case PhaseKind.COMPLETED:
                return f"completed({self.count})"
            case _:
                return self.kind.value
