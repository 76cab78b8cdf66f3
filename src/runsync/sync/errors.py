"""Errors raised while synchronizing workouts."""


class SyncError(Exception):
    """Base class for failures that end a sync run."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class AuthorizationDenied(SyncError):
    """The user or the workout source declined access."""

    def __init__(self, message: str = "Workout data access is not authorized") -> None:
        super().__init__(message)


class SourceUnavailable(SyncError):
    """The workout source cannot be queried at all."""

    def __init__(
        self,
        message: str = "Workout source is not available",
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message, cause)


class FetchFailed(SyncError):
    """Reading summaries, details or remote timestamps failed."""

    def __init__(self, cause: BaseException, message: str | None = None) -> None:
        super().__init__(message or f"Failed to fetch data: {cause}", cause)


class WriteFailed(SyncError):
    """
    Uploading records failed partway.

    Attributes:
        partial_count: Records confirmed written before the failure
    """

    def __init__(self, cause: BaseException, partial_count: int = 0) -> None:
        super().__init__(
            f"Failed to write records after {partial_count} succeeded: {cause}", cause
        )
        self.partial_count = partial_count


class SyncCancelled(SyncError):
    """The caller cancelled the run before it completed."""

    def __init__(self, message: str = "Sync cancelled") -> None:
        super().__init__(message)
