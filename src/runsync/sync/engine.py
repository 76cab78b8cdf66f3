"""Workout sync engine: diff source workouts against the remote store and upload new ones."""

import logging
import queue
import threading
from collections.abc import Callable, Iterator
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta
from typing import TypeVar

from ..models.workout import BasicWorkout, WorkoutRecord
from .adapters import RecordStore, WorkoutSource
from .diff import DEFAULT_TOLERANCE, new_records
from .errors import FetchFailed, SourceUnavailable, SyncCancelled, SyncError, WriteFailed
from .phase import SyncPhase

logger = logging.getLogger(__name__)

T = TypeVar("T")

PhaseSink = Callable[[SyncPhase], None]

# Seconds stream() waits for its worker after an early close
STREAM_JOIN_TIMEOUT = 30.0


class SyncEngine:
    """
    Synchronizes workouts from a workout source into a remote record store.

    Each run fetches cheap summaries, diffs them against the timestamps already
    in the store, fetches details only for new workouts and appends those. A
    workout is uploaded at most once: anything written by an earlier (even
    failed) run is excluded by the next run's diff.

    Callers must not start a second run for the same user before the previous
    run has reached a terminal phase.
    """

    def __init__(
        self,
        source: WorkoutSource,
        store: RecordStore,
        tolerance: timedelta = DEFAULT_TOLERANCE,
    ) -> None:
        """
        Initialize sync engine.

        Args:
            source: Workout source adapter
            store: Remote record store adapter
            tolerance: Max timestamp distance for a workout to count as already synced
        """
        self.source = source
        self.store = store
        self.tolerance = tolerance

        self._phase = SyncPhase.idle()
        self._syncing = False

    @property
    def phase(self) -> SyncPhase:
        """Most recently published phase."""
        return self._phase

    @property
    def is_syncing(self) -> bool:
        return self._syncing

    def synchronize(
        self,
        user_id: str,
        on_phase: PhaseSink | None = None,
        cancel_event: threading.Event | None = None,
    ) -> SyncPhase:
        """
        Run one sync for a user.

        Every phase change is passed to on_phase as it happens. Failures never
        raise; they end the run in a FAILED phase carrying the error.

        Args:
            user_id: Owner of the records in the remote store
            on_phase: Optional callback receiving each phase
            cancel_event: Optional event; when set, the run stops at the next step boundary.
                A cancel that arrives while records are being written does not interrupt
                the upload, so that run still ends in COMPLETED with the rows it wrote.

        Returns:
            Terminal phase: COMPLETED(count) or FAILED
        """
        self._syncing = True
        logger.info(f"Starting sync for user {user_id}")

        try:
            count = self._run(user_id, on_phase, cancel_event)
            terminal = SyncPhase.completed(count)
            logger.info(f"Sync completed for user {user_id}: {count} new records")
        except SyncError as e:
            terminal = SyncPhase.failed(e)
            logger.error(f"Sync failed for user {user_id} during {self._phase}: {e}")
        finally:
            self._syncing = False

        self._publish(terminal, on_phase)
        return terminal

    def stream(
        self,
        user_id: str,
        cancel_event: threading.Event | None = None,
    ) -> Iterator[SyncPhase]:
        """
        Run a sync on a worker thread and yield its phases.

        The iterator ends after the terminal phase. Closing it early sets the
        cancel event and waits up to STREAM_JOIN_TIMEOUT seconds for the worker.

        Example:
            ```python
            with closing(engine.stream(user_id)) as phases:
                for phase in phases:
                    print(phase.message)
            ```
        """
        if cancel_event is None:
            cancel_event = threading.Event()
        phases: queue.Queue[SyncPhase] = queue.Queue()

        def worker() -> None:
            try:
                self.synchronize(user_id, phases.put, cancel_event)
            except Exception as e:
                logger.exception(f"Sync worker crashed for user {user_id}")
                phases.put(SyncPhase.failed(e))

        thread = threading.Thread(target=worker, name=f"runsync-{user_id}", daemon=True)
        thread.start()

        finished = False
        try:
            while not finished:
                phase = phases.get()
                finished = phase.is_terminal
                yield phase
        finally:
            if not finished:
                cancel_event.set()
            thread.join(None if finished else STREAM_JOIN_TIMEOUT)
            if thread.is_alive():
                logger.warning(f"Sync worker for user {user_id} still running after cancel")

    def _run(
        self,
        user_id: str,
        on_phase: PhaseSink | None,
        cancel_event: threading.Event | None,
    ) -> int:
        # 1. Authorization
        self._publish(SyncPhase.connecting(), on_phase)
        self._call(self.source.request_authorization, _unavailable)
        _check_cancelled(cancel_event)

        # 2-3. Summaries from the source, timestamps from the store
        self._publish(SyncPhase.fetching(), on_phase)
        workouts = self._call(self.source.fetch_basic_workouts, FetchFailed)
        existing = self._call(lambda: self.store.existing_timestamps(user_id), FetchFailed)
        _check_cancelled(cancel_event)

        # 4. Diff
        pending = new_records(workouts, existing, self.tolerance)
        logger.info(
            f"Found {len(workouts)} workouts at source, {len(existing)} already synced, "
            f"{len(pending)} new"
        )
        if not pending:
            return 0

        # 5. Details for new workouts only
        records = self._fetch_details(pending, on_phase, cancel_event)
        _check_cancelled(cancel_event)

        # 6. Upload
        return self._call(lambda: self.store.write_records(user_id, records), _write_failed)

    def _fetch_details(
        self,
        pending: list[BasicWorkout],
        on_phase: PhaseSink | None,
        cancel_event: threading.Event | None,
    ) -> list[WorkoutRecord]:
        total = len(pending)
        self._publish(SyncPhase.syncing(0, total), on_phase)

        records: list[WorkoutRecord] = []
        with ThreadPoolExecutor(max_workers=1, thread_name_prefix="runsync-detail") as executor:
            for index, workout in enumerate(pending, start=1):
                _check_cancelled(cancel_event)
                future = executor.submit(self.source.fetch_workout_detail, workout.source_id)
                detail = self._call(future.result, FetchFailed)
                records.append(WorkoutRecord.from_basic(workout).with_detail(detail))
                self._publish(SyncPhase.syncing(index, total), on_phase)

        return records

    def _publish(self, phase: SyncPhase, on_phase: PhaseSink | None) -> None:
        self._phase = phase
        logger.debug(f"Sync phase: {phase}")
        if on_phase is not None:
            on_phase(phase)

    @staticmethod
    def _call(func: Callable[[], T], wrap: Callable[[Exception], SyncError]) -> T:
        """Invoke an adapter call, turning unexpected exceptions into SyncErrors."""
        try:
            return func()
        except SyncError:
            raise
        except Exception as e:
            raise wrap(e) from e


def _check_cancelled(cancel_event: threading.Event | None) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise SyncCancelled()


def _unavailable(cause: Exception) -> SyncError:
    return SourceUnavailable(f"Workout source is not available: {cause}", cause)


def _write_failed(cause: Exception) -> SyncError:
    return WriteFailed(cause, 0)
