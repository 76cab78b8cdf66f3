"""Repository for synced runs stored in Supabase."""

import logging
from collections.abc import Sequence
from datetime import datetime
from typing import Any, cast

from supabase import Client

from ..models.workout import WorkoutRecord
from ..sync.errors import WriteFailed
from .mappers import parse_timestamp, record_to_run_dict, run_row_to_record

logger = logging.getLogger(__name__)

RUNS_TABLE = "runs"

# Supabase caps every select at 1000 rows
PAGE_SIZE = 1000


class RunsRepository:
    """
    Remote record store backed by the Supabase runs table.

    Records are only ever appended; existing rows are never updated or deleted.
    """

    def __init__(self, supabase: Client, page_size: int = PAGE_SIZE):
        """
        Initialize repository with Supabase client.

        Args:
            supabase: Authenticated Supabase client
            page_size: Rows fetched per select request
        """
        self.supabase = supabase
        self.page_size = page_size

    def _select_all(self, user_id: str, columns: str) -> list[dict[str, Any]]:
        """Select every run row of a user, one page at a time."""
        rows: list[dict[str, Any]] = []
        offset = 0

        while True:
            result = (
                self.supabase.table(RUNS_TABLE)
                .select(columns)
                .eq("user_id", user_id)
                .order("start_time", desc=True)
                .range(offset, offset + self.page_size - 1)
                .execute()
            )
            page = cast(list[dict[str, Any]], result.data)
            rows.extend(page)

            if len(page) < self.page_size:
                return rows
            offset += self.page_size

    def existing_timestamps(self, user_id: str) -> set[datetime]:
        """
        Get start timestamps of all runs already synced for a user.

        Args:
            user_id: User identifier

        Returns:
            Set of timezone-aware start timestamps
        """
        rows = self._select_all(user_id, "start_time")
        logger.debug(f"Found {len(rows)} synced runs for user {user_id}")
        return {parse_timestamp(row["start_time"]) for row in rows}

    def get_user_runs(self, user_id: str) -> list[WorkoutRecord]:
        """
        Get all synced runs for a user, most recent first.

        Args:
            user_id: User identifier

        Returns:
            Detailed workout records
        """
        return [run_row_to_record(row) for row in self._select_all(user_id, "*")]

    def write_records(self, user_id: str, records: Sequence[WorkoutRecord]) -> int:
        """
        Insert records for a user, one row at a time.

        Stops at the first failed insert. Rows inserted before the failure stay
        in place and are skipped by the next sync's diff.

        Args:
            user_id: User identifier
            records: Detailed records to insert

        Returns:
            Number of rows inserted

        Raises:
            WriteFailed: If an insert fails, with the count inserted so far
        """
        written = 0
        for record in records:
            try:
                row = record_to_run_dict(user_id, record)
                self.supabase.table(RUNS_TABLE).insert(row).execute()
            except Exception as e:
                logger.error(
                    f"Failed to insert run {record.start_time.isoformat()} for user {user_id}: {e}"
                )
                raise WriteFailed(e, written) from e
            written += 1

        logger.info(f"Inserted {written} runs for user {user_id}")
        return written
