"""Map between workout models and Supabase rows."""

from datetime import UTC, datetime
from typing import Any

from ..models.timestamps import normalize_timestamp
from ..models.workout import WorkoutRecord

# Optional columns, written only when the value is known
DETAIL_COLUMNS = (
    "calories_burned",
    "average_heart_rate",
    "max_heart_rate",
    "min_heart_rate",
    "cadence",
    "stride_length",
    "step_count",
)


def record_to_run_dict(
    user_id: str, record: WorkoutRecord, synced_at: datetime | None = None
) -> dict[str, Any]:
    """
    Convert a detailed workout record into a row for the runs table.

    Args:
        user_id: Owner of the run
        record: Record to persist
        synced_at: Sync time (default: now)

    Returns:
        Row dict with ISO-formatted timestamps
    """
    row: dict[str, Any] = {
        "id": str(record.id),
        "user_id": user_id,
        "source_id": record.source_id,
        "start_time": normalize_timestamp(record.start_time).isoformat(),
        "distance_km": record.distance_km,
        "duration_seconds": record.duration_seconds,
        "pace_seconds_per_km": record.average_pace_per_km,
        "synced_at": (synced_at or datetime.now(UTC)).isoformat(),
    }

    for column in DETAIL_COLUMNS:
        value = getattr(record, column)
        if value is not None:
            row[column] = value

    return row


def parse_timestamp(value: str | datetime) -> datetime:
    """Parse a timestamptz value returned by Supabase."""
    if isinstance(value, datetime):
        return normalize_timestamp(value)
    return normalize_timestamp(datetime.fromisoformat(value.replace("Z", "+00:00")))


def run_row_to_record(row: dict[str, Any]) -> WorkoutRecord:
    """Convert a runs table row back into a WorkoutRecord."""
    fields = {column: row.get(column) for column in DETAIL_COLUMNS}
    return WorkoutRecord(
        id=row["id"],
        source_id=row.get("source_id"),
        start_time=parse_timestamp(row["start_time"]),
        distance_meters=float(row["distance_km"]) * 1000,
        duration_seconds=float(row["duration_seconds"]),
        **fields,
    )
