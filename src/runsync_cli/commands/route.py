"""Route analytics commands for runsync CLI."""

import typer

from runsync.analytics import (
    calculate_pace_percentiles,
    calculate_route_segments,
    calculate_splits,
    enrich_splits_with_heart_rate,
)
from runsync.config import get_settings
from runsync.models import DistanceUnit
from runsync.services import build_workout_source
from runsync.sync import SyncError
from runsync_cli import display


def show_splits(
    workout_id: str = typer.Argument(..., help="Workout identifier at the source"),
    unit: DistanceUnit | None = typer.Option(None, "--unit", help="Split unit (km or mi)"),
    heart_rate: bool = typer.Option(
        True, "--heart-rate/--no-heart-rate", help="Add per-split heart rate"
    ),
) -> None:
    """
    Show per-kilometer or per-mile splits of a workout.

    Examples:
        runsync splits 42
        runsync splits 42 --unit mi --no-heart-rate
    """
    unit = unit or get_settings().distance_unit

    try:
        with build_workout_source() as source:
            trace = source.fetch_location_trace(workout_id)
            splits = calculate_splits(trace, unit)
            if heart_rate and splits:
                samples = source.fetch_heart_rate_samples(workout_id, trace[0].timestamp)
                splits = enrich_splits_with_heart_rate(splits, samples)
    except SyncError as e:
        display.display_error(str(e))
        raise typer.Exit(1) from None

    display.display_splits(splits, unit)


def show_segments(
    workout_id: str = typer.Argument(..., help="Workout identifier at the source"),
    distance: float | None = typer.Option(
        None, "--distance", "-d", help="Segment length in meters", min=1.0
    ),
) -> None:
    """
    Show pace-colored route segments of a workout.

    Examples:
        runsync segments 42
        runsync segments 42 --distance 200
    """
    segment_distance = distance or get_settings().route_segment_meters

    try:
        with build_workout_source() as source:
            trace = source.fetch_location_trace(workout_id)
    except SyncError as e:
        display.display_error(str(e))
        raise typer.Exit(1) from None

    segments = calculate_route_segments(trace, segment_distance)
    fast, slow = calculate_pace_percentiles(segments)
    display.display_segments(segments, fast, slow)
