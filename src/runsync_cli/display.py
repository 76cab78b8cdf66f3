"""Rich console output for the runsync CLI."""

from collections.abc import Sequence

from rich.console import Console
from rich.table import Table

from runsync.models import DistanceUnit, RouteSegment, Split, format_duration, format_pace
from runsync.sync import SyncPhase

console = Console()
err_console = Console(stderr=True)


def display_error(message: str) -> None:
    err_console.print(f"[bold red]✗[/bold red] {message}")


def display_info(message: str) -> None:
    console.print(f"[cyan]ℹ[/cyan] {message}")


def display_sync_progress(message: str, done: bool = False) -> None:
    if done:
        console.print(f"[bold green]✓[/bold green] {message}")
    else:
        console.print(f"[yellow]⟳[/yellow] {message}")


def display_phase(phase: SyncPhase) -> None:
    """Print one sync phase."""
    if phase.is_failed:
        display_error(f"{phase.message}: {phase.error}" if phase.error else phase.message)
    elif phase.is_terminal:
        display_sync_progress(phase.message, done=True)
    elif phase.message:
        display_sync_progress(f"{phase.message} ({phase.progress:.0%})")


def _bpm(value: float | None) -> str:
    return "-" if value is None else f"{value:.0f}"


def display_splits(splits: Sequence[Split], unit: DistanceUnit) -> None:
    """Print a table of splits."""
    if not splits:
        display_info("No route data for this workout")
        return

    table = Table(title=f"Splits ({unit.value})")
    table.add_column("Split", justify="right")
    table.add_column("Time", justify="right")
    table.add_column("Pace", justify="right")
    table.add_column("Avg HR", justify="right")
    table.add_column("Max HR", justify="right")

    for split in splits:
        table.add_row(
            split.label,
            format_duration(split.duration_seconds),
            split.formatted_pace(),
            _bpm(split.average_heart_rate),
            _bpm(split.max_heart_rate),
        )

    console.print(table)


def display_segments(
    segments: Sequence[RouteSegment], fast_pace: float, slow_pace: float
) -> None:
    """Print pace-colored route segments with the gradient bounds."""
    if not segments:
        display_info("No route data for this workout")
        return

    table = Table(title=f"Route segments ({len(segments)})")
    table.add_column("#", justify="right")
    table.add_column("Points", justify="right")
    table.add_column("Pace", justify="right")
    table.add_column("Color")

    for index, segment in enumerate(segments, start=1):
        color = segment.color(fast_pace, slow_pace)
        table.add_row(
            str(index),
            str(len(segment.coordinates)),
            format_pace(segment.pace_per_km),
            f"[{color}]■■■[/] {color}",
        )

    console.print(table)
    display_info(f"Fast: {format_pace(fast_pace)}  Slow (p90): {format_pace(slow_pace)}")
