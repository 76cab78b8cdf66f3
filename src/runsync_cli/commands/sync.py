"""Sync commands for runsync CLI."""

import json
import logging
import threading
from contextlib import closing
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, NoReturn

import typer

from runsync.services import build_sync_engine, build_workout_source
from runsync.sync import SyncPhase
from runsync_cli import display

logger = logging.getLogger(__name__)

# Config directory
CONFIG_DIR = Path.home() / ".config" / "runsync"
CONFIG_FILE = CONFIG_DIR / "config.json"
SYNC_STATE_FILE = CONFIG_DIR / "sync_state.json"


def ensure_config_dir() -> None:
    """Create config directory if it doesn't exist."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)


def get_user_id() -> str | None:
    """Get user_id from config file."""
    if not CONFIG_FILE.exists():
        return None
    try:
        with open(CONFIG_FILE) as f:
            config: dict[str, str] = json.load(f)
            user_id: str | None = config.get("user_id")
            return user_id
    except (json.JSONDecodeError, OSError):
        return None


def get_sync_state() -> dict[str, Any]:
    """Get the last recorded sync state, empty if never synced."""
    if not SYNC_STATE_FILE.exists():
        return {}
    with open(SYNC_STATE_FILE) as f:
        state: dict[str, Any] = json.load(f)
        return state


def update_sync_state(runs_synced: int) -> None:
    """Update sync state file."""
    ensure_config_dir()
    state = {
        "last_sync_timestamp": datetime.now(UTC).isoformat(),
        "runs_synced": runs_synced,
    }
    with open(SYNC_STATE_FILE, "w") as f:
        json.dump(state, f, indent=2)


def _setup_failed(error: Exception) -> NoReturn:
    logger.error(f"Could not set up sync: {error}")
    display.display_error(f"Sync failed: {error}")
    raise typer.Exit(1) from None


def sync_runs(
    user_id: str | None = typer.Option(None, "--user-id", "-u", help="User to sync runs for"),
) -> None:
    """
    Sync new runs from the workout source to the remote store.

    Only runs that are not stored yet are uploaded, so it is always safe to re-run.

    Examples:
        runsync sync                  # Sync for the configured user
        runsync sync --user-id abc123 # Sync for a specific user
    """
    user_id = user_id or get_user_id()
    if not user_id:
        display.display_error("Missing user ID")
        display.display_info(f"Pass --user-id or set user_id in {CONFIG_FILE}")
        raise typer.Exit(1)

    last = get_sync_state().get("last_sync_timestamp")
    if last:
        display.display_info(f"Last sync: {last}")

    cancel_event = threading.Event()
    terminal: SyncPhase | None = None

    try:
        source = build_workout_source()
    except Exception as e:
        _setup_failed(e)

    with source:
        try:
            engine = build_sync_engine(source)
        except Exception as e:
            _setup_failed(e)

        # Closing the stream joins the sync thread before the source closes
        with closing(engine.stream(user_id, cancel_event)) as phases:
            try:
                for phase in phases:
                    display.display_phase(phase)
                    terminal = phase
            except KeyboardInterrupt:
                cancel_event.set()
                display.display_error("Sync cancelled")
                raise typer.Exit(130) from None

    if terminal is None or terminal.is_failed:
        raise typer.Exit(1)

    update_sync_state(terminal.count)
    if terminal.count == 0:
        display.display_info("You're up to date!")
