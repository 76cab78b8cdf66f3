"""Wiring of the sync engine with its concrete adapters."""

import logging
from datetime import timedelta

from supabase import Client, create_client

from .config import RunSyncSettings, get_settings
from .secrets import (
    get_supabase_credentials,
    get_workout_source_credentials,
    is_running_in_lambda,
)
from .source import WorkoutSourceClient
from .supabase_ops import RunsRepository
from .sync import SyncEngine

logger = logging.getLogger(__name__)


def build_workout_source(settings: RunSyncSettings | None = None) -> WorkoutSourceClient:
    """
    Create the workout source client.

    In Lambda the URL and token come from Secrets Manager, locally from settings.
    """
    settings = settings or get_settings()

    if is_running_in_lambda():
        creds = get_workout_source_credentials()
        url, token = creds["url"], creds.get("token")
    else:
        url, token = settings.workout_source_url, settings.workout_source_token

    logger.debug(f"Using workout source at {url}")
    return WorkoutSourceClient(url, token=token)


def connect_supabase(settings: RunSyncSettings | None = None) -> Client:
    """
    Create a Supabase client for the runs table.

    In Lambda: credentials from Secrets Manager
    Locally: SUPABASE_URL / SUPABASE_KEY from the environment or .env

    Raises:
        ValueError: If the local credentials are not configured
    """
    if is_running_in_lambda():
        creds = get_supabase_credentials()
        url, key = creds["url"], creds["key"]
    else:
        settings = settings or get_settings()
        if not settings.supabase_url or not settings.supabase_key:
            raise ValueError("SUPABASE_URL and SUPABASE_KEY must be set")
        url, key = settings.supabase_url, settings.supabase_key

    logger.debug(f"Connecting to Supabase at {url}")
    return create_client(url, key)


def build_sync_engine(
    source: WorkoutSourceClient, settings: RunSyncSettings | None = None
) -> SyncEngine:
    """Create a sync engine writing to the Supabase runs table."""
    settings = settings or get_settings()
    return SyncEngine(
        source=source,
        store=RunsRepository(connect_supabase(settings)),
        tolerance=timedelta(seconds=settings.duplicate_tolerance_seconds),
    )
