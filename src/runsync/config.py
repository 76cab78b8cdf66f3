"""Application settings for RunSync."""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models.units import DistanceUnit

ENV_FILE_NAME = ".env"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def find_env_file(start: Path | None = None) -> Path | None:
    """
    Locate the nearest .env file.

    Walks up from start (default: current working directory) to the filesystem root.

    Returns:
        Path to the .env file, or None if there is none
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / ENV_FILE_NAME
        if candidate.is_file():
            return candidate
    return None


class RunSyncSettings(BaseSettings):
    """
    Settings loaded from RUNSYNC_* environment variables.

    The Supabase credentials also accept the plain SUPABASE_URL and SUPABASE_KEY names.

    Attributes:
        workout_source_url: Base URL of the workout export service
        workout_source_token: Bearer token for the workout export service
        duplicate_tolerance_seconds: Max start-time distance for two workouts to be the same
        route_segment_meters: Length of pace-colored route segments
        distance_unit: Default unit for splits and pace display
        log_level: Root logging level
        supabase_url: Supabase project URL (Secrets Manager in Lambda)
        supabase_key: Supabase service role key (Secrets Manager in Lambda)
    """

    model_config = SettingsConfigDict(
        env_prefix="RUNSYNC_",
        env_file=find_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    workout_source_url: str = Field(
        default="http://127.0.0.1:8787",
        description="Workout export service base URL",
    )
    workout_source_token: str | None = Field(
        default=None,
        description="Bearer token for the workout export service",
    )
    duplicate_tolerance_seconds: float = Field(default=60.0, gt=0)
    route_segment_meters: float = Field(default=100.0, gt=0)
    distance_unit: DistanceUnit = Field(default=DistanceUnit.KILOMETERS)
    log_level: str = Field(default="INFO")

    supabase_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("SUPABASE_URL", "RUNSYNC_SUPABASE_URL"),
        description="Supabase project URL",
        examples=["http://127.0.0.1:54321", "https://xxx.supabase.co"],
    )
    supabase_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("SUPABASE_KEY", "RUNSYNC_SUPABASE_KEY"),
        description="Supabase service role key",
    )


@lru_cache
def get_settings() -> RunSyncSettings:
    """Get RunSync settings (cached)."""
    return RunSyncSettings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for an entry point."""
    logging.basicConfig(level=(level or get_settings().log_level).upper(), format=LOG_FORMAT)
