"""Supabase database operations for RunSync."""

from .mappers import parse_timestamp, record_to_run_dict, run_row_to_record
from .runs_repository import RunsRepository

__all__ = [
    "RunsRepository",
    "parse_timestamp",
    "record_to_run_dict",
    "run_row_to_record",
]
