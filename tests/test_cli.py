"""Tests for the runsync CLI."""

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from fakes import FakeWorkoutSource, InMemoryRecordStore, make_heart_rate, make_trace, make_workouts
from typer.testing import CliRunner

from runsync.sync import SyncEngine
from runsync_cli.commands import route as route_commands
from runsync_cli.commands import sync as sync_commands
from runsync_cli.main import app

runner = CliRunner()


class CliTestCase(unittest.TestCase):
    """Wires the CLI to in-memory adapters and a temporary config directory."""

    def setUp(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.config_dir = Path(tmp.name)

        self.source = FakeWorkoutSource(make_workouts(2))
        self.store = InMemoryRecordStore()

        patches = [
            mock.patch.object(sync_commands, "CONFIG_DIR", self.config_dir),
            mock.patch.object(sync_commands, "CONFIG_FILE", self.config_dir / "config.json"),
            mock.patch.object(
                sync_commands, "SYNC_STATE_FILE", self.config_dir / "sync_state.json"
            ),
            mock.patch.object(sync_commands, "build_workout_source", lambda: self.source),
            mock.patch.object(
                sync_commands, "build_sync_engine", lambda s: SyncEngine(s, self.store)
            ),
            mock.patch.object(route_commands, "build_workout_source", lambda: self.source),
        ]
        for patcher in patches:
            patcher.start()
            self.addCleanup(patcher.stop)


class SyncCommandTests(CliTestCase):
    def test_sync_uploads_and_records_state(self):
        result = runner.invoke(app, ["sync", "--user-id", "u1"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("2 new records synced", result.output)
        self.assertEqual(self.store.count("u1"), 2)
        self.assertTrue(self.source.closed)
        state = json.loads((self.config_dir / "sync_state.json").read_text())
        self.assertEqual(state["runs_synced"], 2)

    def test_sync_again_reports_up_to_date(self):
        runner.invoke(app, ["sync", "--user-id", "u1"])
        result = runner.invoke(app, ["sync", "--user-id", "u1"])

        self.assertEqual(result.exit_code, 0)
        self.assertIn("up to date", result.output)

    def test_sync_reads_user_from_config(self):
        (self.config_dir / "config.json").write_text(json.dumps({"user_id": "from-config"}))

        result = runner.invoke(app, ["sync"])

        self.assertEqual(result.exit_code, 0)
        self.assertEqual(self.store.count("from-config"), 2)

    def test_sync_without_user_fails(self):
        result = runner.invoke(app, ["sync"])
        self.assertEqual(result.exit_code, 1)

    def test_failed_sync_exits_nonzero(self):
        self.source.deny = True

        result = runner.invoke(app, ["sync", "--user-id", "u1"])

        self.assertEqual(result.exit_code, 1)
        self.assertFalse((self.config_dir / "sync_state.json").exists())

    def test_missing_store_credentials_exit_cleanly(self):
        def no_credentials(source):
            raise ValueError("SUPABASE_URL and SUPABASE_KEY must be set")

        with mock.patch.object(sync_commands, "build_sync_engine", no_credentials):
            result = runner.invoke(app, ["sync", "--user-id", "u1"])

        self.assertEqual(result.exit_code, 1)
        self.assertIsInstance(result.exception, SystemExit)
        self.assertIn("SUPABASE_URL", result.output)
        self.assertTrue(self.source.closed)

    def test_unreadable_source_secret_exits_cleanly(self):
        def secret_missing():
            raise KeyError("url")

        with mock.patch.object(sync_commands, "build_workout_source", secret_missing):
            result = runner.invoke(app, ["sync", "--user-id", "u1"])

        self.assertEqual(result.exit_code, 1)
        self.assertIsInstance(result.exception, SystemExit)
        self.assertIn("Sync failed", result.output)


class RouteCommandTests(CliTestCase):
    def test_splits_command_prints_table(self):
        self.source.traces["w0"] = make_trace(2150)
        self.source.heart_rates["w0"] = make_heart_rate([150] * 140)

        result = runner.invoke(app, ["splits", "w0"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("1 km", result.output)
        self.assertIn("2 km", result.output)
        self.assertIn("0.15 km", result.output)
        self.assertIn("150", result.output)

    def test_splits_in_miles(self):
        self.source.traces["w0"] = make_trace(3420)

        result = runner.invoke(app, ["splits", "w0", "--unit", "mi", "--no-heart-rate"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("2 mi", result.output)

    def test_segments_command(self):
        self.source.traces["w0"] = make_trace(1000)

        result = runner.invoke(app, ["segments", "w0", "--distance", "250"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Route segments (4)", result.output)

    def test_route_commands_without_trace(self):
        result = runner.invoke(app, ["segments", "missing"])

        self.assertEqual(result.exit_code, 0)
        self.assertIn("No route data", result.output)


if __name__ == "__main__":
    unittest.main()
