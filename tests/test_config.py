"""Tests for settings, secrets and adapter wiring."""

import json
import os
import tempfile
import unittest
from datetime import timedelta
from pathlib import Path
from unittest import mock

from fakes import FakeSupabase

from runsync import secrets, services
from runsync.config import RunSyncSettings, find_env_file
from runsync.models import DistanceUnit, format_pace
from runsync.supabase_ops import RunsRepository

LAMBDA_ENV = {"AWS_LAMBDA_FUNCTION_NAME": "runsync-sync"}


def _without_lambda_env():
    env = {k: v for k, v in os.environ.items() if k != "AWS_LAMBDA_FUNCTION_NAME"}
    return mock.patch.dict(os.environ, env, clear=True)


class SettingsTests(unittest.TestCase):
    def test_find_env_file_walks_up(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / ".env").write_text("RUNSYNC_LOG_LEVEL=DEBUG\n")
            nested = root / "a" / "b"
            nested.mkdir(parents=True)

            self.assertEqual(find_env_file(nested), root / ".env")

    def test_settings_from_environment(self):
        env = {
            "RUNSYNC_WORKOUT_SOURCE_URL": "http://phone.local:8787",
            "RUNSYNC_DUPLICATE_TOLERANCE_SECONDS": "30",
            "RUNSYNC_DISTANCE_UNIT": "mi",
        }
        with mock.patch.dict(os.environ, env):
            settings = RunSyncSettings()

        self.assertEqual(settings.workout_source_url, "http://phone.local:8787")
        self.assertEqual(settings.duplicate_tolerance_seconds, 30)
        self.assertIs(settings.distance_unit, DistanceUnit.MILES)
        self.assertEqual(settings.route_segment_meters, 100)

    def test_format_pace(self):
        cases = [
            (330, DistanceUnit.KILOMETERS, "5:30 /km"),
            (330, DistanceUnit.MILES, "8:51 /mi"),
            (None, DistanceUnit.KILOMETERS, "--:--"),
            (0, DistanceUnit.KILOMETERS, "--:--"),
            (float("inf"), DistanceUnit.MILES, "--:--"),
        ]
        for seconds_per_km, unit, expected in cases:
            with self.subTest(seconds_per_km=seconds_per_km, unit=unit):
                self.assertEqual(format_pace(seconds_per_km, unit), expected)


class SecretsTests(unittest.TestCase):
    def test_lambda_detection(self):
        with _without_lambda_env():
            self.assertFalse(secrets.is_running_in_lambda())
        with mock.patch.dict(os.environ, LAMBDA_ENV):
            self.assertTrue(secrets.is_running_in_lambda())

    def test_secret_names_follow_environment(self):
        with mock.patch.dict(os.environ, {"ENVIRONMENT": "prod"}):
            name = secrets.secret_name("supabase/credentials")
        self.assertEqual(name, "runsync/prod/supabase/credentials")

    def test_get_secret_reads_secrets_manager_once(self):
        client = mock.Mock()
        client.get_secret_value.return_value = {
            "SecretString": json.dumps({"url": "https://x.supabase.co", "key": "k"})
        }
        secrets.get_secret.cache_clear()
        self.addCleanup(secrets.get_secret.cache_clear)

        with mock.patch("boto3.client", return_value=client) as boto_client:
            first = secrets.get_secret("runsync/dev/supabase/credentials")
            second = secrets.get_secret("runsync/dev/supabase/credentials")

        self.assertEqual(first, {"url": "https://x.supabase.co", "key": "k"})
        self.assertIs(second, first)
        boto_client.assert_called_once_with("secretsmanager")
        client.get_secret_value.assert_called_once_with(
            SecretId="runsync/dev/supabase/credentials"
        )

    def test_credential_getters_use_environment_secret_names(self):
        with (
            mock.patch.dict(os.environ, {"ENVIRONMENT": "prod"}),
            mock.patch.object(secrets, "get_secret", return_value={"url": "u"}) as get_secret,
        ):
            secrets.get_supabase_credentials()
            secrets.get_workout_source_credentials()

        self.assertEqual(
            [c.args[0] for c in get_secret.call_args_list],
            ["runsync/prod/supabase/credentials", "runsync/prod/workout-source/credentials"],
        )

    def test_refused_secret_is_raised(self):
        from botocore.exceptions import ClientError

        client = mock.Mock()
        client.get_secret_value.side_effect = ClientError(
            {"Error": {"Code": "ResourceNotFoundException", "Message": "missing"}},
            "GetSecretValue",
        )
        secrets.get_secret.cache_clear()
        self.addCleanup(secrets.get_secret.cache_clear)

        with mock.patch("boto3.client", return_value=client):
            with self.assertRaises(ClientError):
                secrets.get_secret("runsync/dev/missing")


class ServicesTests(unittest.TestCase):
    def test_workout_source_from_settings(self):
        settings = RunSyncSettings(workout_source_url="http://phone.local:8787")

        with _without_lambda_env(), services.build_workout_source(settings) as source:
            self.assertEqual(source.base_url, "http://phone.local:8787")

    def test_workout_source_from_secrets_in_lambda(self):
        creds = {"url": "https://bridge.example", "token": "t"}

        with (
            mock.patch.dict(os.environ, LAMBDA_ENV),
            mock.patch.object(services, "get_workout_source_credentials", return_value=creds),
        ):
            with services.build_workout_source(RunSyncSettings()) as source:
                self.assertEqual(source.base_url, "https://bridge.example")

    def test_sync_engine_writes_to_supabase(self):
        settings = RunSyncSettings(
            duplicate_tolerance_seconds=45,
            supabase_url="http://127.0.0.1:54321",
            supabase_key="service-role-key",
        )
        fake = FakeSupabase()

        with (
            _without_lambda_env(),
            mock.patch.object(services, "create_client", return_value=fake) as create_client,
        ):
            with services.build_workout_source(settings) as source:
                engine = services.build_sync_engine(source, settings)

        create_client.assert_called_once_with("http://127.0.0.1:54321", "service-role-key")
        self.assertIsInstance(engine.store, RunsRepository)
        self.assertIs(engine.store.supabase, fake)
        self.assertEqual(engine.tolerance, timedelta(seconds=45))

    def test_supabase_credentials_required_locally(self):
        settings = RunSyncSettings(supabase_url=None, supabase_key=None)

        with _without_lambda_env(), self.assertRaises(ValueError):
            services.connect_supabase(settings)

    def test_supabase_credentials_from_secrets_in_lambda(self):
        creds = {"url": "https://x.supabase.co", "key": "k"}

        with (
            mock.patch.dict(os.environ, LAMBDA_ENV),
            mock.patch.object(services, "get_supabase_credentials", return_value=creds),
            mock.patch.object(services, "create_client") as create_client,
        ):
            services.connect_supabase(RunSyncSettings())

        create_client.assert_called_once_with("https://x.supabase.co", "k")


if __name__ == "__main__":
    unittest.main()
