"""Tests for the HTTP workout source client."""

import unittest

import httpx
from fakes import START

from runsync.source import WorkoutSourceClient
from runsync.sync import AuthorizationDenied, FetchFailed, SourceUnavailable

BASE_URL = "http://workouts.test/api"

WORKOUTS = [
    {
        "id": "old",
        "startTime": "2025-10-01T06:00:00Z",
        "distanceMeters": 8000,
        "durationSeconds": 2600,
    },
    {
        "id": "new",
        "startTime": "2025-10-29T06:30:00Z",
        "distanceMeters": 5000,
        "durationSeconds": 1500,
    },
]


def _client(routes: dict[str, httpx.Response], seen: list[httpx.Request] | None = None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        path = request.url.path.removeprefix("/api/")
        if path not in routes:
            return httpx.Response(404, json={"message": "not found"})
        return routes[path]

    return WorkoutSourceClient(BASE_URL, token="secret", transport=httpx.MockTransport(handler))


class AuthorizationTests(unittest.TestCase):
    def test_authorization_granted_sends_bearer_token(self):
        seen: list[httpx.Request] = []
        routes = {"authorization": httpx.Response(200, json={"granted": True})}
        with _client(routes, seen) as source:
            source.request_authorization()

        self.assertEqual(seen[0].headers["Authorization"], "Bearer secret")
        self.assertEqual(seen[0].url.path, "/api/authorization")

    def test_authorization_denied(self):
        for status in (401, 403):
            with self.subTest(status=status):
                with _client({"authorization": httpx.Response(status)}) as source:
                    with self.assertRaises(AuthorizationDenied):
                        source.request_authorization()

    def test_source_reporting_unavailable(self):
        with _client({"authorization": httpx.Response(503)}) as source:
            with self.assertRaises(SourceUnavailable):
                source.request_authorization()

    def test_unreachable_source_is_unavailable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with WorkoutSourceClient(BASE_URL, transport=httpx.MockTransport(handler)) as source:
            with self.assertRaises(SourceUnavailable) as ctx:
                source.request_authorization()

        self.assertIsInstance(ctx.exception.cause, httpx.ConnectError)


class FetchTests(unittest.TestCase):
    def test_basic_workouts_most_recent_first(self):
        with _client({"workouts": httpx.Response(200, json=WORKOUTS)}) as source:
            workouts = source.fetch_basic_workouts()

        self.assertEqual([w.source_id for w in workouts], ["new", "old"])
        self.assertEqual(workouts[0].start_time, START)
        self.assertEqual(workouts[0].distance_meters, 5000)

    def test_workout_detail_with_missing_fields(self):
        detail_json = {"caloriesBurned": 402.5, "avgHeartRate": 151, "stepCount": 4480}
        with _client({"workouts/new/detail": httpx.Response(200, json=detail_json)}) as source:
            detail = source.fetch_workout_detail("new")

        self.assertEqual(detail.calories_burned, 402.5)
        self.assertEqual(detail.average_heart_rate, 151)
        self.assertEqual(detail.step_count, 4480)
        self.assertIsNone(detail.cadence)
        self.assertIsNone(detail.stride_length)

    def test_location_trace_is_time_ordered(self):
        route = [
            {"latitude": 35.0010, "longitude": 139.0, "timestamp": "2025-10-29T06:30:10Z"},
            {"latitude": 35.0000, "longitude": 139.0, "timestamp": "2025-10-29T06:30:00Z"},
        ]
        with _client({"workouts/new/route": httpx.Response(200, json=route)}) as source:
            trace = source.fetch_location_trace("new")

        self.assertEqual([f.latitude for f in trace], [35.0, 35.001])

    def test_heart_rate_samples_get_elapsed_offsets(self):
        samples_json = [
            {"timestamp": "2025-10-29T06:30:05Z", "bpm": 120},
            {"timestamp": "2025-10-29T06:30:10Z", "bpm": 128},
        ]
        routes = {"workouts/new/heart-rate": httpx.Response(200, json=samples_json)}
        with _client(routes) as source:
            from_start = source.fetch_heart_rate_samples("new", START)
            from_first = source.fetch_heart_rate_samples("new")

        self.assertEqual([s.elapsed_seconds for s in from_start], [5.0, 10.0])
        self.assertEqual([s.elapsed_seconds for s in from_first], [0.0, 5.0])

    def test_server_error_is_fetch_failure(self):
        with _client({"workouts": httpx.Response(500, text="boom")}) as source:
            with self.assertRaises(FetchFailed) as ctx:
                source.fetch_basic_workouts()

        self.assertIsInstance(ctx.exception.cause, httpx.HTTPStatusError)

    def test_malformed_payload_is_fetch_failure(self):
        with _client({"workouts": httpx.Response(200, json={"items": []})}) as source:
            with self.assertRaises(FetchFailed):
                source.fetch_basic_workouts()

        bad = [{"id": "x", "startTime": "yesterday", "distanceMeters": -1, "durationSeconds": 1}]
        with _client({"workouts": httpx.Response(200, json=bad)}) as source:
            with self.assertRaises(FetchFailed):
                source.fetch_basic_workouts()


if __name__ == "__main__":
    unittest.main()
