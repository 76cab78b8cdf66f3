"""HTTP client for a workout export service (the workout source)."""

import logging
from datetime import datetime
from types import TracebackType
from typing import Any, Self

import httpx
from pydantic import ValidationError

from .analytics.heart_rate import with_elapsed
from .models.heart_rate import HeartRateSample
from .models.route import LocationFix
from .models.workout import BasicWorkout, WorkoutDetail
from .sync.errors import AuthorizationDenied, FetchFailed, SourceUnavailable

logger = logging.getLogger(__name__)

TIMEOUT = 30.0


class WorkoutSourceClient:
    """
    Reads workouts from a workout export service over HTTP.

    The service exposes the device's recorded runs as JSON:
    /authorization, /workouts, /workouts/{id}/detail, /workouts/{id}/route
    and /workouts/{id}/heart-rate.

    Example:
        ```python
        with WorkoutSourceClient(base_url, token=token) as source:
            workouts = source.fetch_basic_workouts()
        ```
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize workout source client.

        Args:
            base_url: Service base URL
            token: Optional bearer token
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self.base_url = base_url
        self._client = httpx.Client(
            base_url=base_url, headers=headers, timeout=timeout, transport=transport
        )

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def request_authorization(self) -> None:
        """
        Ask the service for read access.

        Raises:
            AuthorizationDenied: If the service answers 401 or 403
            SourceUnavailable: If the service cannot be reached or reports it is unavailable
        """
        try:
            response = self._client.get("authorization")
        except httpx.RequestError as e:
            raise SourceUnavailable(f"Workout source unreachable at {self.base_url}: {e}", e) from e

        if response.status_code in (401, 403):
            raise AuthorizationDenied()
        if response.status_code >= 400:
            raise SourceUnavailable(
                f"Workout source returned HTTP {response.status_code}",
                httpx.HTTPStatusError(
                    response.text, request=response.request, response=response
                ),
            )
        logger.debug("Workout source authorization granted")

    def fetch_basic_workouts(self) -> list[BasicWorkout]:
        """Get summaries of every recorded run, most recent first."""
        data = self._get_json("workouts")
        workouts = self._parse_list(data, BasicWorkout)
        workouts.sort(key=lambda w: w.start_time, reverse=True)
        logger.info(f"Fetched {len(workouts)} workout summaries")
        return workouts

    def fetch_workout_detail(self, workout_id: str) -> WorkoutDetail:
        """Get detail metrics (calories, heart rate, cadence, stride, steps) for one run."""
        data = self._get_json(f"workouts/{workout_id}/detail")
        try:
            return WorkoutDetail.model_validate(data)
        except ValidationError as e:
            raise FetchFailed(e, f"Invalid detail for workout {workout_id}: {e}") from e

    def fetch_location_trace(self, workout_id: str) -> list[LocationFix]:
        """Get the GPS fixes of one run in recording order."""
        data = self._get_json(f"workouts/{workout_id}/route")
        fixes = self._parse_list(data, LocationFix)
        fixes.sort(key=lambda f: f.timestamp)
        return fixes

    def fetch_heart_rate_samples(
        self, workout_id: str, workout_start: datetime | None = None
    ) -> list[HeartRateSample]:
        """
        Get heart rate samples of one run in time order.

        Args:
            workout_id: Workout identifier at the source
            workout_start: Start of the workout; defaults to the first sample's time

        Returns:
            Samples with elapsed_seconds measured from workout_start
        """
        data = self._get_json(f"workouts/{workout_id}/heart-rate")
        samples = self._parse_list(data, HeartRateSample)
        samples.sort(key=lambda s: s.timestamp)
        if not samples:
            return []
        return with_elapsed(samples, workout_start or samples[0].timestamp)

    def _get_json(self, endpoint: str) -> Any:
        try:
            response = self._client.get(endpoint)
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException as e:
            raise FetchFailed(e, f"Request to {endpoint} timed out") from e
        except httpx.HTTPStatusError as e:
            raise FetchFailed(e, f"HTTP {e.response.status_code} from {endpoint}") from e
        except (httpx.RequestError, ValueError) as e:
            raise FetchFailed(e, f"Request to {endpoint} failed: {e}") from e

    @staticmethod
    def _parse_list(data: Any, model: Any) -> list[Any]:
        if not isinstance(data, list):
            raise FetchFailed(TypeError(f"expected a JSON list, got {type(data).__name__}"))
        try:
            return [model.model_validate(item) for item in data]
        except ValidationError as e:
            raise FetchFailed(e, f"Invalid {model.__name__} payload: {e}") from e
