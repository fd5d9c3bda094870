"""Two-stage weather lookup: place name -> coordinates -> current weather.

Each request gets its own WeatherLookup, which walks a small state machine:

    IDLE -> GEOCODING -> FETCHING -> DONE
                 \\            \\
                  -> FAILED     -> FAILED

Nothing is shared between instances, so concurrent requests need no locking.
"""

import time
from enum import Enum

import httpx

from weather_lookup.config import Settings
from weather_lookup.exceptions import WeatherLookupException
from weather_lookup.logging_config import get_logger, log_with_context
from weather_lookup.models.weather import Coordinates, WeatherSnapshot
from weather_lookup.services import geocoding_service, weather_service

logger = get_logger(__name__)


class LookupState(str, Enum):
    """States of a single lookup."""

    IDLE = "idle"
    GEOCODING = "geocoding"
    FETCHING = "fetching"
    DONE = "done"
    FAILED = "failed"


ALLOWED_TRANSITIONS: dict[LookupState, frozenset[LookupState]] = {
    LookupState.IDLE: frozenset({LookupState.GEOCODING}),
    LookupState.GEOCODING: frozenset({LookupState.FETCHING, LookupState.FAILED}),
    LookupState.FETCHING: frozenset({LookupState.DONE, LookupState.FAILED}),
    LookupState.DONE: frozenset(),
    LookupState.FAILED: frozenset(),
}


class WeatherLookup:
    """Resolves one place name into a WeatherSnapshot.

    Instances are single-use: create one per request.
    """

    def __init__(self, client: httpx.AsyncClient, settings: Settings):
        """Initialize the lookup.

        Args:
            client: Shared HTTP client for both providers
            settings: Settings instance built at startup
        """
        self._client = client
        self._settings = settings
        self.state = LookupState.IDLE
        self.coordinates: Coordinates | None = None
        self.snapshot: WeatherSnapshot | None = None
        self.error: Exception | None = None

    def _transition(self, new_state: LookupState, place_name: str) -> None:
        if new_state not in ALLOWED_TRANSITIONS[self.state]:
            raise RuntimeError(f"Invalid lookup transition: {self.state.value} -> {new_state.value}")

        log_with_context(
            logger,
            "debug",
            "Lookup state change",
            place_name=place_name,
            from_state=self.state.value,
            to_state=new_state.value,
            event_type="lookup_transition",
        )
        self.state = new_state

    async def resolve(self, place_name: str) -> WeatherSnapshot:
        """Run the full lookup for ``place_name``.

        Args:
            place_name: Place name entered by the user

        Returns:
            Normalized WeatherSnapshot

        Raises:
            InvalidPlaceQueryException: Place name rejected before any call (state stays IDLE)
            LocationNotFoundException: Geocoder found no match (weather is never fetched)
            UpstreamUnavailableException: A provider could not be reached
            UpstreamErrorException: A provider failed or sent a malformed payload
            RequestSetupException: An outbound request could not be built
            RuntimeError: The instance has already been used
        """
        if self.state is not LookupState.IDLE:
            raise RuntimeError("WeatherLookup instances are single-use")

        query = geocoding_service.validate_place_name(place_name, self._settings)
        started = time.perf_counter()

        self._transition(LookupState.GEOCODING, query)
        try:
            self.coordinates = await geocoding_service.geocode(self._client, query, self._settings)
        except Exception as e:
            self._fail(e, query, started)
            raise

        self._transition(LookupState.FETCHING, query)
        try:
            payload = await weather_service.fetch_weather(self._client, self.coordinates, self._settings)
            snapshot = weather_service.normalize(payload)
        except Exception as e:
            self._fail(e, query, started)
            raise

        self.snapshot = snapshot
        self._transition(LookupState.DONE, query)
        log_with_context(
            logger,
            "info",
            "Weather lookup completed",
            place_name=query,
            latitude=self.coordinates.latitude,
            longitude=self.coordinates.longitude,
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
            event_type="lookup_done",
        )
        return snapshot

    def _fail(self, error: Exception, place_name: str, started: float) -> None:
        failed_stage = self.state.value
        error_code = error.code.value if isinstance(error, WeatherLookupException) else type(error).__name__
        self.error = error
        self._transition(LookupState.FAILED, place_name)
        log_with_context(
            logger,
            "warning",
            "Weather lookup failed",
            place_name=place_name,
            stage=failed_stage,
            error_code=error_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
            event_type="lookup_failed",
        )


async def resolve(client: httpx.AsyncClient, place_name: str, settings: Settings) -> WeatherSnapshot:
    """Resolve ``place_name`` to a WeatherSnapshot with a fresh WeatherLookup."""
    return await WeatherLookup(client, settings).resolve(place_name)
