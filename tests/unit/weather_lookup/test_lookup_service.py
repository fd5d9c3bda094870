"""Unit tests for the two-stage lookup orchestration."""

import httpx
import pytest

from weather_lookup.exceptions import (
    InvalidPlaceQueryException,
    LocationNotFoundException,
    MalformedPayloadException,
    UpstreamErrorException,
    UpstreamUnavailableException,
)
from weather_lookup.models.weather import Coordinates, WeatherSnapshot
from weather_lookup.services import lookup_service
from weather_lookup.services.lookup_service import ALLOWED_TRANSITIONS, LookupState, WeatherLookup


@pytest.fixture
def london_responses(make_response, geocoding_url):
    """Geocoding + weather responses for the London scenario."""

    def _responses():
        return [
            make_response(json=[{"name": "London", "lat": 51.5, "lon": -0.12}], url=geocoding_url),
            make_response(
                json={
                    "weather": [{"description": "clear sky", "icon": "01d"}],
                    "main": {"temp": 15.2, "humidity": 60},
                    "wind": {"speed": 3.1},
                }
            ),
        ]

    return _responses


@pytest.mark.asyncio
async def test_resolve_london(mock_http_client, mock_settings, london_responses):
    """Test the full lookup returns the normalized snapshot."""
    mock_http_client.get.side_effect = london_responses()
    lookup = WeatherLookup(mock_http_client, mock_settings)

    snapshot = await lookup.resolve("London")

    assert snapshot == WeatherSnapshot(
        description="clear sky", icon="01d", temperature=15.2, humidity=60, wind_speed=3.1
    )
    assert lookup.state is LookupState.DONE
    assert lookup.coordinates == Coordinates(latitude=51.5, longitude=-0.12)
    assert lookup.snapshot is snapshot
    assert lookup.error is None

    # Geocoding first, then weather for the resolved coordinates
    assert mock_http_client.get.call_count == 2
    first, second = mock_http_client.get.call_args_list
    assert first.args[0] == mock_settings.geocoding_url
    assert second.args[0] == mock_settings.weather_url
    assert second.kwargs["params"]["lat"] == 51.5
    assert second.kwargs["params"]["lon"] == -0.12


@pytest.mark.asyncio
async def test_resolve_location_not_found_skips_weather(mock_http_client, mock_settings, make_response, geocoding_url):
    """Test that the weather provider is never called without coordinates."""
    mock_http_client.get.return_value = make_response(json=[], url=geocoding_url)
    lookup = WeatherLookup(mock_http_client, mock_settings)

    with pytest.raises(LocationNotFoundException) as exc_info:
        await lookup.resolve("Nowhereville")

    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Location not found"
    assert mock_http_client.get.call_count == 1
    assert lookup.state is LookupState.FAILED
    assert lookup.error is exc_info.value
    assert lookup.snapshot is None


@pytest.mark.asyncio
async def test_resolve_geocoder_timeout(mock_http_client, mock_settings):
    """Test geocoder timeout fails as unavailable and skips the weather call."""
    mock_http_client.get.side_effect = httpx.ConnectTimeout("timed out")
    lookup = WeatherLookup(mock_http_client, mock_settings)

    with pytest.raises(UpstreamUnavailableException) as exc_info:
        await lookup.resolve("London")

    assert exc_info.value.message == "Unable to connect to the weather service"
    assert mock_http_client.get.call_count == 1
    assert lookup.state is LookupState.FAILED
    assert lookup.coordinates is None


@pytest.mark.asyncio
async def test_resolve_weather_unreachable(mock_http_client, mock_settings, make_response, geocoding_url):
    """Test weather provider outage is unavailable, never an upstream error."""
    mock_http_client.get.side_effect = [
        make_response(json=[{"name": "London", "lat": 51.5, "lon": -0.12}], url=geocoding_url),
        httpx.ConnectError("Connection refused"),
    ]
    lookup = WeatherLookup(mock_http_client, mock_settings)

    with pytest.raises(UpstreamUnavailableException) as exc_info:
        await lookup.resolve("London")

    assert not isinstance(exc_info.value, UpstreamErrorException)
    assert lookup.state is LookupState.FAILED
    assert lookup.coordinates is not None
    assert lookup.snapshot is None


@pytest.mark.asyncio
async def test_resolve_malformed_weather_payload(mock_http_client, mock_settings, make_response, geocoding_url):
    """Test a payload without conditions fails the lookup without a partial snapshot."""
    mock_http_client.get.side_effect = [
        make_response(json=[{"name": "London", "lat": 51.5, "lon": -0.12}], url=geocoding_url),
        make_response(json={"main": {"temp": 15.2, "humidity": 60}, "wind": {"speed": 3.1}}),
    ]
    lookup = WeatherLookup(mock_http_client, mock_settings)

    with pytest.raises(MalformedPayloadException):
        await lookup.resolve("London")

    assert lookup.state is LookupState.FAILED
    assert lookup.snapshot is None


@pytest.mark.asyncio
async def test_resolve_unexpected_geocoding_error_marks_failed(mock_http_client, mock_settings):
    """Test an error outside the lookup taxonomy still ends in FAILED."""
    mock_http_client.get.side_effect = RuntimeError("boom")
    lookup = WeatherLookup(mock_http_client, mock_settings)

    with pytest.raises(RuntimeError, match="boom"):
        await lookup.resolve("London")

    assert lookup.state is LookupState.FAILED
    assert isinstance(lookup.error, RuntimeError)
    assert lookup.coordinates is None


@pytest.mark.asyncio
async def test_resolve_unexpected_weather_error_marks_failed(
    mock_http_client, mock_settings, make_response, geocoding_url
):
    mock_http_client.get.side_effect = [
        make_response(json=[{"name": "London", "lat": 51.5, "lon": -0.12}], url=geocoding_url),
        RuntimeError("boom"),
    ]
    lookup = WeatherLookup(mock_http_client, mock_settings)

    with pytest.raises(RuntimeError):
        await lookup.resolve("London")

    assert lookup.state is LookupState.FAILED
    assert lookup.coordinates is not None
    assert lookup.snapshot is None


@pytest.mark.asyncio
async def test_resolve_invalid_query_stays_idle(mock_http_client, mock_settings):
    """Test an invalid place name is rejected before the machine starts."""
    lookup = WeatherLookup(mock_http_client, mock_settings)

    with pytest.raises(InvalidPlaceQueryException):
        await lookup.resolve("   ")

    assert lookup.state is LookupState.IDLE
    mock_http_client.get.assert_not_called()


@pytest.mark.asyncio
async def test_lookup_is_single_use(mock_http_client, mock_settings, london_responses):
    """Test a finished lookup cannot be resolved again."""
    mock_http_client.get.side_effect = london_responses()
    lookup = WeatherLookup(mock_http_client, mock_settings)
    await lookup.resolve("London")

    with pytest.raises(RuntimeError):
        await lookup.resolve("London")


@pytest.mark.asyncio
async def test_resolve_is_idempotent(mock_http_client, mock_settings, london_responses):
    """Test two lookups against a stable upstream produce identical snapshots."""
    mock_http_client.get.side_effect = london_responses() + london_responses()

    first = await lookup_service.resolve(mock_http_client, "London", mock_settings)
    second = await lookup_service.resolve(mock_http_client, "London", mock_settings)

    assert first == second
    assert first.model_dump_json() == second.model_dump_json()


def test_terminal_states_are_absorbing():
    """Test DONE and FAILED have no outgoing transitions."""
    assert ALLOWED_TRANSITIONS[LookupState.DONE] == frozenset()
    assert ALLOWED_TRANSITIONS[LookupState.FAILED] == frozenset()
    assert LookupState.FAILED not in ALLOWED_TRANSITIONS[LookupState.IDLE]


def test_invalid_transition_raises(mock_http_client, mock_settings):
    """Test skipping the geocoding stage is rejected."""
    lookup = WeatherLookup(mock_http_client, mock_settings)

    with pytest.raises(RuntimeError, match="idle -> fetching"):
        lookup._transition(LookupState.FETCHING, "London")
