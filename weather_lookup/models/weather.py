"""Pydantic models for geocoding and weather data."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PlaceQuery(BaseModel):
    """Inbound lookup request from the front-end form."""

    model_config = ConfigDict(populate_by_name=True)

    place_name: str = Field(
        alias="placeName",
        description="Free-text place name, e.g. 'London'. Length is checked after trimming by the geocoder.",
    )

    @field_validator("place_name", mode="after")
    @classmethod
    def validate_place_name(cls, v: str) -> str:
        """Ensure place name is not empty or whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("placeName must not be empty")
        return v


class Coordinates(BaseModel):
    """Geographic position resolved from a place name."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class GeocodingMatch(BaseModel):
    """Single match from the OpenWeatherMap geocoding API."""

    name: str = ""
    lat: float
    lon: float
    country: str | None = None
    state: str | None = None

    def to_coordinates(self) -> Coordinates:
        return Coordinates(latitude=self.lat, longitude=self.lon)


class WeatherCondition(BaseModel):
    """Weather condition entry from OpenWeatherMap."""

    id: int | None = None
    main: str | None = None
    description: str = Field(min_length=1)
    icon: str = Field(min_length=1)


class MainMetrics(BaseModel):
    """Main weather metrics from OpenWeatherMap."""

    # Numbers are kept as sent (60 stays 60, 15.2 stays 15.2)
    temp: int | float
    humidity: int | float
    feels_like: float | None = None
    pressure: float | None = None


class WindInfo(BaseModel):
    """Wind information from OpenWeatherMap."""

    speed: int | float
    deg: float | None = None
    gust: float | None = None


class RawWeatherPayload(BaseModel):
    """OpenWeatherMap current weather response.

    Only the fields the snapshot needs are required; everything else the
    provider sends is ignored.
    """

    weather: list[WeatherCondition] = Field(min_length=1)
    main: MainMetrics
    wind: WindInfo
    name: str | None = None


class WeatherSnapshot(BaseModel):
    """Normalized weather result returned to the caller."""

    model_config = ConfigDict(frozen=True)

    description: str
    icon: str
    temperature: int | float = Field(description="Temperature in °C")
    humidity: int | float = Field(description="Relative humidity in %")
    wind_speed: int | float = Field(description="Wind speed in m/s")
    # Not sourced from any provider call; omitted from responses when absent
    precipitation: float | None = None

    @classmethod
    def from_openweather(cls, data: RawWeatherPayload) -> "WeatherSnapshot":
        """Create WeatherSnapshot from OpenWeatherMap data.

        Args:
            data: Validated RawWeatherPayload

        Returns:
            WeatherSnapshot with values copied verbatim (provider already returns metric units)
        """
        condition = data.weather[0]
        return cls(
            description=condition.description,
            icon=condition.icon,
            temperature=data.main.temp,
            humidity=data.main.humidity,
            wind_speed=data.wind.speed,
        )
