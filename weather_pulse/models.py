"""Pydantic models for locations, provider results and fetch lifecycle."""

from __future__ import annotations

import math
from datetime import date, datetime
from enum import Enum
from typing import Annotated, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class UnitSystem(str, Enum):
    METRIC = "metric"
    IMPERIAL = "imperial"

    def toggled(self) -> UnitSystem:
        return UnitSystem.IMPERIAL if self is UnitSystem.METRIC else UnitSystem.METRIC


class ConditionCategory(str, Enum):
    """Canonical weather kinds shared by both providers."""

    CLEAR = "Clear"
    CLOUDS = "Clouds"
    RAIN = "Rain"
    DRIZZLE = "Drizzle"
    THUNDERSTORM = "Thunderstorm"
    SNOW = "Snow"
    MIST = "Mist"
    SMOKE = "Smoke"
    HAZE = "Haze"
    FOG = "Fog"
    SAND = "Sand"
    DUST = "Dust"
    ASH = "Ash"
    SQUALL = "Squall"
    TORNADO = "Tornado"
    # Only produced by the weekly forecast code table
    SHOWERS = "Showers"
    STORM = "Storm"


# ---------------------------------------------------------------------------
# Location queries
# ---------------------------------------------------------------------------


class CityQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["city"] = "city"
    name: str


class CoordsQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["coords"] = "coords"
    lat: float
    lon: float


LocationQuery = Annotated[CityQuery | CoordsQuery, Field(discriminator="kind")]


# ---------------------------------------------------------------------------
# Provider results
# ---------------------------------------------------------------------------


class CurrentConditions(BaseModel):
    """Normalized present weather from OpenWeatherMap."""

    name: str
    country: str = ""
    observed_at: int  # epoch seconds
    utc_offset: int = 0  # seconds east of UTC
    temperature: float
    feels_like: float
    humidity: float
    wind_speed: float
    visibility: float | None = None  # meters
    condition: str  # ConditionCategory value, unknown kinds pass through
    description: str = ""
    lat: float
    lon: float

    @property
    def has_valid_coordinates(self) -> bool:
        """True when (lat, lon) are finite and within WGS84 bounds."""
        if not (math.isfinite(self.lat) and math.isfinite(self.lon)):
            return False
        return -90 <= self.lat <= 90 and -180 <= self.lon <= 180

    @classmethod
    def from_provider(cls, body: dict) -> CurrentConditions:
        """Build from an OpenWeatherMap ``/data/2.5/weather`` response body.

        Raises KeyError / TypeError / IndexError / AttributeError on a malformed
        body; a null ``sys`` or ``wind`` block counts as absent. The
        fetcher converts those to FetchError.
        """
        weather = body["weather"][0]
        main = body["main"]
        return cls(
            name=body["name"],
            country=(body.get("sys") or {}).get("country", ""),
            observed_at=body["dt"],
            utc_offset=body.get("timezone", 0),
            temperature=main["temp"],
            feels_like=main["feels_like"],
            humidity=main["humidity"],
            wind_speed=(body.get("wind") or {}).get("speed", 0),
            visibility=body.get("visibility"),
            condition=weather["main"],
            description=weather.get("description", ""),
            lat=body["coord"]["lat"],
            lon=body["coord"]["lon"],
        )


class DailyForecastEntry(BaseModel):
    """One day of the Open-Meteo daily series."""

    day: date  # provider-local calendar day
    code: int = 0
    temp_max: float = 0
    temp_min: float = 0
    uv_max: float | None = None
    sunrise: datetime | None = None
    sunset: datetime | None = None


# ---------------------------------------------------------------------------
# Fetch lifecycle
# ---------------------------------------------------------------------------


class FetchStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class FetchState(BaseModel, Generic[T]):
    """idle / loading / success(value) / error(message) for one async result."""

    model_config = ConfigDict(frozen=True)

    status: FetchStatus = FetchStatus.IDLE
    value: T | None = None
    message: str | None = None

    @classmethod
    def idle(cls) -> FetchState[T]:
        return cls()

    @classmethod
    def loading(cls) -> FetchState[T]:
        return cls(status=FetchStatus.LOADING)

    @classmethod
    def success(cls, value: T) -> FetchState[T]:
        return cls(status=FetchStatus.SUCCESS, value=value)

    @classmethod
    def error(cls, message: str) -> FetchState[T]:
        return cls(status=FetchStatus.ERROR, message=message)

    @property
    def is_loading(self) -> bool:
        return self.status is FetchStatus.LOADING


# ---------------------------------------------------------------------------
# Tool request models
# ---------------------------------------------------------------------------


class SearchRequest(BaseModel):
    query: str


class SetUnitsRequest(BaseModel):
    units: UnitSystem
