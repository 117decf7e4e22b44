"""Open-Meteo 7-day forecast client."""

from __future__ import annotations

from dataclasses import dataclass

import httpx
import pydantic
import structlog

from weather_pulse.errors import FetchError
from weather_pulse.models import ConditionCategory, DailyForecastEntry, UnitSystem

logger = structlog.get_logger()

OPEN_METEO_API_URL = "https://api.open-meteo.com/v1/forecast"

FORECAST_DAYS = 7

# Daily variables we request from Open-Meteo
DAILY_VARS = [
    "weathercode",
    "temperature_2m_max",
    "temperature_2m_min",
    "uv_index_max",
    "sunrise",
    "sunset",
]

FORECAST_HTTP_ERROR = "Unable to fetch the weekly forecast."
FORECAST_UNAVAILABLE = "Weekly forecast data is unavailable."


@dataclass(frozen=True)
class WeeklySummary:
    """Category and glyph for one forecast day."""

    label: ConditionCategory
    emoji: str


def weekly_summary(code: int) -> WeeklySummary:
    """Map a WMO weather code to a category. First matching range wins."""
    if code == 0:
        return WeeklySummary(ConditionCategory.CLEAR, "☀️")
    if 1 <= code <= 3:
        return WeeklySummary(ConditionCategory.CLOUDS, "⛅")
    if code in (45, 48):
        return WeeklySummary(ConditionCategory.FOG, "🌫️")
    if 51 <= code <= 55:
        return WeeklySummary(ConditionCategory.DRIZZLE, "🌦️")
    if 61 <= code <= 67:
        return WeeklySummary(ConditionCategory.RAIN, "🌧️")
    if 71 <= code <= 77:
        return WeeklySummary(ConditionCategory.SNOW, "❄️")
    if 80 <= code <= 82:
        return WeeklySummary(ConditionCategory.SHOWERS, "🌦️")
    if code in (85, 86):
        return WeeklySummary(ConditionCategory.SNOW, "🌨️")
    if code >= 95:
        return WeeklySummary(ConditionCategory.STORM, "⛈️")
    return WeeklySummary(ConditionCategory.CLEAR, "✨")


def _temperature_unit(units: UnitSystem) -> str:
    return "fahrenheit" if units is UnitSystem.IMPERIAL else "celsius"


def _at(series, index: int):
    """Value at ``index`` of an optional parallel array, or None.

    A series that is not a list is treated as absent.
    """
    if not isinstance(series, list) or index >= len(series):
        return None
    return series[index]


def parse_daily(body: dict) -> list[DailyForecastEntry]:
    """Zip Open-Meteo's parallel ``daily`` arrays into entries.

    Missing numeric values become 0; missing UV / sunrise / sunset stay None.
    A ``daily`` block that is not an object, or a ``time`` axis that is not
    a non-empty list, means there is no forecast.
    """
    daily = body.get("daily")
    times = daily.get("time") if isinstance(daily, dict) else None
    if not isinstance(times, list) or not times:
        raise FetchError(FORECAST_UNAVAILABLE)

    entries = []
    for i, day in enumerate(times):
        code = _at(daily.get("weathercode"), i)
        temp_max = _at(daily.get("temperature_2m_max"), i)
        temp_min = _at(daily.get("temperature_2m_min"), i)
        entries.append(
            DailyForecastEntry(
                day=day,
                code=code if code is not None else 0,
                temp_max=temp_max if temp_max is not None else 0,
                temp_min=temp_min if temp_min is not None else 0,
                uv_max=_at(daily.get("uv_index_max"), i),
                sunrise=_at(daily.get("sunrise"), i),
                sunset=_at(daily.get("sunset"), i),
            )
        )
    return entries


class WeeklyForecastFetcher:
    """Async client for the Open-Meteo daily forecast."""

    def __init__(self, url: str = OPEN_METEO_API_URL, timeout: float = 15.0):
        self.url = url
        self.timeout = timeout

    async def fetch(self, lat: float, lon: float, units: UnitSystem) -> list[DailyForecastEntry]:
        """Fetch the 7-day outlook for a coordinate pair.

        Raises:
            FetchError: Non-2xx response, transport failure, or no daily series.
        """
        params = {
            "latitude": lat,
            "longitude": lon,
            "daily": ",".join(DAILY_VARS),
            "timezone": "auto",
            "forecast_days": FORECAST_DAYS,
            "temperature_unit": _temperature_unit(units),
        }

        body = await self._fetch(params)
        try:
            forecast = parse_daily(body)
        except (AttributeError, TypeError, pydantic.ValidationError) as e:
            logger.error("open_meteo_malformed_body", error=str(e))
            raise FetchError(FORECAST_UNAVAILABLE)

        logger.info("weekly_forecast_fetched", lat=lat, lon=lon, days=len(forecast), units=units.value)
        return forecast

    async def _fetch(self, params: dict) -> dict:
        """Make a request to the Open-Meteo API."""
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(self.url, params=params)
                resp.raise_for_status()
                body = resp.json()
        except httpx.HTTPStatusError as e:
            logger.error("open_meteo_http_error", status=e.response.status_code, body=e.response.text)
            raise FetchError(FORECAST_HTTP_ERROR)
        except httpx.RequestError as e:
            logger.error("open_meteo_request_error", error=str(e))
            raise FetchError(str(e) or "Unknown error")
        except ValueError as e:
            logger.error("open_meteo_invalid_json", error=str(e))
            raise FetchError(str(e) or "Unknown error")

        if not isinstance(body, dict):
            raise FetchError(FORECAST_UNAVAILABLE)
        return body
