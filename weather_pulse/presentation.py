"""Display-ready strings derived from current conditions and the weekly forecast.

Everything here is a pure function of its arguments: no I/O, no state.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta, timezone

from pydantic import BaseModel

from weather_pulse.forecast import weekly_summary
from weather_pulse.models import CurrentConditions, DailyForecastEntry, UnitSystem

DEFAULT_HEADLINE = "Weather Pulse"
DEFAULT_DESCRIPTION = "Live climate snapshots for any city."
DEFAULT_GLYPH = "✨"
PLACEHOLDER = "--"

METERS_PER_MILE = 1609.34

CONDITION_GLYPHS: dict[str, str] = {
    "Clear": "☀️",
    "Clouds": "☁️",
    "Rain": "🌧️",
    "Drizzle": "🌦️",
    "Thunderstorm": "⛈️",
    "Snow": "❄️",
    "Mist": "🌫️",
    "Smoke": "🌫️",
    "Haze": "🌫️",
    "Fog": "🌫️",
    "Sand": "🌬️",
    "Dust": "🌬️",
    "Ash": "🌋",
    "Squall": "🌬️",
    "Tornado": "🌪️",
}


class ForecastCard(BaseModel):
    day_label: str
    emoji: str
    label: str
    high: str
    low: str


class DashboardView(BaseModel):
    """Everything a front end needs to draw the dashboard."""

    units: UnitSystem
    unit_badge: str
    headline: str
    description: str
    temperature: str = PLACEHOLDER
    feels_like: str = PLACEHOLDER
    condition: str = ""
    updated: str = ""
    humidity: str = PLACEHOLDER
    wind: str = PLACEHOLDER
    visibility: str = PLACEHOLDER
    sky: str = PLACEHOLDER
    forecast: list[ForecastCard] = []
    sunrise: str = PLACEHOLDER
    sunset: str = PLACEHOLDER
    uv_max: str = PLACEHOLDER


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def condition_glyph(category: str) -> str:
    return CONDITION_GLYPHS.get(category, DEFAULT_GLYPH)


def temperature_symbol(units: UnitSystem) -> str:
    return "F" if units is UnitSystem.IMPERIAL else "C"


def wind_unit(units: UnitSystem) -> str:
    # OpenWeatherMap reports m/s for metric and mph for imperial
    return "mph" if units is UnitSystem.IMPERIAL else "m/s"


def unit_badge(units: UnitSystem) -> str:
    return "Fahrenheit" if units is UnitSystem.IMPERIAL else "Celsius"


def format_temperature(value: float, units: UnitSystem) -> str:
    return f"{_round_half_up(value)}°{temperature_symbol(units)}"


def format_local_time(epoch_seconds: int, utc_offset: int) -> str:
    """Wall-clock ``HH:MM`` at the observed location."""
    local = datetime.fromtimestamp(epoch_seconds, tz=timezone(timedelta(seconds=utc_offset)))
    return local.strftime("%H:%M")


def format_distance(meters: float, units: UnitSystem) -> str:
    if units is UnitSystem.IMPERIAL:
        return f"{meters / METERS_PER_MILE:.1f} mi"
    return f"{meters / 1000:.1f} km"


def format_wind_speed(speed: float, units: UnitSystem) -> str:
    """Provider value as reported, without rounding; whole numbers drop the ``.0``."""
    value = int(speed) if float(speed).is_integer() else speed
    return f"{value} {wind_unit(units)}"


def format_day_label(day: date) -> str:
    """``Mon, Jun 3`` style label."""
    return f"{day:%a, %b} {day.day}"


def format_short_time(moment: datetime) -> str:
    return moment.strftime("%H:%M")


def build_view(
    current: CurrentConditions | None,
    forecast: list[DailyForecastEntry] | None,
    units: UnitSystem,
) -> DashboardView:
    """Derive the full dashboard view from whatever data is available."""
    view = DashboardView(
        units=units,
        unit_badge=unit_badge(units),
        headline=DEFAULT_HEADLINE,
        description=DEFAULT_DESCRIPTION,
    )

    if current is not None:
        view.headline = f"{current.name}, {current.country}" if current.country else current.name
        description = current.description or "Clear sky"
        view.description = f"{condition_glyph(current.condition)} {description}"
        view.temperature = format_temperature(current.temperature, units)
        view.feels_like = format_temperature(current.feels_like, units)
        view.condition = current.condition
        view.updated = format_local_time(current.observed_at, current.utc_offset)
        view.humidity = f"{_round_half_up(current.humidity)}%"
        view.wind = format_wind_speed(current.wind_speed, units)
        if current.visibility is not None:
            view.visibility = format_distance(current.visibility, units)
        view.sky = current.description or PLACEHOLDER

    if forecast:
        for entry in forecast:
            summary = weekly_summary(entry.code)
            view.forecast.append(
                ForecastCard(
                    day_label=format_day_label(entry.day),
                    emoji=summary.emoji,
                    label=summary.label.value,
                    high=f"{_round_half_up(entry.temp_max)}°",
                    low=f"{_round_half_up(entry.temp_min)}°",
                )
            )

        today = forecast[0]
        if today.sunrise is not None:
            view.sunrise = format_short_time(today.sunrise)
        if today.sunset is not None:
            view.sunset = format_short_time(today.sunset)
        if today.uv_max is not None:
            view.uv_max = f"{today.uv_max:.1f}"

    return view
