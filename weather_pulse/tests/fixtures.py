"""Test fixtures, canned provider payloads and fakes for weather_pulse tests."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import httpx

from weather_pulse.models import CurrentConditions, DailyForecastEntry

OPENWEATHER_LONDON = {
    "coord": {"lon": -0.1257, "lat": 51.5085},
    "weather": [{"id": 804, "main": "Clouds", "description": "overcast clouds", "icon": "04d"}],
    "main": {"temp": 8.5, "feels_like": 5.3, "temp_min": 7.2, "temp_max": 9.6, "pressure": 1013, "humidity": 72},
    "visibility": 10000,
    "wind": {"speed": 4.1, "deg": 230},
    "dt": 1771156800,
    "sys": {"country": "GB", "sunrise": 1771140000, "sunset": 1771176000},
    "timezone": 0,
    "id": 2643743,
    "name": "London",
    "cod": 200,
}

OPENWEATHER_NOT_FOUND = {"cod": "404", "message": "city not found"}

OPEN_METEO_WEEK = {
    "latitude": 51.5,
    "longitude": -0.12,
    "timezone": "Europe/London",
    "daily": {
        "time": [
            "2026-02-15",
            "2026-02-16",
            "2026-02-17",
            "2026-02-18",
            "2026-02-19",
            "2026-02-20",
            "2026-02-21",
        ],
        "weathercode": [3, 61, 1, 0, 95, 71, 45],
        "temperature_2m_max": [10.2, 8.5, 11.0, 12.4, 9.9, 3.1, 6.0],
        "temperature_2m_min": [4.1, 3.2, 5.5, 6.0, 4.4, -1.5, 2.0],
        "uv_index_max": [2.0, 1.5, 3.0, 3.2, 1.0, 0.8, 1.1],
        "sunrise": [
            "2026-02-15T07:15",
            "2026-02-16T07:13",
            "2026-02-17T07:11",
            "2026-02-18T07:09",
            "2026-02-19T07:07",
            "2026-02-20T07:05",
            "2026-02-21T07:03",
        ],
        "sunset": [
            "2026-02-15T17:05",
            "2026-02-16T17:07",
            "2026-02-17T17:09",
            "2026-02-18T17:11",
            "2026-02-19T17:13",
            "2026-02-20T17:15",
            "2026-02-21T17:17",
        ],
    },
}

OPEN_METEO_EMPTY = {"daily": {"time": []}}

# Only the time series; every other array missing
OPEN_METEO_SPARSE = {
    "daily": {
        "time": ["2026-02-15", "2026-02-16"],
        "temperature_2m_max": [10.2],
    }
}


def make_response(status_code: int, payload=None, *, text: str | None = None) -> httpx.Response:
    """Real httpx.Response bound to a request so raise_for_status works."""
    request = httpx.Request("GET", "https://provider.test")
    if text is not None:
        return httpx.Response(status_code, text=text, request=request)
    return httpx.Response(status_code, json=payload, request=request)


def mock_async_client(response=None, side_effect=None) -> AsyncMock:
    """AsyncMock usable as ``async with httpx.AsyncClient() as client``."""
    client = AsyncMock()
    if side_effect is not None:
        client.get.side_effect = side_effect
    else:
        client.get.return_value = response
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    return client


def make_conditions(name: str = "London", lat: float = 51.5085, lon: float = -0.1257, **overrides) -> CurrentConditions:
    fields = {
        "name": name,
        "country": "GB",
        "observed_at": 1771156800,
        "utc_offset": 0,
        "temperature": 8.5,
        "feels_like": 5.3,
        "humidity": 72,
        "wind_speed": 4.1,
        "visibility": 10000,
        "condition": "Clouds",
        "description": "overcast clouds",
        "lat": lat,
        "lon": lon,
    }
    fields.update(overrides)
    return CurrentConditions(**fields)


def make_week(first_day: str = "2026-02-15") -> list[DailyForecastEntry]:
    return [
        DailyForecastEntry(day=first_day, code=3, temp_max=10.2, temp_min=4.1, uv_max=2.0,
                           sunrise="2026-02-15T07:15", sunset="2026-02-15T17:05"),
    ]


# ---------------------------------------------------------------------------
# Fake fetchers
# ---------------------------------------------------------------------------


class StubFetcher:
    """Returns (or raises) queued outcomes immediately and records calls."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls: list[tuple] = []

    async def fetch(self, *args):
        self.calls.append(args)
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class GatedFetcher:
    """Each call blocks until the test releases it, so completion order is controlled."""

    def __init__(self):
        self.calls: list[tuple] = []
        self._gates: list[tuple[asyncio.Event, dict]] = []

    async def fetch(self, *args):
        self.calls.append(args)
        gate = asyncio.Event()
        slot: dict = {}
        self._gates.append((gate, slot))
        await gate.wait()
        if "error" in slot:
            raise slot["error"]
        return slot["value"]

    def release(self, index: int, value=None, error: Exception | None = None) -> None:
        gate, slot = self._gates[index]
        if error is not None:
            slot["error"] = error
        else:
            slot["value"] = value
        gate.set()


class StubLocator:
    def __init__(self, position=None, error: Exception | None = None):
        self.position = position
        self.error = error
        self.calls = 0

    async def locate(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.position
