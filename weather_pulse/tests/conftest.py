"""Shared fixtures for the weather_pulse test suite."""

from __future__ import annotations

import pytest

from weather_pulse.dashboard import WeatherDashboard
from weather_pulse.location import LocationResolver
from weather_pulse.models import UnitSystem
from weather_pulse.tests.fixtures import StubFetcher, make_conditions, make_week


@pytest.fixture
def current_fetcher():
    return StubFetcher(make_conditions())


@pytest.fixture
def forecast_fetcher():
    return StubFetcher(make_week())


@pytest.fixture
def dashboard(current_fetcher, forecast_fetcher):
    """Dashboard wired to immediate stub fetchers, metric units, no locator."""
    return WeatherDashboard(
        resolver=LocationResolver(),
        current_fetcher=current_fetcher,
        forecast_fetcher=forecast_fetcher,
        units=UnitSystem.METRIC,
    )
