"""Tool implementations backed by a single WeatherDashboard."""

from __future__ import annotations

import structlog

from weather_pulse.dashboard import WeatherDashboard
from weather_pulse.models import SearchRequest, SetUnitsRequest

logger = structlog.get_logger()


class WeatherTools:
    """Thin async facade the HTTP service dispatches tool calls to."""

    def __init__(self, dashboard: WeatherDashboard):
        self.dashboard = dashboard

    async def search(self, query: str) -> dict:
        request = SearchRequest(query=query)
        await self.dashboard.search(request.query)
        return self.dashboard.snapshot()

    async def use_location(self) -> dict:
        await self.dashboard.use_device_location()
        return self.dashboard.snapshot()

    async def toggle_units(self) -> dict:
        await self.dashboard.toggle_units()
        return self.dashboard.snapshot()

    async def set_units(self, units: str) -> dict:
        request = SetUnitsRequest(units=units)
        await self.dashboard.set_units(request.units)
        return self.dashboard.snapshot()

    async def refresh(self) -> dict:
        await self.dashboard.refresh()
        return self.dashboard.snapshot()

    async def state(self) -> dict:
        return self.dashboard.snapshot()
