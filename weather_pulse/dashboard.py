"""Orchestrates location resolution and the two fetch pipelines.

The dashboard owns all mutable state: the unit system, the last-used
location, and one FetchState per provider.  Each pipeline tags every
request with a generation number; a response only lands if its generation
is still the newest, so a slow stale request can never overwrite a newer
one (last write wins).
"""

from __future__ import annotations

import structlog

from weather_pulse.config import Settings, default_units, get_settings
from weather_pulse.current import CurrentConditionsFetcher
from weather_pulse.errors import WeatherError
from weather_pulse.forecast import WeeklyForecastFetcher
from weather_pulse.location import LocationResolver, build_locator
from weather_pulse.models import CurrentConditions, FetchState, LocationQuery, UnitSystem
from weather_pulse.presentation import DashboardView, build_view

logger = structlog.get_logger()


class WeatherDashboard:
    """Current conditions + weekly outlook for one user session."""

    def __init__(
        self,
        resolver: LocationResolver,
        current_fetcher: CurrentConditionsFetcher,
        forecast_fetcher: WeeklyForecastFetcher,
        units: UnitSystem = UnitSystem.METRIC,
    ):
        self.resolver = resolver
        self.current_fetcher = current_fetcher
        self.forecast_fetcher = forecast_fetcher
        self.units = units
        self.last_query: LocationQuery | None = None
        self.current_state: FetchState = FetchState.idle()
        self.forecast_state: FetchState = FetchState.idle()
        self._current_generation = 0
        self._forecast_generation = 0

    # ------------------------------------------------------------------
    # Location-changing actions
    # ------------------------------------------------------------------

    async def search(self, text: str) -> FetchState:
        """Resolve free text to a city and fetch its weather."""
        try:
            query = self.resolver.resolve_from_search(text)
        except WeatherError as e:
            self._fail_resolution(e)
            return self.current_state
        return await self.fetch_current(query)

    async def use_device_location(self) -> FetchState:
        """Resolve the device position and fetch its weather."""
        try:
            query = await self.resolver.resolve_from_device()
        except WeatherError as e:
            self._fail_resolution(e)
            return self.current_state
        return await self.fetch_current(query)

    async def refresh(self) -> FetchState:
        """Replay the last location with the current unit system."""
        if self.last_query is None:
            return self.current_state
        return await self.fetch_current(self.last_query)

    # ------------------------------------------------------------------
    # Unit system
    # ------------------------------------------------------------------

    async def toggle_units(self) -> UnitSystem:
        await self.set_units(self.units.toggled())
        return self.units

    async def set_units(self, units: UnitSystem) -> None:
        """Switch units and re-fetch the last location, if any."""
        units = UnitSystem(units)
        if units is self.units:
            return
        self.units = units
        logger.info("units_changed", units=units.value, replay=self.last_query is not None)
        if self.last_query is not None:
            await self.fetch_current(self.last_query)

    # ------------------------------------------------------------------
    # Pipelines
    # ------------------------------------------------------------------

    async def fetch_current(self, query: LocationQuery) -> FetchState:
        """Fetch current conditions, then cascade into the weekly forecast."""
        self._current_generation += 1
        generation = self._current_generation
        # A new location makes any pending forecast for the old one stale
        self._forecast_generation += 1
        units = self.units

        self.last_query = query
        self.current_state = FetchState.loading()

        try:
            conditions = await self.current_fetcher.fetch(query, units)
        except WeatherError as e:
            if generation != self._current_generation:
                logger.debug("stale_current_error_discarded", generation=generation)
                return self.current_state
            logger.warning("current_conditions_failed", error=e.message, units=units.value)
            self.current_state = FetchState.error(e.message)
            self.forecast_state = FetchState.idle()
            return self.current_state

        if generation != self._current_generation:
            logger.debug("stale_current_result_discarded", generation=generation)
            return self.current_state

        self.current_state = FetchState.success(conditions)
        await self._sync_forecast(conditions)
        return self.current_state

    async def fetch_forecast(self, lat: float, lon: float) -> FetchState:
        """Fetch the weekly outlook for a coordinate pair."""
        self._forecast_generation += 1
        generation = self._forecast_generation
        units = self.units

        self.forecast_state = FetchState.loading()

        try:
            forecast = await self.forecast_fetcher.fetch(lat, lon, units)
        except WeatherError as e:
            if generation != self._forecast_generation:
                logger.debug("stale_forecast_error_discarded", generation=generation)
                return self.forecast_state
            logger.warning("weekly_forecast_failed", error=e.message, lat=lat, lon=lon)
            self.forecast_state = FetchState.error(e.message)
            return self.forecast_state

        if generation != self._forecast_generation:
            logger.debug("stale_forecast_result_discarded", generation=generation)
            return self.forecast_state

        self.forecast_state = FetchState.success(forecast)
        return self.forecast_state

    async def _sync_forecast(self, conditions: CurrentConditions) -> None:
        if not conditions.has_valid_coordinates:
            logger.warning("forecast_skipped_invalid_coordinates", lat=conditions.lat, lon=conditions.lon)
            self.forecast_state = FetchState.idle()
            return
        await self.fetch_forecast(conditions.lat, conditions.lon)

    def _fail_resolution(self, error: WeatherError) -> None:
        logger.info("location_resolution_failed", error_type=type(error).__name__, error=error.message)
        self.current_state = FetchState.error(error.message)
        self.forecast_state = FetchState.idle()

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    def view(self) -> DashboardView:
        return build_view(self.current_state.value, self.forecast_state.value, self.units)

    def snapshot(self) -> dict:
        """JSON-safe dump of both states, the units and the rendered view."""
        return {
            "units": self.units.value,
            "last_query": self.last_query.model_dump() if self.last_query is not None else None,
            "current": self.current_state.model_dump(mode="json"),
            "forecast": self.forecast_state.model_dump(mode="json"),
            "view": self.view().model_dump(mode="json"),
        }


def create_dashboard(settings: Settings | None = None) -> WeatherDashboard:
    """Wire a dashboard from settings; units default from the locale."""
    settings = settings or get_settings()
    locator = build_locator(
        settings.device_locator,
        url=settings.ip_geolocation_url,
        timeout=settings.request_timeout,
    )
    return WeatherDashboard(
        resolver=LocationResolver(locator),
        current_fetcher=CurrentConditionsFetcher(
            api_key=settings.openweather_api_key,
            url=settings.openweather_url,
            timeout=settings.request_timeout,
        ),
        forecast_fetcher=WeeklyForecastFetcher(
            url=settings.open_meteo_url,
            timeout=settings.request_timeout,
        ),
        units=default_units(settings.resolved_locale()),
    )
