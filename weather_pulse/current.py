"""OpenWeatherMap current-conditions client."""

from __future__ import annotations

import httpx
import pydantic
import structlog

from weather_pulse.errors import ConfigError, FetchError
from weather_pulse.models import CityQuery, CurrentConditions, LocationQuery, UnitSystem

logger = structlog.get_logger()

OPENWEATHER_API_URL = "https://api.openweathermap.org/data/2.5/weather"

MISSING_KEY_MESSAGE = "Add OPENWEATHER_API_KEY to a .env file to fetch data."
PROVIDER_FALLBACK_MESSAGE = "Unable to fetch weather right now."
UNKNOWN_ERROR = "Unknown error"


def _query_params(query: LocationQuery, units: UnitSystem) -> dict[str, str]:
    """Location + units parameters, without the credential."""
    params = {"units": units.value}
    if isinstance(query, CityQuery):
        params["q"] = query.name
    else:
        params["lat"] = str(query.lat)
        params["lon"] = str(query.lon)
    return params


class CurrentConditionsFetcher:
    """Async client for OpenWeatherMap ``/data/2.5/weather``."""

    def __init__(
        self,
        api_key: str,
        url: str = OPENWEATHER_API_URL,
        timeout: float = 15.0,
    ):
        self.api_key = api_key
        self.url = url
        self.timeout = timeout

    async def fetch(self, query: LocationQuery, units: UnitSystem) -> CurrentConditions:
        """Fetch present weather for a city or coordinate query.

        Raises:
            ConfigError: No API key configured. No request is made.
            FetchError: Transport failure, provider error or malformed body.
        """
        if not self.api_key:
            raise ConfigError(MISSING_KEY_MESSAGE)

        params = _query_params(query, units)
        body = await self._fetch({"appid": self.api_key, **params})

        try:
            conditions = CurrentConditions.from_provider(body)
        except (AttributeError, KeyError, IndexError, TypeError, pydantic.ValidationError) as e:
            logger.error("openweather_malformed_body", error=str(e), **params)
            raise FetchError(str(e) or UNKNOWN_ERROR)

        logger.info(
            "current_conditions_fetched",
            location=conditions.name,
            country=conditions.country,
            units=units.value,
        )
        return conditions

    async def _fetch(self, params: dict) -> dict:
        """Make a request to OpenWeatherMap and return the decoded body."""
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(self.url, params=params)
            body = resp.json()
        except httpx.HTTPError as e:
            logger.error("openweather_request_error", error=str(e))
            raise FetchError(str(e) or UNKNOWN_ERROR)
        except ValueError as e:
            logger.error("openweather_invalid_json", error=str(e))
            raise FetchError(str(e) or UNKNOWN_ERROR)

        if not resp.is_success:
            message = body.get("message") if isinstance(body, dict) else None
            logger.error("openweather_http_error", status=resp.status_code, message=message)
            raise FetchError(message or PROVIDER_FALLBACK_MESSAGE)

        if not isinstance(body, dict):
            raise FetchError("Unexpected response from weather provider.")
        return body
