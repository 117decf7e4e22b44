"""Location resolution — city search text or device position to a LocationQuery."""

from __future__ import annotations

import httpx
import structlog

from weather_pulse.errors import CapabilityError, LocationPermissionError, ValidationError
from weather_pulse.models import CityQuery, CoordsQuery

logger = structlog.get_logger()

EMPTY_QUERY_MESSAGE = "Enter a city name to search."
UNSUPPORTED_MESSAGE = "Geolocation is not supported on this device."
DENIED_MESSAGE = "Unable to access your location. Check device permissions."


class IPGeolocator:
    """Approximate device position from the host's public IP.

    Talks to an ip-api.com compatible endpoint, which answers with
    ``{"status": "success", "lat": ..., "lon": ...}`` or
    ``{"status": "fail", "message": ...}``.
    """

    def __init__(self, url: str = "http://ip-api.com/json", timeout: float = 10.0):
        self.url = url
        self.timeout = timeout

    async def locate(self) -> tuple[float, float]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(self.url, params={"fields": "status,message,lat,lon"})
                resp.raise_for_status()
                data = resp.json()
        except httpx.TimeoutException as e:
            logger.warning("ip_geolocation_timeout", error=str(e))
            raise LocationPermissionError(DENIED_MESSAGE)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("ip_geolocation_failed", error=str(e))
            raise LocationPermissionError(DENIED_MESSAGE)

        if data.get("status") != "success" or "lat" not in data or "lon" not in data:
            logger.warning("ip_geolocation_refused", reason=data.get("message"))
            raise LocationPermissionError(DENIED_MESSAGE)

        return float(data["lat"]), float(data["lon"])


class LocationResolver:
    """Produces a LocationQuery from a search box or the device locator.

    Each call is a single best-effort attempt; nothing is retried.
    """

    def __init__(self, locator=None):
        self.locator = locator

    def resolve_from_search(self, text: str) -> CityQuery:
        name = (text or "").strip()
        if not name:
            raise ValidationError(EMPTY_QUERY_MESSAGE)
        return CityQuery(name=name)

    async def resolve_from_device(self) -> CoordsQuery:
        if self.locator is None:
            raise CapabilityError(UNSUPPORTED_MESSAGE)

        try:
            lat, lon = await self.locator.locate()
        except LocationPermissionError:
            raise
        except Exception as e:
            logger.warning("device_location_failed", error=str(e))
            raise LocationPermissionError(DENIED_MESSAGE)

        logger.info("device_location_resolved", lat=lat, lon=lon)
        return CoordsQuery(lat=lat, lon=lon)


def build_locator(kind: str, *, url: str, timeout: float):
    """Return the configured device locator, or None when unsupported."""
    if kind == "ip":
        return IPGeolocator(url=url, timeout=timeout)
    return None
