"""Configuration management using Pydantic Settings."""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from weather_pulse.models import UnitSystem

# Locales whose users expect Fahrenheit / miles by default
IMPERIAL_LOCALES = frozenset({"en-US", "en-LR", "en-MM"})


def normalize_locale(value: str) -> str:
    """Turn a POSIX locale (``en_US.UTF-8``) into a BCP 47 tag (``en-US``)."""
    value = value.strip()
    if not value:
        return ""
    value = value.split(".", 1)[0].split("@", 1)[0]
    return value.replace("_", "-")


def default_units(locale: str) -> UnitSystem:
    """Pick the starting unit system for a locale."""
    if normalize_locale(locale) in IMPERIAL_LOCALES:
        return UnitSystem.IMPERIAL
    return UnitSystem.METRIC


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # OpenWeatherMap current weather (needs an API key)
    openweather_api_key: str = ""
    openweather_url: str = "https://api.openweathermap.org/data/2.5/weather"

    # Open-Meteo daily forecast (no key)
    open_meteo_url: str = "https://api.open-meteo.com/v1/forecast"

    # HTTP client timeout in seconds, applied to both providers
    request_timeout: float = 15.0

    # Locale used once at startup to choose metric/imperial.
    # Falls back to $LANG when empty.
    locale: str = ""

    # Device location: "" (unsupported) or "ip"
    device_locator: str = ""
    ip_geolocation_url: str = "http://ip-api.com/json"

    # Inter-service auth (empty = dev mode, auth disabled)
    service_auth_token: str = ""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    def resolved_locale(self) -> str:
        return normalize_locale(self.locale or os.environ.get("LANG", ""))


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
