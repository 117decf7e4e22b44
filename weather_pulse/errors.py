"""Error taxonomy for location resolution and provider fetches.

Every error carries a user-facing ``message``.  The dashboard catches these
at the fetcher boundary and stores the message in the matching FetchState,
so none of them escape to the caller.
"""

from __future__ import annotations


class WeatherError(Exception):
    """Base class for all weather pipeline errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(WeatherError):
    """Bad user input (e.g. an empty search).  Re-prompt the user."""


class ConfigError(WeatherError):
    """Missing credential.  Terminal for the attempt, fixable by the operator."""


class CapabilityError(WeatherError):
    """The device offers no location capability."""


class LocationPermissionError(WeatherError):
    """The device location was denied or timed out."""


class FetchError(WeatherError):
    """Network failure or provider-reported error."""
