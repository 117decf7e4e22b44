"""Weather Pulse — current conditions and 7-day outlook from OpenWeatherMap and Open-Meteo."""

__version__ = "1.0.0"
