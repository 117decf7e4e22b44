"""Command-line front end for Weather Pulse."""

from __future__ import annotations

import asyncio

import click

from weather_pulse.config import get_settings
from weather_pulse.dashboard import WeatherDashboard, create_dashboard
from weather_pulse.models import FetchStatus, UnitSystem
from weather_pulse.presentation import DashboardView


def run_async(coro):
    """Run an async function in a new event loop."""
    return asyncio.run(coro)


def render_text(dashboard: WeatherDashboard) -> str:
    """Plain-text rendering of the dashboard state."""
    view: DashboardView = dashboard.view()
    lines = [view.headline, view.description, ""]

    current = dashboard.current_state
    if current.status is FetchStatus.ERROR:
        lines.append(f"Error: {current.message}")
    elif current.status is FetchStatus.SUCCESS:
        lines.append(f"{view.temperature}  (feels like {view.feels_like})  {view.condition}")
        lines.append(f"Updated {view.updated}")
        lines.append(f"Humidity {view.humidity} | Wind {view.wind} | Visibility {view.visibility}")
        lines.append(f"Sky {view.sky}")

    forecast = dashboard.forecast_state
    if forecast.status is FetchStatus.ERROR:
        lines += ["", f"7-day outlook: {forecast.message}"]
    elif forecast.status is FetchStatus.SUCCESS:
        lines += ["", "7-day outlook"]
        for card in view.forecast:
            lines.append(f"  {card.day_label:<12} {card.emoji} {card.label:<8} {card.high:>5} / {card.low:>5}")
        lines.append(f"  Sunrise {view.sunrise} | Sunset {view.sunset} | UV max {view.uv_max}")
        lines.append("  Data by Open-Meteo")

    return "\n".join(lines)


async def _load(units: str | None, city: str | None) -> WeatherDashboard:
    dashboard = create_dashboard(get_settings())
    if units:
        dashboard.units = UnitSystem(units)
    if city is None:
        await dashboard.use_device_location()
    else:
        await dashboard.search(city)
    return dashboard


@click.group()
def cli():
    """Weather Pulse — current conditions and a 7-day outlook."""
    pass


_units_option = click.option(
    "--units",
    type=click.Choice([u.value for u in UnitSystem]),
    default=None,
    help="Unit system (default: derived from locale)",
)


@cli.command()
@click.argument("city")
@_units_option
def show(city, units):
    """Show weather for CITY."""
    dashboard = run_async(_load(units, city))
    click.echo(render_text(dashboard))
    if dashboard.current_state.status is FetchStatus.ERROR:
        raise SystemExit(1)


@cli.command()
@_units_option
def here(units):
    """Show weather for the device location."""
    dashboard = run_async(_load(units, None))
    click.echo(render_text(dashboard))
    if dashboard.current_state.status is FetchStatus.ERROR:
        raise SystemExit(1)


@cli.command()
@click.option("--host", default="0.0.0.0", help="Bind address")
@click.option("--port", default=8000, type=int, help="Bind port")
def serve(host, port):
    """Run the HTTP service."""
    import uvicorn

    uvicorn.run("weather_pulse.main:app", host=host, port=port, log_level="info")


if __name__ == "__main__":
    cli()
