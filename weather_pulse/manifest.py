"""Weather Pulse manifest — tool definitions."""

from weather_pulse.schemas.tools import ModuleManifest, ToolDefinition, ToolParameter

MANIFEST = ModuleManifest(
    module_name="weather",
    description=(
        "Current conditions from OpenWeatherMap and a 7-day outlook from Open-Meteo "
        "for a searched city or the device location."
    ),
    tools=[
        ToolDefinition(
            name="weather.search",
            description=(
                "Look up a city and load its current conditions, then its 7-day forecast. "
                "Example: 'Seoul'"
            ),
            parameters=[
                ToolParameter(
                    name="query",
                    type="string",
                    description="City name (e.g. 'London', 'New York', 'Seoul')",
                ),
            ],
        ),
        ToolDefinition(
            name="weather.use_location",
            description="Load weather for the device's current position.",
        ),
        ToolDefinition(
            name="weather.toggle_units",
            description="Switch between metric and imperial and re-fetch the last location.",
        ),
        ToolDefinition(
            name="weather.set_units",
            description="Select a unit system and re-fetch the last location if it changed.",
            parameters=[
                ToolParameter(
                    name="units",
                    type="string",
                    description="Unit system",
                    enum=["metric", "imperial"],
                ),
            ],
        ),
        ToolDefinition(
            name="weather.refresh",
            description="Re-fetch the last location with the current unit system.",
        ),
        ToolDefinition(
            name="weather.state",
            description="Return both fetch states, the unit system and the rendered view.",
        ),
    ],
)
