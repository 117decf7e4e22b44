"""Weather Pulse — FastAPI service."""

from __future__ import annotations

import structlog
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from weather_pulse.auth import require_service_auth
from weather_pulse.config import Settings, get_settings
from weather_pulse.dashboard import create_dashboard
from weather_pulse.manifest import MANIFEST
from weather_pulse.schemas.common import HealthResponse
from weather_pulse.schemas.tools import ModuleManifest, ToolCall, ToolResult
from weather_pulse.tools import WeatherTools

structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer(),
    ],
)

logger = structlog.get_logger()
app = FastAPI(title="Weather Pulse", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

tools: WeatherTools | None = None


@app.on_event("startup")
async def startup():
    global tools
    settings = get_settings()
    if not settings.openweather_api_key:
        logger.warning("openweather_api_key_missing", hint="Set OPENWEATHER_API_KEY in .env")
    if not settings.service_auth_token:
        logger.warning("service_auth_disabled", hint="Set SERVICE_AUTH_TOKEN in .env for production")

    dashboard = create_dashboard(settings)
    tools = WeatherTools(dashboard)
    logger.info("weather_pulse_ready", units=dashboard.units.value, device_locator=settings.device_locator or None)


@app.get("/manifest", response_model=ModuleManifest)
async def manifest(_=Depends(require_service_auth)):
    """Return the tool manifest."""
    return MANIFEST


@app.post("/execute", response_model=ToolResult)
async def execute(call: ToolCall, _=Depends(require_service_auth)):
    """Execute a tool call against the shared dashboard."""
    if tools is None:
        return ToolResult.failed(call, "Service not ready")

    definition = MANIFEST.find(call.tool_name)
    if definition is None:
        return ToolResult.failed(call, f"Unknown tool: {call.tool_name}")

    problem = definition.check_arguments(call.arguments)
    if problem:
        logger.info("tool_arguments_rejected", tool=call.tool_name, problem=problem)
        return ToolResult.failed(call, problem)

    try:
        handler = getattr(tools, definition.action)
        snapshot = await handler(**call.arguments)
        return ToolResult.ok(call, snapshot)
    except Exception as e:
        logger.error("tool_execution_error", tool=call.tool_name, error=str(e), exc_info=True)
        return ToolResult.failed(call, str(e))


@app.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)):
    return HealthResponse(status="ok", api_key_configured=bool(settings.openweather_api_key))
