"""Bearer-token guard for ``/manifest`` and ``/execute``.

With ``SERVICE_AUTH_TOKEN`` set, callers must send
``Authorization: Bearer <token>``.  With it unset the endpoints are open;
startup logs a warning once.

Settings arrive through ``Depends(get_settings)``, so tests swap them with
``app.dependency_overrides[get_settings]``.
"""

from __future__ import annotations

import hmac

import structlog
from fastapi import Depends, Header, HTTPException, Request

from weather_pulse.config import Settings, get_settings

logger = structlog.get_logger()

_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def bearer_token(authorization: str) -> str | None:
    """Token from an ``Authorization`` header value, or None if not a bearer credential."""
    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        return None
    return token


async def require_service_auth(
    request: Request,
    authorization: str = Header(default=""),
    settings: Settings = Depends(get_settings),
) -> None:
    expected = settings.service_auth_token
    if not expected:
        return

    token = bearer_token(authorization)
    if token is None:
        raise HTTPException(status_code=401, detail="Missing service auth token", headers=_CHALLENGE)

    if not hmac.compare_digest(token.encode(), expected.encode()):
        logger.warning(
            "service_auth_rejected",
            path=request.url.path,
            remote=request.client.host if request.client else "unknown",
        )
        raise HTTPException(status_code=401, detail="Invalid service auth token", headers=_CHALLENGE)
