"""
Dependency injection for the gateway bounded context.

The forwarder and settings are built once in the application lifespan
and stored on ``app.state``; these functions hand them to routes.
"""

import json
from typing import Any

from fastapi import Request

from payproxy.application.gateway.forwarder import UpstreamForwarder
from payproxy.core.config import Settings
from payproxy.domain.gateway.errors import ValidationError

INVALID_JSON = "Payment data must be valid JSON"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def get_forwarder(request: Request) -> UpstreamForwarder:
    """Return the process-wide UpstreamForwarder."""
    return request.app.state.forwarder


def get_app_settings(request: Request) -> Settings:
    """Return the settings the application was created with."""
    return request.app.state.settings


async def get_json_payload(request: Request) -> Any:
    """Read the request body as JSON.

    Returns:
        The decoded value, or ``None`` when the body is empty.

    Raises:
        ValidationError: If the body is present but not valid JSON
            (including NaN and Infinity, which JSON does not define).
    """
    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except ValueError as exc:
        raise ValidationError(INVALID_JSON) from exc
