"""
Pydantic schemas for the gateway API responses.

Upstream bodies are relayed untouched and have no schema here.
These models cover only the responses this service authors itself.
No business logic belongs here.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Response schema for the health endpoint.

    Attributes:
        status: Always ``"OK"`` while the process serves requests.
        timestamp: Current UTC time.
        environment: Required variable name -> ``"Set"``/``"Missing"``.
    """

    status: str
    timestamp: datetime
    environment: dict[str, str]


class ErrorResponse(BaseModel):
    """Generic error body."""

    error: str
    message: str | None = None


class UpstreamErrorResponse(BaseModel):
    """Error body for a non-success upstream status."""

    model_config = ConfigDict(populate_by_name=True)

    error: str
    status: int
    status_text: str = Field(alias="statusText")
    details: str | None = None


class DeleteAcknowledgement(BaseModel):
    """Body returned after a successful delete."""

    message: str
    id: str


class ConnectionTestResponse(BaseModel):
    """Response schema for a completed connection test."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    status: int
    status_text: str = Field(alias="statusText")
    url: str
    timestamp: datetime


class ConnectionTestFailure(BaseModel):
    """Response schema for a connection test that never reached the upstream."""

    success: bool = False
    error: str
    url: str
    timestamp: datetime


ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}
