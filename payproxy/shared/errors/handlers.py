"""
Centralized error handlers for FastAPI.

Maps domain-specific errors to HTTP responses.
No stack traces or internal details are exposed to clients.
Upstream failures are not exceptions: they arrive as forwarding outcomes
and are rendered by the gateway router, not here.
"""

import logging
from typing import Iterable

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute, APIRouter
from starlette.exceptions import HTTPException as StarletteHTTPException

from payproxy.domain.gateway.errors import GatewayDomainError, ValidationError

logger = logging.getLogger(__name__)

HTTP_400 = 400
HTTP_404 = 404
HTTP_405 = 405
HTTP_500 = 500


def _error_response(status_code: int, error: str, detail: str | None = None) -> JSONResponse:
    """Build a consistent JSON error response."""
    body: dict[str, str | None] = {"error": error}
    if detail:
        body["detail"] = detail
    return JSONResponse(status_code=status_code, content=body)


def list_endpoints(routers: Iterable[APIRouter], prefix: str = "") -> list[str]:
    """Return every route of the given routers as ``"METHOD /path"``.

    Route paths already carry their own router's prefix; nested routers
    are walked with the parent prefixes prepended.
    """
    endpoints = []
    for router in routers:
        for route in router.routes:
            if isinstance(route, APIRouter):
                endpoints.extend(list_endpoints([route], prefix + router.prefix))
            elif isinstance(route, APIRoute):
                for method in sorted(route.methods):
                    endpoints.append(f"{method} {prefix}{route.path}")
    return endpoints


def _route_not_found(request: Request) -> JSONResponse:
    path = request.url.path
    if request.url.query:
        path = f"{path}?{request.url.query}"
    return JSONResponse(
        status_code=HTTP_404,
        content={
            "error": "Route not found",
            "path": path,
            "method": request.method,
            "availableEndpoints": request.app.state.available_endpoints,
        },
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register all domain error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation(
        _request: Request, exc: ValidationError
    ) -> JSONResponse:
        """Handle missing request parameters."""
        logger.warning("Validation failed: %s", exc.message)
        return _error_response(HTTP_400, exc.message)

    @app.exception_handler(GatewayDomainError)
    async def handle_gateway_domain(
        _request: Request, exc: GatewayDomainError
    ) -> JSONResponse:
        """Catch-all for unhandled gateway domain errors."""
        logger.error("Unhandled gateway domain error: %s", exc.message)
        return _error_response(HTTP_500, "Internal server error")

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Unmatched paths and methods get the route listing; others keep their status."""
        if exc.status_code in (HTTP_404, HTTP_405):
            logger.info("No route for %s %s", request.method, request.url.path)
            return _route_not_found(request)
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected(
        _request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(HTTP_500, "Internal server error")
