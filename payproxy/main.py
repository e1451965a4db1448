"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (health, gateway)
- Error handlers (centralized domain-to-HTTP mapping)
- CORS and request logging middleware
- Logging configuration
- The shared httpx client and the upstream forwarder (lifespan)

No business logic belongs here.

Run with ``payproxy`` (console script), ``python -m payproxy`` or
``uvicorn payproxy.main:create_app --factory``.
"""

import logging
import sys
from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from payproxy.application.gateway.forwarder import UpstreamForwarder
from payproxy.core.config import LEGACY_PAYMENT_VARIABLE, Settings, load_settings
from payproxy.domain.gateway.errors import ConfigurationError
from payproxy.infrastructure.gateway.httpx_transport import (
    HttpxUpstreamTransport,
    build_client,
)
from payproxy.interfaces.gateway.router import router as gateway_router
from payproxy.interfaces.health import router as health_router
from payproxy.shared.errors.handlers import list_endpoints, register_error_handlers
from payproxy.shared.logging import RequestLoggingMiddleware, configure_logging

logger = logging.getLogger(__name__)

ROUTERS = (health_router, gateway_router)


def create_app(
    settings: Settings | None = None,
    upstream_transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    This is the composition root of the application.

    Args:
        settings: Preloaded settings. Loaded from the environment when omitted.
        upstream_transport: Low-level httpx transport for outbound calls.
            Only tests pass one; production uses the default network stack.

    Returns:
        A fully configured FastAPI application instance.

    Raises:
        ConfigurationError: If required configuration is missing.
    """
    if settings is None:
        settings = load_settings()
    configure_logging(level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Own the outbound client for the lifetime of the process."""
        client = build_client(settings.upstream_timeout_seconds, upstream_transport)
        app.state.forwarder = UpstreamForwarder(
            config=settings.upstream_config(),
            transport=HttpxUpstreamTransport(client),
        )
        logger.info(
            "Forwarding to %s (timeout %.1fs)",
            settings.api_url,
            settings.upstream_timeout_seconds,
        )
        try:
            yield
        finally:
            await client.aclose()

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # --- Middleware ---
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    for router in ROUTERS:
        app.include_router(router)
    app.state.available_endpoints = list_endpoints(ROUTERS)

    return app


def run() -> None:
    """Load configuration, refuse to start if it is incomplete, then serve."""
    configure_logging()
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        logger.critical("%s", exc.message)
        if "API_PAYMENT" in exc.missing:
            logger.critical(
                "Check whether the .env file uses the legacy name %s",
                LEGACY_PAYMENT_VARIABLE,
            )
        sys.exit(1)

    for name, state in settings.environment_report().items():
        logger.info("%s: %s", name, state)

    app = create_app(settings)
    logger.info("Server starting on port %d", settings.port)
    # log_config=None keeps uvicorn on the handlers and levels set above
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
