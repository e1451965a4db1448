"""
Shared fixtures for the PayProxy test suite.

The upstream API is replaced by an httpx.MockTransport, so the real
httpx adapter, forwarder and routers all run without network access.
"""

from typing import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from payproxy.core.config import Settings
from payproxy.domain.gateway.entities import EndpointTemplate, UpstreamConfig
from payproxy.main import create_app

DATA_URL = "https://api.example.com/v1/show/data"
PAYMENT_TEMPLATE = "https://api.example.com/payments/{id}"
TOKEN = "test-token"

Responder = Callable[[httpx.Request], httpx.Response]


class FakeUpstream:
    """Records outbound requests and answers them with ``responder``."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.responder: Responder = lambda _request: httpx.Response(200, json={})
        self.transport = httpx.MockTransport(self._dispatch)

    def _dispatch(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    def respond_with(self, status_code: int, **kwargs) -> None:
        self.responder = lambda _request: httpx.Response(status_code, **kwargs)

    def fail_with(self, exc_type: type[httpx.TransportError], message: str) -> None:
        def _raise(request: httpx.Request) -> httpx.Response:
            raise exc_type(message, request=request)

        self.responder = _raise

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def settings() -> Settings:
    """Settings that ignore the process environment and any .env file."""
    return Settings(
        _env_file=None,
        API_URL=DATA_URL,
        API_PAYMENT=PAYMENT_TEMPLATE,
        API_TOKEN=TOKEN,
    )


@pytest.fixture
def upstream_config() -> UpstreamConfig:
    return UpstreamConfig(
        data_endpoint=EndpointTemplate(DATA_URL),
        payment_endpoint=EndpointTemplate(PAYMENT_TEMPLATE),
        token=TOKEN,
    )


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def client(settings: Settings, upstream: FakeUpstream):
    """TestClient with the lifespan running against the fake upstream."""
    app = create_app(settings, upstream_transport=upstream.transport)
    with TestClient(app) as test_client:
        yield test_client
