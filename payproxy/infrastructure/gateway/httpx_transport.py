"""
Adapter: Upstream API over HTTP.

Implements UpstreamTransport on top of a shared httpx.AsyncClient.
The client (connection pool, timeout, redirect policy) is owned by the
application lifespan; this adapter only borrows it.
"""

import logging

import httpx

from payproxy.domain.gateway.entities import OutboundRequest, UpstreamResponse
from payproxy.domain.gateway.errors import UpstreamUnreachableError
from payproxy.domain.gateway.ports import UpstreamTransport

logger = logging.getLogger(__name__)


def build_client(
    timeout_seconds: float,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create the process-wide client used for every outbound call.

    Args:
        timeout_seconds: Applied to connect, read, write and pool waits.
        transport: Optional low-level transport (tests pass a MockTransport).
    """
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout_seconds),
        follow_redirects=True,
        transport=transport,
    )


class HttpxUpstreamTransport(UpstreamTransport):
    """Concrete adapter performing upstream calls with httpx."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def send(self, request: OutboundRequest) -> UpstreamResponse:
        """Send the request; transport-level failures become domain errors."""
        kwargs = {"headers": request.headers}
        if request.has_body:
            kwargs["json"] = request.payload

        try:
            response = await self._client.request(request.method, request.url, **kwargs)
        except (httpx.TransportError, httpx.InvalidURL) as exc:
            reason = str(exc) or type(exc).__name__
            logger.warning(
                "Upstream %s %s unreachable: %s", request.method, request.url, reason
            )
            raise UpstreamUnreachableError(reason) from exc

        logger.debug(
            "Upstream %s %s -> %d", request.method, request.url, response.status_code
        )
        return UpstreamResponse(
            status_code=response.status_code,
            status_text=response.reason_phrase,
            text=response.text,
        )
