"""
Port interfaces (ABCs) for the gateway bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod

from payproxy.domain.gateway.entities import OutboundRequest, UpstreamResponse


class UpstreamTransport(ABC):
    """Port for performing a single call against the upstream API."""

    @abstractmethod
    async def send(self, request: OutboundRequest) -> UpstreamResponse:
        """Send the request and return the upstream response.

        Non-success statuses are returned, not raised.

        Raises:
            UpstreamUnreachableError: If no response could be obtained.
        """
        raise NotImplementedError
