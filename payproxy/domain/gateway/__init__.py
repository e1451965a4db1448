"""
Gateway bounded context: domain layer.

- Endpoint templates and ``{id}`` resolution
- Forwarding outcomes (Success / UpstreamError / TransportFailure)
- The upstream transport port
"""
