"""
PayProxy: a thin reverse proxy in front of a single upstream payments API.

Application package root. Same layered layout as the rest of our services
(ports & adapters):

Bounded contexts:
    - gateway: URL templating, credential injection, outcome normalization.

Layers:
    - core: Settings and configuration loading.
    - domain: Endpoint templates, forwarding outcomes, ports (ABCs), errors.
    - application: The upstream forwarder use case and its DTOs.
    - infrastructure: httpx adapter implementing the transport port.
    - interfaces: FastAPI routers, Pydantic schemas.
    - shared: Cross-cutting concerns (errors, logging).
"""

__version__ = "0.1.0"
