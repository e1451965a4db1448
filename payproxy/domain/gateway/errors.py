"""
Domain-specific errors for the gateway bounded context.

All errors raised from the domain and application layers are defined here.
They are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""


class GatewayDomainError(Exception):
    """Base error for all gateway domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class ConfigurationError(GatewayDomainError):
    """Raised at startup when required configuration is missing, blank or invalid."""

    def __init__(self, missing: list[str]) -> None:
        super().__init__(
            "Missing or invalid configuration: " + ", ".join(missing)
        )
        self.missing = missing


class ValidationError(GatewayDomainError):
    """Raised when a required request parameter (id or payload) is missing."""


class UpstreamUnreachableError(GatewayDomainError):
    """Raised by a transport when the upstream API cannot be reached.

    Covers DNS failures, refused connections, timeouts and malformed URLs.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(f"Upstream unreachable: {reason}")
        self.reason = reason
