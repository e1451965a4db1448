"""
Domain entities for the gateway bounded context.

Everything here is request-scoped or process-wide immutable configuration.
Nothing is persisted. No framework imports and no IO operations.
"""

from dataclasses import dataclass, field
from typing import Any, Union

ID_PLACEHOLDER = "{id}"
PATH_SEPARATOR = "/"


@dataclass(frozen=True)
class EndpointTemplate:
    """An upstream URL that may contain the ``{id}`` placeholder token.

    Resolution is a pure string transform. The identifier is inserted
    verbatim, so callers must treat it as an opaque path segment.
    """

    template: str

    @property
    def has_placeholder(self) -> bool:
        return ID_PLACEHOLDER in self.template

    def resolve(self, identifier: str) -> str:
        """Replace the first ``{id}`` occurrence with the identifier."""
        return self.template.replace(ID_PLACEHOLDER, identifier, 1)

    def resolve_collection(self) -> str:
        """Return the URL with the placeholder segment stripped.

        ``/payments/{id}`` becomes ``/payments``. A placeholder that is not
        preceded by a path separator is removed on its own. A template
        without a placeholder is returned unchanged.
        """
        if not self.has_placeholder:
            return self.template
        segment = PATH_SEPARATOR + ID_PLACEHOLDER
        if segment in self.template:
            return self.template.replace(segment, "", 1)
        return self.template.replace(ID_PLACEHOLDER, "", 1)


@dataclass(frozen=True)
class UpstreamConfig:
    """Process-wide upstream configuration, built once at startup.

    Attributes:
        data_endpoint: Primary read endpoint (no placeholder expected).
        payment_endpoint: Payment endpoint template containing ``{id}``.
        token: Bearer credential attached to every outbound call.
    """

    data_endpoint: EndpointTemplate
    payment_endpoint: EndpointTemplate
    token: str = field(repr=False)


@dataclass(frozen=True)
class OutboundRequest:
    """One fully resolved call to the upstream API."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict, repr=False)
    payload: Any = None
    has_body: bool = False


@dataclass(frozen=True)
class UpstreamResponse:
    """Raw upstream response as seen by the forwarder."""

    status_code: int
    status_text: str
    text: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


# ── Forwarding outcomes ─────────────────────────────────────────────


@dataclass(frozen=True)
class Success:
    """Upstream answered 2xx. ``body`` is the parsed JSON value, if any."""

    status_code: int
    body: Any = None


@dataclass(frozen=True)
class UpstreamError:
    """Upstream answered with a non-success status.

    ``details`` holds the upstream body text for write operations and is
    ``None`` for plain reads.
    """

    status_code: int
    status_text: str
    details: str | None = None


@dataclass(frozen=True)
class TransportFailure:
    """The upstream could not be reached or its reply could not be read."""

    message: str


ForwardingOutcome = Union[Success, UpstreamError, TransportFailure]
