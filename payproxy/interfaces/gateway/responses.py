"""
Rendering of forwarding outcomes as HTTP responses.

Each outcome kind maps to exactly one response shape.
"""

from fastapi.responses import JSONResponse, Response

from payproxy.domain.gateway.entities import (
    ForwardingOutcome,
    Success,
    TransportFailure,
    UpstreamError,
)
from payproxy.interfaces.gateway.schemas import ErrorResponse, UpstreamErrorResponse

HTTP_204 = 204
HTTP_304 = 304
HTTP_500 = 500


def render_outcome(outcome: ForwardingOutcome, error_label: str) -> Response:
    """Translate a forwarding outcome into the inbound response.

    Args:
        outcome: Result of one forwarded call.
        error_label: Value of the ``error`` field when the upstream refused.
    """
    if isinstance(outcome, Success):
        if outcome.body is None and outcome.status_code in (HTTP_204, HTTP_304):
            return Response(status_code=outcome.status_code)
        return JSONResponse(status_code=outcome.status_code, content=outcome.body)

    if isinstance(outcome, UpstreamError):
        body = UpstreamErrorResponse(
            error=error_label,
            status=outcome.status_code,
            status_text=outcome.status_text,
            details=outcome.details,
        )
        return JSONResponse(
            status_code=outcome.status_code,
            content=body.model_dump(by_alias=True, exclude_none=True),
        )

    if isinstance(outcome, TransportFailure):
        body = ErrorResponse(error="Internal server error", message=outcome.message)
        return JSONResponse(status_code=HTTP_500, content=body.model_dump())

    raise TypeError(f"Unknown forwarding outcome: {outcome!r}")
