"""
Data Transfer Objects for the gateway application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class FetchPaymentQuery:
    """Input DTO for reading one payment.

    Attributes:
        payment_id: Opaque identifier substituted into the payment template.
    """

    payment_id: str | None


@dataclass(frozen=True)
class CreatePaymentCommand:
    """Input DTO for creating a payment.

    Attributes:
        payload: Arbitrary JSON value forwarded as-is. ``None`` means missing.
    """

    payload: Any


@dataclass(frozen=True)
class UpdatePaymentCommand:
    """Input DTO for replacing a payment."""

    payment_id: str | None
    payload: Any


@dataclass(frozen=True)
class DeletePaymentCommand:
    """Input DTO for deleting a payment."""

    payment_id: str | None


@dataclass(frozen=True)
class ConnectionProbe:
    """Output DTO for the connectivity check.

    Attributes:
        success: True when the upstream answered with a 2xx status.
        url: The endpoint that was probed.
        status_code: Upstream status, when a response was received.
        status_text: Upstream reason phrase, when a response was received.
        error: Transport failure message, when no response was received.
    """

    success: bool
    url: str
    status_code: int | None = None
    status_text: str | None = None
    error: str | None = None
