"""
Use case: Forward one logical operation to the upstream API.

Input: FetchPaymentQuery / CreatePaymentCommand / UpdatePaymentCommand /
    DeletePaymentCommand, or nothing for collection reads and probes.
Output: ForwardingOutcome (ConnectionProbe for test_connection).
Side effects: Exactly one outbound call per operation, none on invalid input.
Failure cases: ValidationError before any outbound call.
"""

import json
import logging
from typing import Any

from payproxy.application.gateway.dtos import (
    ConnectionProbe,
    CreatePaymentCommand,
    DeletePaymentCommand,
    FetchPaymentQuery,
    UpdatePaymentCommand,
)
from payproxy.domain.gateway.entities import (
    ForwardingOutcome,
    OutboundRequest,
    Success,
    TransportFailure,
    UpstreamConfig,
    UpstreamError,
    UpstreamResponse,
)
from payproxy.domain.gateway.errors import UpstreamUnreachableError, ValidationError
from payproxy.domain.gateway.ports import UpstreamTransport

logger = logging.getLogger(__name__)

PAYMENT_ID_REQUIRED = "Payment ID is required"
PAYMENT_DATA_REQUIRED = "Payment data is required"
DELETE_ACKNOWLEDGEMENT = "Payment deleted successfully"

HTTP_200 = 200
HTTP_201 = 201


class UpstreamForwarder:
    """Translates logical payment operations into upstream calls.

    Holds only immutable configuration and the transport port, so one
    instance is shared by all concurrent requests.

    Args:
        config: Endpoint templates and bearer token, built at startup.
        transport: Port used to perform the outbound call.
    """

    def __init__(self, config: UpstreamConfig, transport: UpstreamTransport) -> None:
        self._config = config
        self._transport = transport

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def fetch_collection(self) -> ForwardingOutcome:
        """GET the primary endpoint."""
        url = self._config.data_endpoint.template
        logger.info("Fetching collection from %s", url)
        return await self._forward("GET", url)

    async def fetch_by_id(self, query: FetchPaymentQuery) -> ForwardingOutcome:
        """GET one payment."""
        payment_id = _require_id(query.payment_id)
        url = self._config.payment_endpoint.resolve(payment_id)
        logger.info("Fetching payment %s from %s", payment_id, url)
        return await self._forward("GET", url)

    async def create(self, command: CreatePaymentCommand) -> ForwardingOutcome:
        """POST a new payment to the payment collection URL."""
        payload = _require_payload(command.payload)
        url = self._config.payment_endpoint.resolve_collection()
        logger.info("Creating payment at %s", url)
        outcome = await self._forward(
            "POST", url, payload=payload, has_body=True, capture_details=True
        )
        if isinstance(outcome, Success):
            return Success(status_code=HTTP_201, body=outcome.body)
        return outcome

    async def update_by_id(self, command: UpdatePaymentCommand) -> ForwardingOutcome:
        """PUT a replacement payment."""
        payment_id = _require_id(command.payment_id)
        payload = _require_payload(command.payload)
        url = self._config.payment_endpoint.resolve(payment_id)
        logger.info("Updating payment %s at %s", payment_id, url)
        return await self._forward(
            "PUT", url, payload=payload, has_body=True, capture_details=True
        )

    async def delete_by_id(self, command: DeletePaymentCommand) -> ForwardingOutcome:
        """DELETE one payment; success is acknowledged with a synthesized body."""
        payment_id = _require_id(command.payment_id)
        url = self._config.payment_endpoint.resolve(payment_id)
        logger.info("Deleting payment %s at %s", payment_id, url)
        outcome = await self._forward(
            "DELETE", url, capture_details=True, parse_body=False
        )
        if isinstance(outcome, Success):
            return Success(
                status_code=HTTP_200,
                body={"message": DELETE_ACKNOWLEDGEMENT, "id": payment_id},
            )
        return outcome

    async def test_connection(self) -> ConnectionProbe:
        """Probe the primary endpoint and report reachability."""
        url = self._config.data_endpoint.template
        request = OutboundRequest(method="GET", url=url, headers=self._auth_headers())
        try:
            response = await self._transport.send(request)
        except UpstreamUnreachableError as exc:
            logger.warning("Connection test to %s failed: %s", url, exc.reason)
            return ConnectionProbe(success=False, url=url, error=exc.reason)

        return ConnectionProbe(
            success=response.ok,
            url=url,
            status_code=response.status_code,
            status_text=response.status_text,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._config.token}"}

    async def _forward(
        self,
        method: str,
        url: str,
        *,
        payload: Any = None,
        has_body: bool = False,
        capture_details: bool = False,
        parse_body: bool = True,
    ) -> ForwardingOutcome:
        """Perform one outbound call and map the result to an outcome."""
        headers = self._auth_headers()
        if has_body:
            headers["Content-Type"] = "application/json"

        request = OutboundRequest(
            method=method,
            url=url,
            headers=headers,
            payload=payload,
            has_body=has_body,
        )
        try:
            response = await self._transport.send(request)
        except UpstreamUnreachableError as exc:
            logger.error("%s %s failed: %s", method, url, exc.reason)
            return TransportFailure(message=exc.reason)

        if not response.ok:
            logger.error("%s %s responded with status %d", method, url, response.status_code)
            return UpstreamError(
                status_code=response.status_code,
                status_text=response.status_text,
                details=response.text if capture_details else None,
            )

        if not parse_body:
            return Success(status_code=response.status_code)
        return _parse_success(response)


def _require_id(payment_id: str | None) -> str:
    if payment_id is None or not payment_id.strip():
        raise ValidationError(PAYMENT_ID_REQUIRED)
    return payment_id


def _require_payload(payload: Any) -> Any:
    if payload is None:
        raise ValidationError(PAYMENT_DATA_REQUIRED)
    return payload


def _parse_success(response: UpstreamResponse) -> ForwardingOutcome:
    """Parse a 2xx body as JSON. Empty bodies yield ``None``."""
    if not response.text.strip():
        return Success(status_code=response.status_code)
    try:
        body = json.loads(response.text)
    except json.JSONDecodeError as exc:
        logger.error("Upstream returned a non-JSON body: %s", exc)
        return TransportFailure(message=f"Invalid JSON in upstream response: {exc}")
    return Success(status_code=response.status_code, body=body)
