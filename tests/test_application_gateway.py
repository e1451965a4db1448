"""
Tests for the UpstreamForwarder use case.

The transport port is an AsyncMock, so these tests cover validation,
URL construction, header injection and outcome mapping without IO.
"""

from unittest.mock import AsyncMock

import pytest

from payproxy.application.gateway.dtos import (
    CreatePaymentCommand,
    DeletePaymentCommand,
    FetchPaymentQuery,
    UpdatePaymentCommand,
)
from payproxy.application.gateway.forwarder import UpstreamForwarder
from payproxy.domain.gateway.entities import (
    EndpointTemplate,
    OutboundRequest,
    Success,
    TransportFailure,
    UpstreamConfig,
    UpstreamError,
    UpstreamResponse,
)
from payproxy.domain.gateway.errors import UpstreamUnreachableError, ValidationError
from payproxy.domain.gateway.ports import UpstreamTransport


def _transport(response: UpstreamResponse | None = None, error: Exception | None = None):
    transport = AsyncMock(spec=UpstreamTransport)
    if error is not None:
        transport.send.side_effect = error
    else:
        transport.send.return_value = response or UpstreamResponse(200, "OK", "{}")
    return transport


def _sent(transport: AsyncMock) -> OutboundRequest:
    transport.send.assert_awaited_once()
    return transport.send.await_args.args[0]


@pytest.fixture
def config(upstream_config: UpstreamConfig) -> UpstreamConfig:
    return upstream_config


class TestValidation:
    """Missing parameters never reach the transport."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payment_id", [None, "", "   "])
    async def test_fetch_without_id(self, config, payment_id) -> None:
        """Fetching with a missing or blank id raises before any call."""
        transport = _transport()
        forwarder = UpstreamForwarder(config, transport)
        with pytest.raises(ValidationError, match="Payment ID is required"):
            await forwarder.fetch_by_id(FetchPaymentQuery(payment_id=payment_id))
        transport.send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_without_payload(self, config) -> None:
        """Creating without a payload raises before any call."""
        transport = _transport()
        forwarder = UpstreamForwarder(config, transport)
        with pytest.raises(ValidationError, match="Payment data is required"):
            await forwarder.create(CreatePaymentCommand(payload=None))
        transport.send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_without_id(self, config) -> None:
        """Updating with an empty id raises before any call."""
        transport = _transport()
        forwarder = UpstreamForwarder(config, transport)
        with pytest.raises(ValidationError, match="Payment ID is required"):
            await forwarder.update_by_id(UpdatePaymentCommand(payment_id="", payload={"a": 1}))
        transport.send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_without_payload(self, config) -> None:
        """Updating without a payload raises before any call."""
        transport = _transport()
        forwarder = UpstreamForwarder(config, transport)
        with pytest.raises(ValidationError, match="Payment data is required"):
            await forwarder.update_by_id(UpdatePaymentCommand(payment_id="7", payload=None))
        transport.send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_without_id(self, config) -> None:
        """Deleting without an id raises before any call."""
        transport = _transport()
        forwarder = UpstreamForwarder(config, transport)
        with pytest.raises(ValidationError):
            await forwarder.delete_by_id(DeletePaymentCommand(payment_id=None))
        transport.send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_object_is_a_payload(self, config) -> None:
        """An empty JSON object is present and gets forwarded."""
        transport = _transport()
        forwarder = UpstreamForwarder(config, transport)
        outcome = await forwarder.create(CreatePaymentCommand(payload={}))
        assert isinstance(outcome, Success)
        assert _sent(transport).payload == {}


class TestOutboundRequests:
    """URL, method, headers and body of each operation."""

    @pytest.mark.asyncio
    async def test_fetch_collection(self, config) -> None:
        """Collection reads GET the primary endpoint with only the bearer header."""
        transport = _transport()
        await UpstreamForwarder(config, transport).fetch_collection()
        request = _sent(transport)
        assert request.method == "GET"
        assert request.url == "https://api.example.com/v1/show/data"
        assert request.headers == {"Authorization": "Bearer test-token"}
        assert request.has_body is False

    @pytest.mark.asyncio
    async def test_fetch_by_id(self, config) -> None:
        """Single reads GET the resolved payment URL."""
        transport = _transport()
        await UpstreamForwarder(config, transport).fetch_by_id(FetchPaymentQuery("42"))
        request = _sent(transport)
        assert request.method == "GET"
        assert request.url == "https://api.example.com/payments/42"

    @pytest.mark.asyncio
    async def test_create_strips_placeholder(self, config) -> None:
        """Create POSTs the JSON payload to the template minus ``/{id}``."""
        transport = _transport()
        payload = {"amount": 10, "currency": "USD"}
        await UpstreamForwarder(config, transport).create(CreatePaymentCommand(payload))
        request = _sent(transport)
        assert request.method == "POST"
        assert request.url == "https://api.example.com/payments"
        assert request.headers["Content-Type"] == "application/json"
        assert request.headers["Authorization"] == "Bearer test-token"
        assert request.payload == payload
        assert request.has_body is True

    @pytest.mark.asyncio
    async def test_create_without_placeholder_uses_template(self) -> None:
        """Create uses a placeholder-free template verbatim."""
        config = UpstreamConfig(
            data_endpoint=EndpointTemplate("https://h/data"),
            payment_endpoint=EndpointTemplate("https://h/v1/payments"),
            token="t",
        )
        transport = _transport()
        await UpstreamForwarder(config, transport).create(CreatePaymentCommand([1, 2]))
        assert _sent(transport).url == "https://h/v1/payments"

    @pytest.mark.asyncio
    async def test_update_by_id(self, config) -> None:
        """Update PUTs the payload to the resolved payment URL."""
        transport = _transport()
        command = UpdatePaymentCommand(payment_id="abc", payload={"amount": 5})
        await UpstreamForwarder(config, transport).update_by_id(command)
        request = _sent(transport)
        assert request.method == "PUT"
        assert request.url == "https://api.example.com/payments/abc"
        assert request.payload == {"amount": 5}

    @pytest.mark.asyncio
    async def test_delete_sends_no_body(self, config) -> None:
        """Delete sends neither a body nor a content type."""
        transport = _transport()
        await UpstreamForwarder(config, transport).delete_by_id(DeletePaymentCommand("9"))
        request = _sent(transport)
        assert request.method == "DELETE"
        assert request.url == "https://api.example.com/payments/9"
        assert request.has_body is False
        assert "Content-Type" not in request.headers


class TestOutcomeMapping:
    """Transport results become exactly one forwarding outcome."""

    @pytest.mark.asyncio
    async def test_success_parses_json(self, config) -> None:
        """A 2xx JSON body is parsed into the Success outcome."""
        transport = _transport(UpstreamResponse(200, "OK", '{"amount": 10}'))
        outcome = await UpstreamForwarder(config, transport).fetch_by_id(FetchPaymentQuery("42"))
        assert outcome == Success(status_code=200, body={"amount": 10})

    @pytest.mark.asyncio
    async def test_success_keeps_upstream_status(self, config) -> None:
        """Reads reuse the upstream success status."""
        transport = _transport(UpstreamResponse(202, "Accepted", "[]"))
        outcome = await UpstreamForwarder(config, transport).fetch_collection()
        assert outcome == Success(status_code=202, body=[])

    @pytest.mark.asyncio
    async def test_empty_success_body(self, config) -> None:
        """An empty 2xx body yields a Success without a body."""
        transport = _transport(UpstreamResponse(204, "No Content", ""))
        outcome = await UpstreamForwarder(config, transport).fetch_collection()
        assert outcome == Success(status_code=204, body=None)

    @pytest.mark.asyncio
    async def test_non_json_success_is_failure(self, config) -> None:
        """A 2xx body that is not JSON becomes a TransportFailure."""
        transport = _transport(UpstreamResponse(200, "OK", "<html>"))
        outcome = await UpstreamForwarder(config, transport).fetch_collection()
        assert isinstance(outcome, TransportFailure)
        assert "Invalid JSON" in outcome.message

    @pytest.mark.asyncio
    async def test_create_reports_201(self, config) -> None:
        """A successful create is always reported as 201."""
        transport = _transport(UpstreamResponse(200, "OK", '{"id": "new"}'))
        outcome = await UpstreamForwarder(config, transport).create(CreatePaymentCommand({"a": 1}))
        assert outcome == Success(status_code=201, body={"id": "new"})

    @pytest.mark.asyncio
    async def test_delete_acknowledgement_ignores_upstream_body(self, config) -> None:
        """A successful delete returns the synthesized acknowledgement."""
        transport = _transport(UpstreamResponse(204, "No Content", "not json at all"))
        outcome = await UpstreamForwarder(config, transport).delete_by_id(DeletePaymentCommand("9"))
        assert outcome == Success(
            status_code=200,
            body={"message": "Payment deleted successfully", "id": "9"},
        )

    @pytest.mark.asyncio
    async def test_read_error_omits_details(self, config) -> None:
        """Failed reads report status and reason only."""
        transport = _transport(UpstreamResponse(404, "Not Found", '{"error": "nope"}'))
        outcome = await UpstreamForwarder(config, transport).fetch_by_id(FetchPaymentQuery("1"))
        assert outcome == UpstreamError(status_code=404, status_text="Not Found", details=None)

    @pytest.mark.asyncio
    async def test_write_error_captures_details(self, config) -> None:
        """Failed updates carry the upstream body as details."""
        transport = _transport(UpstreamResponse(422, "Unprocessable Entity", "amount invalid"))
        command = UpdatePaymentCommand(payment_id="1", payload={"amount": -1})
        outcome = await UpstreamForwarder(config, transport).update_by_id(command)
        assert outcome == UpstreamError(
            status_code=422, status_text="Unprocessable Entity", details="amount invalid"
        )

    @pytest.mark.asyncio
    async def test_delete_error_captures_details(self, config) -> None:
        """Failed deletes carry the upstream body as details."""
        transport = _transport(UpstreamResponse(409, "Conflict", "settled"))
        outcome = await UpstreamForwarder(config, transport).delete_by_id(DeletePaymentCommand("1"))
        assert outcome == UpstreamError(status_code=409, status_text="Conflict", details="settled")

    @pytest.mark.asyncio
    async def test_transport_failure(self, config) -> None:
        """An unreachable upstream becomes a TransportFailure with its reason."""
        transport = _transport(error=UpstreamUnreachableError("Connection refused"))
        outcome = await UpstreamForwarder(config, transport).create(CreatePaymentCommand({"a": 1}))
        assert outcome == TransportFailure(message="Connection refused")


class TestConnectionCheck:
    """Tests for test_connection."""

    @pytest.mark.asyncio
    async def test_reachable(self, config) -> None:
        """A 2xx answer reports success with only the bearer header sent."""
        transport = _transport(UpstreamResponse(200, "OK", "{}"))
        result = await UpstreamForwarder(config, transport).test_connection()
        assert result.success is True
        assert result.status_code == 200
        assert result.url == "https://api.example.com/v1/show/data"
        assert _sent(transport).headers == {"Authorization": "Bearer test-token"}

    @pytest.mark.asyncio
    async def test_reachable_but_refused(self, config) -> None:
        """A non-2xx answer reports failure with the upstream status."""
        transport = _transport(UpstreamResponse(401, "Unauthorized", ""))
        result = await UpstreamForwarder(config, transport).test_connection()
        assert result.success is False
        assert result.status_code == 401
        assert result.status_text == "Unauthorized"
        assert result.error is None

    @pytest.mark.asyncio
    async def test_unreachable(self, config) -> None:
        """An unreachable upstream reports the transport error."""
        transport = _transport(error=UpstreamUnreachableError("Name or service not known"))
        result = await UpstreamForwarder(config, transport).test_connection()
        assert result.success is False
        assert result.error == "Name or service not known"
        assert result.status_code is None
