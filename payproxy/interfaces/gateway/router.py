"""
FastAPI router for the gateway bounded context.

All routes delegate to the UpstreamForwarder. No business logic here.
Missing parameters are raised as ValidationError by the forwarder and
mapped by the centralized error handlers.
"""

from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response

from payproxy.application.gateway.dtos import (
    CreatePaymentCommand,
    DeletePaymentCommand,
    FetchPaymentQuery,
    UpdatePaymentCommand,
)
from payproxy.application.gateway.forwarder import UpstreamForwarder
from payproxy.interfaces.gateway.dependencies import get_forwarder, get_json_payload
from payproxy.interfaces.gateway.responses import render_outcome
from payproxy.interfaces.gateway.schemas import (
    ERROR_RESPONSES,
    ConnectionTestFailure,
    ConnectionTestResponse,
    DeleteAcknowledgement,
)

router = APIRouter(prefix="/api", tags=["gateway"])

HTTP_500 = 500


@router.get(
    "/show/data",
    responses=ERROR_RESPONSES,
    summary="Fetch show data",
    description="Relay the primary upstream endpoint.",
)
async def fetch_show_data(
    forwarder: UpstreamForwarder = Depends(get_forwarder),
) -> Response:
    outcome = await forwarder.fetch_collection()
    return render_outcome(outcome, "Failed to fetch external API")


@router.get(
    "/show/data/payment/{payment_id}",
    responses=ERROR_RESPONSES,
    summary="Fetch a payment",
    description="Relay the upstream payment resource for the given id.",
)
async def fetch_payment(
    payment_id: str,
    forwarder: UpstreamForwarder = Depends(get_forwarder),
) -> Response:
    outcome = await forwarder.fetch_by_id(FetchPaymentQuery(payment_id=payment_id))
    return render_outcome(outcome, "Failed to fetch payment data")


@router.post(
    "/payment",
    status_code=201,
    responses=ERROR_RESPONSES,
    summary="Create a payment",
    description="Forward a JSON payload to the upstream payment collection.",
)
async def create_payment(
    payload: Any = Depends(get_json_payload),
    forwarder: UpstreamForwarder = Depends(get_forwarder),
) -> Response:
    outcome = await forwarder.create(CreatePaymentCommand(payload=payload))
    return render_outcome(outcome, "Failed to create payment")


@router.put(
    "/payment/{payment_id}",
    responses=ERROR_RESPONSES,
    summary="Update a payment",
)
async def update_payment(
    payment_id: str,
    payload: Any = Depends(get_json_payload),
    forwarder: UpstreamForwarder = Depends(get_forwarder),
) -> Response:
    command = UpdatePaymentCommand(payment_id=payment_id, payload=payload)
    outcome = await forwarder.update_by_id(command)
    return render_outcome(outcome, "Failed to update payment")


@router.delete(
    "/payment/{payment_id}",
    responses={200: {"model": DeleteAcknowledgement}, **ERROR_RESPONSES},
    summary="Delete a payment",
)
async def delete_payment(
    payment_id: str,
    forwarder: UpstreamForwarder = Depends(get_forwarder),
) -> Response:
    outcome = await forwarder.delete_by_id(DeletePaymentCommand(payment_id=payment_id))
    return render_outcome(outcome, "Failed to delete payment")


@router.get(
    "/test-connection",
    responses={
        200: {"model": ConnectionTestResponse},
        500: {"model": ConnectionTestFailure},
    },
    summary="Test upstream connectivity",
    description="Probe the primary endpoint and report status without relaying its body.",
)
async def test_connection(
    forwarder: UpstreamForwarder = Depends(get_forwarder),
) -> JSONResponse:
    probe = await forwarder.test_connection()
    timestamp = datetime.now(timezone.utc)

    if probe.error is not None:
        failure = ConnectionTestFailure(error=probe.error, url=probe.url, timestamp=timestamp)
        return JSONResponse(status_code=HTTP_500, content=failure.model_dump(mode="json"))

    result = ConnectionTestResponse(
        success=probe.success,
        status=probe.status_code,
        status_text=probe.status_text,
        url=probe.url,
        timestamp=timestamp,
    )
    return JSONResponse(content=result.model_dump(mode="json", by_alias=True))
