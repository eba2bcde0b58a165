"""Common Routes — legacy stored-procedure gateway and utility endpoints.

Invariants:
    - POST /Common/CallSP forwards the raw request body text (never re-serialized)
    - Success body is the procedure's JSON string, verbatim, as application/json
    - Client disconnect cancels the in-flight procedure call (499, logged)
    - Failures surface as IntranetError and are rendered by the global handlers

Design Decisions:
    - Body read via Request.body() instead of a pydantic model: the gateway contract
      is "arbitrary JSON object", and parsing here would normalize the payload
"""

import asyncio
import logging
from datetime import datetime
from typing import Awaitable, TypeVar

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from intranet_api.config import get_settings
from intranet_api.services.gateway_service import (
    GatewayService, get_gateway_service,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/Common", tags=["common"])

T = TypeVar("T")

CLIENT_CLOSED_REQUEST = 499

_PROBLEM_SCHEMA = {
    "content": {"application/problem+json": {"schema": {
        "type": "object",
        "properties": {
            "title": {"type": "string"},
            "detail": {"type": "string"},
            "status": {"type": "integer"},
        },
    }}},
}


async def run_until_disconnect(
    request: Request, work: Awaitable[T], poll_seconds: float,
) -> tuple[bool, T | None]:
    """Await `work`, cancelling it if the client disconnects first.

    Returns (completed, result). Exceptions raised by `work` propagate.
    """
    task = asyncio.ensure_future(work)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=poll_seconds)
            if done:
                return True, task.result()
            if await request.is_disconnected():
                task.cancel()
                await asyncio.gather(task, return_exceptions=True)
                return False, None
    except asyncio.CancelledError:
        task.cancel()
        raise


@router.post(
    "/CallSP",
    responses={
        200: {"content": {"application/json": {}}},
        400: {"description": "Malformed payload, missing routing field or unknown target", **_PROBLEM_SCHEMA},
        500: {"description": "Backing-store failure", **_PROBLEM_SCHEMA},
    },
)
async def call_stored_procedure(
    request: Request,
    gateway: GatewayService = Depends(get_gateway_service),
):
    """Generic gateway: {"FromApi": "GetOrders", ...} -> P_GETORDERS(<body>)."""
    body = await request.body()
    completed, result = await run_until_disconnect(
        request,
        gateway.handle(body),
        get_settings().gateway_disconnect_poll_seconds,
    )
    if not completed:
        logger.info(
            "Client disconnected; stored procedure call cancelled",
            extra={"path": request.url.path, "status_code": CLIENT_CLOSED_REQUEST},
        )
        return Response(status_code=CLIENT_CLOSED_REQUEST)
    return Response(content=result, media_type="application/json")


@router.get("/HelloWorld")
async def hello_world():
    """Legacy liveness greeting with a custom header."""
    return JSONResponse(
        content={
            "title": "Hello From Intranet API (Legacy Endpoint)",
            "ServerDate": datetime.now().strftime("%Y/%m/%d"),
        },
        headers={"Custom-Header": "Custom-Value"},
    )


@router.get("/ErrorSimulate")
async def error_simulate():
    """Raise an unhandled error to exercise the catch-all handler."""
    logger.warning("ErrorSimulate called - raising test exception")
    raise ValueError("Intranet Test API - Testing throw Error and Catching It")
