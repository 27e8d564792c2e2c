from __future__ import annotations

import asyncio
from contextlib import suppress
from typing import Awaitable

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from admin_gateway.api.deps import InvalidPath, get_http_client, get_request_descriptor
from admin_gateway.core.config import Settings, get_settings
from admin_gateway.core.logging import get_logger
from admin_gateway.models.common import error_response
from admin_gateway.security.authorization import OwnershipViolation, check_ownership
from admin_gateway.security.classifier import classify
from admin_gateway.security.context import RequestDescriptor
from admin_gateway.security.credentials import build_outbound_headers
from admin_gateway.security.policy import PolicyConfigError, PolicyStore, get_policy_store
from admin_gateway.services.forwarder import forward
from admin_gateway.services.identity_service import resolve_identity

logger = get_logger(__name__)

router = APIRouter(prefix="/admin")

PROXY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]

# Nginx convention for "client closed request"; nobody reads it
CLIENT_CLOSED_REQUEST = 499


async def _wait_for_disconnect(request: Request) -> None:
    while True:
        message = await request.receive()
        if message["type"] == "http.disconnect":
            return


async def _run_until_disconnect(request: Request, work: Awaitable[Response]) -> Response:
    """
    Run the pipeline while watching the caller. If the caller goes away first,
    the pipeline task is cancelled, which aborts whichever upstream call is in
    flight.
    """
    task = asyncio.ensure_future(work)
    watcher = asyncio.ensure_future(_wait_for_disconnect(request))
    try:
        await asyncio.wait({task, watcher}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        watcher.cancel()
        if not task.done():
            task.cancel()

    if task.done() and not task.cancelled():
        return task.result()

    with suppress(asyncio.CancelledError):
        await task
    logger.info("Caller disconnected; upstream calls cancelled")
    return Response(status_code=CLIENT_CLOSED_REQUEST)


async def handle_admin_request(
    descriptor: RequestDescriptor,
    settings: Settings,
    client: httpx.AsyncClient,
    policy: PolicyStore,
) -> Response:
    classification = classify(descriptor.method, descriptor.path_segments)
    ctx = await resolve_identity(client, settings, policy, descriptor, classification.tier)

    try:
        check_ownership(classification, ctx)
    except OwnershipViolation as e:
        logger.warning(
            "Blocked %s /%s: session tenant does not own path tenant",
            descriptor.method, descriptor.path,
        )
        return error_response(403, str(e), error="Forbidden")

    headers = build_outbound_headers(classification.tier, ctx, descriptor, settings)
    logger.debug(
        "%s /%s tier=%s resolved=%s tenant_header=%s bearer=%s",
        descriptor.method,
        descriptor.path,
        classification.tier.value,
        ctx.resolved,
        "X-Tenant-Id" in headers,
        "Authorization" in headers,
    )
    return await forward(client, settings, descriptor, headers)


@router.api_route("/{path:path}", methods=PROXY_METHODS)
async def admin_proxy(
    path: str,
    request: Request,
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """
    Proxy /api/admin/{path} to {ADMIN_API}/admin/{path} with the credential
    the caller has earned.
    """
    if not settings.is_configured:
        logger.error("ADMIN_API is not configured; rejecting %s /%s", request.method, path)
        return error_response(500, "ADMIN_API is not configured")

    try:
        policy = get_policy_store(settings)
    except PolicyConfigError as e:
        logger.error("%s; rejecting %s /%s", e, request.method, path)
        return error_response(500, str(e))

    try:
        descriptor = await get_request_descriptor(request, path)
    except InvalidPath as e:
        logger.warning("Rejected %s: %s", request.method, e)
        return error_response(400, str(e))

    return await _run_until_disconnect(
        request, handle_admin_request(descriptor, settings, client, policy)
    )
