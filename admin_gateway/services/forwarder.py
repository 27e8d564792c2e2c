from __future__ import annotations

import copy
import json
from typing import Any, AsyncIterator, Dict
from urllib.parse import quote

import httpx
from fastapi.responses import JSONResponse, Response, StreamingResponse

from admin_gateway.core.config import Settings
from admin_gateway.core.logging import get_logger
from admin_gateway.models.common import NO_STORE, error_response
from admin_gateway.security.context import RequestDescriptor

logger = get_logger(__name__)

UPSTREAM_PREFIX = "/admin"
STREAM_CONTENT_TYPE = "text/event-stream"
# RFC 3986 pchar minus "/": a decoded "/" inside a segment stays %2F
SEGMENT_SAFE = "!$&'()*+,;=:@~"

# Empty-but-well-typed shapes per top-level resource
CURSOR_PAGE: Dict[str, Any] = {"items": [], "next_cursor": None}
EMPTY_SHAPES: Dict[str, Dict[str, Any]] = {
    "inbox": CURSOR_PAGE,
    "faqs": {"items": [], "total": 0, "limit": 50, "offset": 0},
}


def upstream_url(base_url: str, descriptor: RequestDescriptor) -> str:
    path = "/".join(quote(s, safe=SEGMENT_SAFE) for s in descriptor.path_segments)
    url = f"{base_url}{UPSTREAM_PREFIX}/{path}"
    if descriptor.query:
        url = f"{url}?{descriptor.query}"
    return url


def empty_result(descriptor: RequestDescriptor) -> Dict[str, Any]:
    resource = descriptor.path_segments[0] if descriptor.path_segments else ""
    if resource in EMPTY_SHAPES:
        return copy.deepcopy(EMPTY_SHAPES[resource])
    if descriptor.method == "GET":
        return copy.deepcopy(CURSOR_PAGE)
    return {}


async def _relay(upstream: httpx.Response) -> AsyncIterator[bytes]:
    # Decoded per Content-Encoding; the relayed response carries no such header
    # Closed on completion or when the caller goes away mid-stream
    try:
        async for chunk in upstream.aiter_bytes():
            yield chunk
    finally:
        await upstream.aclose()


def _is_json(content_type: str) -> bool:
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


async def forward(
    client: httpx.AsyncClient,
    settings: Settings,
    descriptor: RequestDescriptor,
    headers: Dict[str, str],
) -> Response:
    """
    Send the request to the Admin API and relay the outcome.

    The body goes out exactly as received. Upstream failures come back in
    the ErrorEnvelope shape; malformed or empty success bodies degrade to an
    empty result instead of reaching the browser.
    """
    method = descriptor.method
    request = client.build_request(
        method,
        upstream_url(settings.ADMIN_API, descriptor),
        headers=headers,
        content=descriptor.body,
        timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
    )

    try:
        upstream = await client.send(request, stream=True, follow_redirects=False)
    except httpx.TimeoutException:
        logger.error("Admin API %s /%s timed out", method, descriptor.path)
        return error_response(502, f"Admin API {method} timed out")
    except httpx.HTTPError as e:
        logger.error("Admin API %s /%s unreachable: %s", method, descriptor.path, e)
        return error_response(502, str(e) or e.__class__.__name__)

    content_type = upstream.headers.get("content-type", "")

    # Server-sent events are relayed as they arrive
    if upstream.status_code < 300 and content_type.startswith(STREAM_CONTENT_TYPE):
        return StreamingResponse(
            _relay(upstream),
            status_code=upstream.status_code,
            media_type=content_type,
            headers=NO_STORE,
        )

    try:
        raw = await upstream.aread()
    except httpx.TimeoutException:
        logger.error("Admin API %s /%s timed out reading body", method, descriptor.path)
        return error_response(502, f"Admin API {method} timed out")
    except httpx.HTTPError as e:
        logger.error("Admin API %s /%s body read failed: %s", method, descriptor.path, e)
        return error_response(502, str(e) or e.__class__.__name__)
    finally:
        await upstream.aclose()

    if upstream.status_code >= 300:
        logger.error(
            "Admin API %s /%s failed: %s (%d bytes)",
            method, descriptor.path, upstream.status_code, len(raw),
        )
        return error_response(
            upstream.status_code,
            f"Admin API {method} failed: {upstream.status_code} {upstream.reason_phrase}",
            response=raw.decode("utf-8", errors="replace"),
        )

    if not _is_json(content_type) or not raw.strip():
        logger.error(
            "Admin API %s /%s returned %s with %r and %d bytes; sending empty result",
            method, descriptor.path, upstream.status_code, content_type, len(raw),
        )
        return JSONResponse(empty_result(descriptor), headers=NO_STORE)

    try:
        json.loads(raw)
    except ValueError:
        logger.error("Admin API %s /%s returned malformed JSON; sending empty result", method, descriptor.path)
        return JSONResponse(empty_result(descriptor), headers=NO_STORE)

    # Valid JSON goes back byte-for-byte
    return Response(
        content=raw,
        status_code=upstream.status_code,
        media_type="application/json",
        headers=NO_STORE,
    )
