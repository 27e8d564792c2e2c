from fastapi import Request
import httpx

from admin_gateway.security.context import RequestDescriptor

BODYLESS_METHODS = ("GET", "HEAD")
DOT_SEGMENTS = (".", "..")


class InvalidPath(ValueError):
    """The admin path holds a dot segment, e.g. from an encoded '%2F..%2F'."""


# -----------------------------
# Dependency: shared upstream client
# -----------------------------
def get_http_client(request: Request) -> httpx.AsyncClient:
    """
    Returns the pooled AsyncClient created in the app lifespan.
    """
    return request.app.state.http_client


# -----------------------------
# Session Extractor
# -----------------------------
async def get_request_descriptor(request: Request, path: str) -> RequestDescriptor:
    """
    Capture the inbound call once. The body is read as raw bytes and never
    re-parsed; the cookie header is kept as an opaque string.

    `path` arrives percent-decoded, so it is split and checked here; the
    segments classified are exactly the ones forwarded.
    """
    segments = tuple(s for s in path.split("/") if s)
    if any(s in DOT_SEGMENTS for s in segments):
        raise InvalidPath(f"Invalid admin path '/{path}'")

    method = request.method.upper()
    body = None if method in BODYLESS_METHODS else await request.body()

    return RequestDescriptor(
        method=method,
        path_segments=segments,
        query=request.url.query,
        body=body,
        cookie_header=request.headers.get("cookie"),
        content_type=request.headers.get("content-type"),
    )
