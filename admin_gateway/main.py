from __future__ import annotations

from contextlib import asynccontextmanager
from http.cookiejar import CookieJar, DefaultCookiePolicy

from dotenv import load_dotenv
load_dotenv()

import httpx
from fastapi import FastAPI

from admin_gateway.api.v1.router import router as api_router
from admin_gateway.core.config import settings
from admin_gateway.core.logging import get_logger, setup_logging

logger = get_logger(__name__)


def create_upstream_client() -> httpx.AsyncClient:
    # Shared across callers, so it must never store an upstream Set-Cookie
    jar = CookieJar(policy=DefaultCookiePolicy(allowed_domains=[]))
    return httpx.AsyncClient(cookies=jar, timeout=settings.UPSTREAM_TIMEOUT_SECONDS)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    setup_logging()
    if not settings.is_configured:
        logger.error("ADMIN_API is not set; every admin request will return 500")
    app.state.http_client = create_upstream_client()

    yield

    # Shutdown
    await app.state.http_client.aclose()


app = FastAPI(title="Admin Gateway", lifespan=lifespan)

app.include_router(api_router, prefix="/api")
