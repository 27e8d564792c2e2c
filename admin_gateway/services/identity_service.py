from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from admin_gateway.core.config import Settings
from admin_gateway.core.logging import get_logger
from admin_gateway.security.classifier import TrustTier
from admin_gateway.security.context import ANONYMOUS, AuthorizationContext, RequestDescriptor
from admin_gateway.security.policy import PolicyStore

logger = get_logger(__name__)

IDENTITY_PATH = "/auth/me"


async def fetch_identity(
    client: httpx.AsyncClient,
    base_url: str,
    cookie_header: str,
    *,
    timeout: float,
) -> Optional[Dict[str, Any]]:
    """
    Ask the Admin API who owns this session.

    Returns the decoded payload, or None on any failure. Failures are
    logged, never raised: a missing identity only means no extra credential.
    Cancellation is not caught.
    """
    try:
        resp = await client.get(
            f"{base_url}{IDENTITY_PATH}",
            headers={"Cookie": cookie_header, "Accept": "application/json"},
            timeout=timeout,
        )
    except httpx.TimeoutException:
        logger.warning("Identity lookup timed out after %ss", timeout)
        return None
    except httpx.HTTPError as e:
        logger.warning("Identity lookup failed: %s", e)
        return None

    if resp.status_code != 200:
        logger.warning("Identity lookup returned %s", resp.status_code)
        return None

    try:
        payload = resp.json()
    except ValueError:
        logger.warning("Identity lookup returned a non-JSON body")
        return None

    if not isinstance(payload, dict):
        logger.warning("Identity lookup returned %s, expected an object", type(payload).__name__)
        return None
    return payload


def _tenant_id(payload: Dict[str, Any]) -> Optional[str]:
    tenant_id = payload.get("tenant_id")
    if not tenant_id and isinstance(payload.get("tenant"), dict):
        tenant_id = payload["tenant"].get("id")
    return str(tenant_id) if tenant_id else None


def _email(payload: Dict[str, Any]) -> Optional[str]:
    email = payload.get("email")
    if not email and isinstance(payload.get("user"), dict):
        email = payload["user"].get("email")
    return email if isinstance(email, str) and email else None


async def resolve_identity(
    client: httpx.AsyncClient,
    settings: Settings,
    policy: PolicyStore,
    descriptor: RequestDescriptor,
    tier: TrustTier,
) -> AuthorizationContext:
    """
    Build the AuthorizationContext for one request.

    - PUBLIC: no upstream call, zero context
    - TENANT_SCOPED: tenant_id from /auth/me, absent on failure
    - SUPERADMIN_ONLY: email from /auth/me checked against the policy store;
      any failure leaves is_superadmin False
    """
    if tier == TrustTier.PUBLIC:
        return ANONYMOUS

    if not descriptor.cookie_header:
        logger.debug("No session cookie on %s /%s", descriptor.method, descriptor.path)
        return ANONYMOUS

    payload = await fetch_identity(
        client,
        settings.ADMIN_API,
        descriptor.cookie_header,
        timeout=settings.IDENTITY_TIMEOUT_SECONDS,
    )
    if payload is None:
        return ANONYMOUS

    tenant_id = _tenant_id(payload)
    email = _email(payload)

    is_superadmin = False
    if tier == TrustTier.SUPERADMIN_ONLY:
        is_superadmin = policy.is_superadmin(email)
        if not is_superadmin:
            logger.warning(
                "Superadmin check failed for %s /%s", descriptor.method, descriptor.path
            )

    return AuthorizationContext(
        tenant_id=tenant_id,
        email=email,
        is_superadmin=is_superadmin,
        resolved=True,
    )
