from __future__ import annotations

from typing import Dict

from admin_gateway.core.config import Settings
from admin_gateway.security.classifier import TrustTier
from admin_gateway.security.context import AuthorizationContext, RequestDescriptor

TENANT_HEADER = "X-Tenant-Id"
AUTHORIZATION_HEADER = "Authorization"


def build_outbound_headers(
    tier: TrustTier,
    ctx: AuthorizationContext,
    descriptor: RequestDescriptor,
    settings: Settings,
) -> Dict[str, str]:
    """
    Header set for the forwarded call. Built from scratch so nothing the
    browser sent (its own X-Tenant-Id or Authorization) reaches the upstream.
    At most one of X-Tenant-Id / Authorization is ever set.
    """
    headers: Dict[str, str] = {
        "Accept": "application/json",
        "Content-Type": descriptor.content_type or "application/json",
    }

    # Upstream may still run session checks, even on superadmin paths
    if descriptor.cookie_header:
        headers["Cookie"] = descriptor.cookie_header

    if tier == TrustTier.TENANT_SCOPED:
        if ctx.tenant_id:
            headers[TENANT_HEADER] = ctx.tenant_id
    elif tier == TrustTier.SUPERADMIN_ONLY:
        # No partial credential: either the bearer token or nothing
        if ctx.is_superadmin and settings.ADMIN_API_TOKEN:
            headers[AUTHORIZATION_HEADER] = f"Bearer {settings.ADMIN_API_TOKEN}"

    return headers
