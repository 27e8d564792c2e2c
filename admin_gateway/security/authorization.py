from __future__ import annotations

from admin_gateway.security.classifier import Classification
from admin_gateway.security.context import AuthorizationContext

OWNERSHIP_DETAIL = "You can only access your own usage data"


class OwnershipViolation(Exception):
    """Session tenant and path tenant are both known and differ."""

    def __init__(self, path_tenant_id: str, session_tenant_id: str):
        super().__init__(OWNERSHIP_DETAIL)
        self.path_tenant_id = path_tenant_id
        self.session_tenant_id = session_tenant_id


def check_ownership(classification: Classification, ctx: AuthorizationContext) -> None:
    """
    A session may only read its own tenant's usage through
    billing/tenants/{tenant_id}/usage.

    Blocks only when both ids are known. An unresolved session passes through
    without a tenant header and the upstream rejects it, so the gateway never
    reveals whether a tenant id exists.
    """
    path_tenant_id = classification.ownership_tenant_id
    if path_tenant_id is None or ctx.tenant_id is None:
        return
    if ctx.tenant_id != path_tenant_id:
        raise OwnershipViolation(path_tenant_id, ctx.tenant_id)
