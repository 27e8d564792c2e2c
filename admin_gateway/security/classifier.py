from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import FrozenSet, Optional, Sequence, Tuple

TENANT_PARAM = "{tenant_id}"
ANY = "*"
REST = "**"


class TrustTier(str, enum.Enum):
    PUBLIC = "public"
    TENANT_SCOPED = "tenant_scoped"
    SUPERADMIN_ONLY = "superadmin_only"


@dataclass(frozen=True)
class RouteRule:
    """
    One row of the route table.

    pattern segments: a literal, "*" (any one segment), "{tenant_id}" (any one
    segment, compared against the session tenant) or a trailing "**" (zero or
    more segments). `methods` restricts the rule; empty means any method.
    """
    pattern: Tuple[str, ...]
    tier: TrustTier
    ownership: bool = False
    methods: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class Classification:
    tier: TrustTier
    # Path tenant id the Ownership Guard must compare; None when no check applies
    ownership_tenant_id: Optional[str] = None


# Evaluated top to bottom, first match wins.
ROUTE_TABLE: Tuple[RouteRule, ...] = (
    # Tenant self-serve exceptions carved out of billing
    RouteRule(("billing", "tenants", TENANT_PARAM, "usage"), TrustTier.TENANT_SCOPED, ownership=True),
    RouteRule(("billing", "me", REST), TrustTier.TENANT_SCOPED),
    RouteRule(("billing", REST), TrustTier.SUPERADMIN_ONLY),
    RouteRule(("governance", REST), TrustTier.SUPERADMIN_ONLY),
    RouteRule(("superadmin", REST), TrustTier.SUPERADMIN_ONLY),
    RouteRule(("tenants", ANY), TrustTier.SUPERADMIN_ONLY, methods=frozenset({"DELETE"})),
)

DEFAULT_TIER = TrustTier.TENANT_SCOPED


def _match(pattern: Sequence[str], segments: Sequence[str]) -> Tuple[bool, Optional[str]]:
    tenant_id: Optional[str] = None
    for i, part in enumerate(pattern):
        if part == REST:
            return True, tenant_id
        if i >= len(segments):
            return False, None
        if part == TENANT_PARAM:
            tenant_id = segments[i]
        elif part != ANY and part != segments[i]:
            return False, None
    if len(segments) != len(pattern):
        return False, None
    return True, tenant_id


def classify(
    method: str,
    path_segments: Sequence[str],
    rules: Sequence[RouteRule] = ROUTE_TABLE,
) -> Classification:
    """
    Decide which credential a request needs. Pure: no I/O, never raises.
    Unknown paths fall through to TENANT_SCOPED; the upstream decides whether
    the resource exists.
    """
    method = method.upper()
    for rule in rules:
        if rule.methods and method not in rule.methods:
            continue
        matched, tenant_id = _match(rule.pattern, path_segments)
        if matched:
            return Classification(
                tier=rule.tier,
                ownership_tenant_id=tenant_id if rule.ownership else None,
            )
    return Classification(tier=DEFAULT_TIER)
