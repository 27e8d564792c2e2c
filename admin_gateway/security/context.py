from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class RequestDescriptor:
    """
    Everything the gateway needs from the inbound call, captured once.
    The cookie header is an opaque blob; it is forwarded, never parsed.
    """
    method: str
    path_segments: Tuple[str, ...]
    query: str = ""
    body: Optional[bytes] = None
    cookie_header: Optional[str] = None
    content_type: Optional[str] = None

    @property
    def path(self) -> str:
        return "/".join(self.path_segments)


@dataclass(frozen=True)
class AuthorizationContext:
    """
    Trusted identity for a single request.

    `resolved` says whether the upstream identity check succeeded (fail-open:
    an unresolved context just means no extra credential). `is_superadmin` is
    the privilege bit (fail-closed: only True after a positive allow-list hit).
    """
    tenant_id: Optional[str] = None
    email: Optional[str] = None
    is_superadmin: bool = False
    resolved: bool = False


ANONYMOUS = AuthorizationContext()
