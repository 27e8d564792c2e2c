import pytest

from admin_gateway.security.classifier import TrustTier
from admin_gateway.security.context import AuthorizationContext, RequestDescriptor
from admin_gateway.security.credentials import build_outbound_headers

COOKIE = "aa_sess=blob"


def _descriptor(**kwargs):
    defaults = dict(method="GET", path_segments=("inbox",), cookie_header=COOKIE)
    defaults.update(kwargs)
    return RequestDescriptor(**defaults)


def test_tenant_header_when_tenant_resolved(settings):
    ctx = AuthorizationContext(tenant_id="T1", resolved=True)
    headers = build_outbound_headers(TrustTier.TENANT_SCOPED, ctx, _descriptor(), settings)
    assert headers["X-Tenant-Id"] == "T1"
    assert "Authorization" not in headers
    assert headers["Cookie"] == COOKIE


def test_no_placeholder_tenant_header(settings):
    headers = build_outbound_headers(
        TrustTier.TENANT_SCOPED, AuthorizationContext(), _descriptor(), settings
    )
    assert "X-Tenant-Id" not in headers


def test_bearer_only_for_superadmin(settings):
    ctx = AuthorizationContext(tenant_id="T1", email="ops@platform.test", is_superadmin=True, resolved=True)
    headers = build_outbound_headers(TrustTier.SUPERADMIN_ONLY, ctx, _descriptor(), settings)
    assert headers["Authorization"] == "Bearer svc-token"
    assert "X-Tenant-Id" not in headers
    assert headers["Cookie"] == COOKIE


def test_no_bearer_without_superadmin(settings):
    ctx = AuthorizationContext(tenant_id="T1", email="owner@tenant.test", resolved=True)
    headers = build_outbound_headers(TrustTier.SUPERADMIN_ONLY, ctx, _descriptor(), settings)
    assert "Authorization" not in headers
    assert "X-Tenant-Id" not in headers


def test_no_bearer_when_token_unset(settings):
    settings.ADMIN_API_TOKEN = ""
    ctx = AuthorizationContext(is_superadmin=True, resolved=True)
    headers = build_outbound_headers(TrustTier.SUPERADMIN_ONLY, ctx, _descriptor(), settings)
    assert "Authorization" not in headers


def test_public_gets_no_identity_headers(settings):
    ctx = AuthorizationContext(tenant_id="T1", is_superadmin=True, resolved=True)
    headers = build_outbound_headers(TrustTier.PUBLIC, ctx, _descriptor(), settings)
    assert "X-Tenant-Id" not in headers
    assert "Authorization" not in headers


@pytest.mark.parametrize("tier", list(TrustTier))
@pytest.mark.parametrize("is_superadmin", [True, False])
@pytest.mark.parametrize("tenant_id", ["T1", None])
def test_credentials_are_exclusive(settings, tier, is_superadmin, tenant_id):
    ctx = AuthorizationContext(tenant_id=tenant_id, is_superadmin=is_superadmin, resolved=True)
    headers = build_outbound_headers(tier, ctx, _descriptor(), settings)
    assert not ("X-Tenant-Id" in headers and "Authorization" in headers)


def test_content_type_passes_through(settings):
    descriptor = _descriptor(method="POST", body=b"--x--", content_type="multipart/form-data; boundary=x")
    headers = build_outbound_headers(TrustTier.TENANT_SCOPED, AuthorizationContext(), descriptor, settings)
    assert headers["Content-Type"] == "multipart/form-data; boundary=x"


def test_cookie_omitted_when_absent(settings):
    headers = build_outbound_headers(
        TrustTier.TENANT_SCOPED, AuthorizationContext(), _descriptor(cookie_header=None), settings
    )
    assert "Cookie" not in headers
