import httpx
import pytest
import pytest_asyncio

from admin_gateway.api.deps import get_http_client
from admin_gateway.core.config import Settings, get_settings
from admin_gateway.main import app

UPSTREAM = "http://admin-api.test"
SERVICE_TOKEN = "svc-token"
SUPERADMIN = "ops@platform.test"
SESSION_COOKIE = "aa_sess=opaque.session.blob; theme=dark"


class FakeAdminAPI:
    """
    Stands in for the upstream Admin API behind an httpx.MockTransport.
    Records every request so tests can assert what left the gateway.
    """

    def __init__(self):
        self.identity = {"tenant_id": "T1", "email": "owner@tenant.test", "role": "owner"}
        self.identity_status = 200
        self.identity_error = None
        self.responses = {}
        self.identity_calls = []
        self.calls = []

    def respond(self, method, path, response):
        self.responses[(method, path)] = response

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.url.path == "/auth/me":
            self.identity_calls.append(request)
            if self.identity_error is not None:
                raise self.identity_error
            return httpx.Response(self.identity_status, json=self.identity)

        self.calls.append(request)
        response = self.responses.get((request.method, request.url.path))
        if response is None:
            return httpx.Response(200, json={"ok": True})
        if callable(response):
            return response(request)
        return response

    @property
    def last(self) -> httpx.Request:
        return self.calls[-1]


@pytest.fixture
def settings():
    return Settings(
        ADMIN_API=UPSTREAM,
        ADMIN_API_TOKEN=SERVICE_TOKEN,
        SUPERADMIN_EMAILS=SUPERADMIN,
        LOG_DIR="",
    )


@pytest.fixture
def fake_api():
    return FakeAdminAPI()


@pytest_asyncio.fixture
async def upstream_client(fake_api):
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_api)) as client:
        yield client


@pytest_asyncio.fixture
async def client(settings, upstream_client):
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_http_client] = lambda: upstream_client

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
