"""License verification proxy: POST /api/license/verify."""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from crm.core.exceptions import LicenseCheckError
from crm.license_proxy import app as proxy_app
from crm.main import app
from crm.services.license import LicenseVerifier, get_license_verifier

PANEL_URL = "https://panel.example.com/api/verify"
SECRET = "panel-secret"


class PanelStub:
    """Records what reaches the license panel and answers with a canned response."""

    def __init__(self, status_code=200, body=None, raw=None, error=None):
        self.status_code = status_code
        self.body = body if body is not None else {"status": "active", "tier": "pro"}
        self.raw = raw
        self.error = error
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.raw is not None:
            return httpx.Response(self.status_code, content=self.raw)
        return httpx.Response(self.status_code, json=self.body)


@pytest.fixture()
def use_panel():
    def _use(stub: PanelStub, target=app, dev_mode=False):
        verifier = LicenseVerifier(PANEL_URL, SECRET, dev_mode=dev_mode, transport=httpx.MockTransport(stub))
        target.dependency_overrides[get_license_verifier] = lambda: verifier
        return TestClient(target)

    yield _use
    app.dependency_overrides.clear()
    proxy_app.dependency_overrides.clear()


def test_forwards_tenant_with_bearer_secret(use_panel):
    stub = PanelStub()
    client = use_panel(stub)

    response = client.post("/api/license/verify", json={"tenantId": "tenant-42"})

    assert response.status_code == 200
    assert response.json() == {"status": "active", "tier": "pro"}
    assert len(stub.requests) == 1
    forwarded = stub.requests[0]
    assert str(forwarded.url) == PANEL_URL
    assert forwarded.method == "POST"
    assert forwarded.headers["Authorization"] == f"Bearer {SECRET}"
    assert json.loads(forwarded.content) == {"tenantId": "tenant-42"}


def test_panel_body_is_relayed_unchanged(use_panel):
    body = {"status": "expired", "expiresAt": "2024-01-01", "features": ["a", "b"], "nested": {"k": 1}}
    client = use_panel(PanelStub(body=body))

    response = client.post("/api/license/verify", json={"tenantId": "t"})

    assert response.status_code == 200
    assert response.json() == body


@pytest.mark.parametrize("payload", [{}, {"tenantId": ""}, {"tenantId": None}])
def test_missing_tenant_is_rejected_without_calling_panel(use_panel, payload):
    stub = PanelStub()
    client = use_panel(stub)

    response = client.post("/api/license/verify", json=payload)

    assert response.status_code == 400
    assert response.json() == {"error": "Tenant ID is required"}
    assert stub.requests == []


def test_missing_body_is_rejected(use_panel):
    client = use_panel(PanelStub())

    response = client.post("/api/license/verify")

    assert response.status_code == 400
    assert response.json() == {"error": "Tenant ID is required"}


@pytest.mark.parametrize("body", [[1, 2], "tenant-42", 42, b"{not json"])
def test_non_object_body_is_rejected(use_panel, body):
    stub = PanelStub()
    client = use_panel(stub)

    if isinstance(body, bytes):
        response = client.post("/api/license/verify", content=body, headers={"Content-Type": "application/json"})
    else:
        response = client.post("/api/license/verify", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "Tenant ID is required"}
    assert stub.requests == []


@pytest.mark.parametrize("tenant", [42, {"org": "acme"}, True])
def test_non_string_tenant_is_forwarded_as_is(use_panel, tenant):
    stub = PanelStub()
    client = use_panel(stub)

    response = client.post("/api/license/verify", json={"tenantId": tenant})

    assert response.status_code == 200
    assert json.loads(stub.requests[0].content) == {"tenantId": tenant}


def test_falsy_tenant_is_rejected(use_panel):
    stub = PanelStub()
    client = use_panel(stub)

    response = client.post("/api/license/verify", json={"tenantId": 0})

    assert response.status_code == 400
    assert stub.requests == []


@pytest.mark.parametrize("stub", [
    PanelStub(status_code=403, body={"error": "Tenant suspended"}),
    PanelStub(status_code=502, raw=b"Bad gateway"),
    PanelStub(raw=b"not json"),
    PanelStub(error=httpx.ConnectError("connection refused")),
])
def test_upstream_failures_become_generic_500(use_panel, stub):
    client = use_panel(stub)

    response = client.post("/api/license/verify", json={"tenantId": "t"})

    assert response.status_code == 500
    assert response.json() == {"error": "License check failed"}


def test_dev_mode_answers_active_without_calling_panel(use_panel):
    stub = PanelStub()
    client = use_panel(stub, dev_mode=True)

    response = client.post("/api/license/verify", json={"tenantId": "t"})

    assert response.status_code == 200
    assert response.json() == {"status": "active"}
    assert stub.requests == []


def test_standalone_proxy_serves_same_route(use_panel):
    stub = PanelStub()
    client = use_panel(stub, target=proxy_app)

    response = client.post("/api/license/verify", json={"tenantId": "tenant-7"})

    assert response.status_code == 200
    assert json.loads(stub.requests[0].content) == {"tenantId": "tenant-7"}


@pytest.mark.asyncio
async def test_verifier_without_panel_url_raises():
    verifier = LicenseVerifier(None, SECRET)

    with pytest.raises(LicenseCheckError):
        await verifier.verify("t")


@pytest.mark.asyncio
async def test_verifier_surfaces_panel_error_message():
    verifier = LicenseVerifier(
        PANEL_URL, SECRET,
        transport=httpx.MockTransport(PanelStub(status_code=404, body={"error": "Unknown tenant"})),
    )

    with pytest.raises(LicenseCheckError, match="Unknown tenant"):
        await verifier.verify("t")
