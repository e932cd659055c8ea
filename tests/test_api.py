"""
API Endpoint tests for the refresh trigger surface.

Tests cover:
- POST /refresh-config - default application / X-App-Name header
- POST /refresh-config/{app_name} - path parameter form
- GET /members/{app_name} - member snapshot
- GET /healthz, GET /health

The application is built with fake resolver/transport collaborators, so
no cluster or worker pods are needed.
"""

import pytest
from fastapi.testclient import TestClient

from conftest import FakeResolver, FakeTransport
from microadmin.config.provider import RefreshConfig
from microadmin.main import create_app
from microadmin.modules.auth import AuthModule
from microadmin.modules.broadcast import RefreshBroadcaster
from microadmin.modules.membership import DiscoveryError, Member

API_KEY = "secret-key"
HEADERS = {"X-API-Key": API_KEY}


class StubConfigProvider:
    def get_refresh_config(self) -> RefreshConfig:
        return RefreshConfig(
            default_application="producer",
            target_port=8081,
            target_path="/refresh-config",
            timeout_seconds=1.0,
            max_concurrency=4,
        )


def build_client(resolver, transport=None, require_auth=True):
    broadcaster = RefreshBroadcaster(resolver, transport or FakeTransport())
    app = create_app(
        config_provider=StubConfigProvider(),
        handler=broadcaster,
        auth_module=AuthModule([f"admin:{API_KEY}"], require_auth=require_auth),
    )
    return TestClient(app)


def test_refresh_default_application_ok():
    resolver = FakeResolver([Member("a", "10.0.0.1")])
    client = build_client(resolver)

    response = client.post("/refresh-config", headers=HEADERS)

    assert response.status_code == 200
    assert response.text == "OK"
    assert resolver.calls == ["producer"]


def test_refresh_application_from_header():
    resolver = FakeResolver([])
    client = build_client(resolver)

    response = client.post("/refresh-config", headers={**HEADERS, "X-App-Name": "consumer"})

    assert response.status_code == 200
    assert resolver.calls == ["consumer"]


def test_refresh_application_from_path():
    resolver = FakeResolver([])
    client = build_client(resolver)

    response = client.post("/refresh-config/consumer", headers=HEADERS)

    assert response.status_code == 200
    assert response.text == "OK"
    assert resolver.calls == ["consumer"]


def test_refresh_member_failure_returns_500_message(scenario_members):
    transport = FakeTransport().fail("10.0.0.3")
    client = build_client(FakeResolver(scenario_members), transport)

    response = client.post("/refresh-config", headers=HEADERS)

    assert response.status_code == 500
    assert response.headers["content-type"].startswith("text/plain")
    assert "producer" in response.text
    # Both reachable members were still attempted
    assert sorted(transport.calls) == ["10.0.0.1", "10.0.0.3"]


def test_refresh_discovery_error_returns_502(failing_resolver):
    transport = FakeTransport()
    client = build_client(failing_resolver, transport)

    response = client.post("/refresh-config", headers=HEADERS)

    assert response.status_code == 502
    assert "connection refused" in response.text
    assert transport.calls == []


def test_refresh_invalid_application_returns_400():
    client = build_client(FakeResolver(error=ValueError("Invalid application identifier: 'a,b'")))

    response = client.post("/refresh-config/a,b", headers=HEADERS)

    assert response.status_code == 400
    assert "Invalid application identifier" in response.text


def test_refresh_all_skipped_is_ok():
    client = build_client(FakeResolver([Member("a", None), Member("b", "")]))

    response = client.post("/refresh-config", headers=HEADERS)

    assert response.status_code == 200


@pytest.mark.parametrize("headers", [{}, {"X-API-Key": "wrong"}])
def test_refresh_requires_api_key(headers):
    resolver = FakeResolver([Member("a", "10.0.0.1")])
    client = build_client(resolver)

    response = client.post("/refresh-config", headers=headers)

    assert response.status_code == 401
    assert resolver.calls == []


def test_refresh_without_auth_required():
    client = build_client(FakeResolver([]), require_auth=False)

    response = client.post("/refresh-config")

    assert response.status_code == 200


def test_list_members():
    resolver = FakeResolver([Member("a", "10.0.0.1", "Running"), Member("b", None, "Pending")])
    transport = FakeTransport()
    client = build_client(resolver, transport)

    response = client.get("/members/producer", headers=HEADERS)

    assert response.status_code == 200
    data = response.json()
    assert data["app_name"] == "producer"
    assert data["count"] == 2
    assert data["members"][0] == {
        "name": "a", "address": "10.0.0.1", "phase": "Running", "reachable": True,
    }
    assert data["members"][1]["reachable"] is False
    assert transport.calls == []


def test_list_members_discovery_error(failing_resolver):
    client = build_client(failing_resolver)

    response = client.get("/members/producer", headers=HEADERS)

    assert response.status_code == 502


def test_list_members_invalid_application():
    client = build_client(FakeResolver(error=ValueError("Invalid application identifier")))

    response = client.get("/members/bad", headers=HEADERS)

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid application identifier"}


def test_healthz_is_unauthenticated():
    client = build_client(FakeResolver())

    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_health_reports_default_application():
    with build_client(FakeResolver()) as client:
        response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["default_application"] == "producer"


def test_shutdown_closes_transport():
    transport = FakeTransport()
    with build_client(FakeResolver(), transport) as client:
        client.get("/healthz")

    assert transport.closed is True


def test_health_unavailable_before_startup():
    # No context manager: lifespan startup has not run
    client = build_client(FakeResolver())

    response = client.get("/health")

    assert response.status_code == 503
    assert response.json() == {"status": "unhealthy"}


def test_refresh_non_ascii_api_key_rejected():
    resolver = FakeResolver([Member("a", "10.0.0.1")])
    client = build_client(resolver)

    response = client.post("/refresh-config", headers={"X-API-Key": "café".encode("latin-1")})

    assert response.status_code == 401
    assert resolver.calls == []


def test_refresh_empty_app_name_header_rejected():
    resolver = FakeResolver([Member("a", "10.0.0.1")])
    transport = FakeTransport()
    client = build_client(resolver, transport)

    response = client.post("/refresh-config", headers={**HEADERS, "X-App-Name": ""})

    assert response.status_code == 400
    assert "must not be empty" in response.text
    assert resolver.calls == []
    assert transport.calls == []
