"""Tests for the health check endpoint."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from clickhub.api.ws.outbound import OutboundQueue


@pytest.fixture
def app(hub):
    """
    Create a minimal FastAPI app with only the health endpoint.

    Returns:
        FastAPI: FastAPI application instance.
    """
    from clickhub.api.http.health import router

    test_app = FastAPI()
    test_app.include_router(router)
    return test_app


@pytest.fixture
def client(app):
    """
    Create a test client for the FastAPI application.

    Args:
        app: FastAPI application fixture.

    Returns:
        TestClient: FastAPI test client instance.
    """
    return TestClient(app)


def test_health_endpoint_idle_hub(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "healthy",
        "active_connections": 0,
        "total_clicks": 0,
    }


def test_health_endpoint_reflects_hub_state(client, hub):
    hub.registry.register("a", OutboundQueue())
    hub.registry.register("b", OutboundQueue())
    hub.counters.record_click("a")
    hub.counters.record_click("b")
    hub.counters.forget("b")

    data = client.get("/health").json()

    assert data["active_connections"] == 2
    assert data["total_clicks"] == 2
