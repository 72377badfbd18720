"""
tests/test_health.py -- Integration tests for GET /api/health.

Covers:
  - 200 response with status, version, and item count
  - count reflects items across all owners
  - No authentication required
"""

from __future__ import annotations

from core.config import APP_VERSION


def test_health_returns_200(api_client):
    """Health endpoint returns 200 with status, version and todo count."""
    resp = api_client.get("/api/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["version"] == APP_VERSION
    assert data["todos"] == 0


def test_health_counts_all_owners(api_client, auth_headers):
    """The count spans every owner's items."""
    api_client.post("/api/todos", json={"title": "a"}, headers=auth_headers("alice"))
    api_client.post("/api/todos", json={"title": "b"}, headers=auth_headers("bob"))
    assert api_client.get("/api/health").json()["todos"] == 2


def test_health_no_auth_required(api_client):
    """Health endpoint is accessible without any authentication headers."""
    resp = api_client.get("/api/health", headers={})
    assert resp.status_code == 200
