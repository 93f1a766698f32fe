"""
tests/test_health.py -- Integration tests for GET /api/v1/health.

Covers:
  - 200 response with status, version, and the identity count
  - No authentication required
  - The count follows signups (store is shared by api/ and web/)
"""

from __future__ import annotations


def test_health_returns_200(api_client):
    resp = api_client.get("/api/v1/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert "version" in data
    assert data["users"] == 2


def test_health_counts_new_signups(api_client):
    api_client.post("/signup", data={"email": "new@example.com", "username": "Newbie", "password": "pw123"})
    assert api_client.get("/api/v1/health").json()["users"] == 3
