"""
Tests for application wiring.
"""

from fastapi.testclient import TestClient

from app.main import app


def test_health():
    response = TestClient(app).get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_routes_mounted():
    paths = set(app.openapi()["paths"])

    assert "/api/v1/smartwatch/sync/{brand}" in paths
    assert "/api/v1/smartwatch/fitbit/callback" in paths
    assert "/api/v1/goals/current" in paths
    assert "/api/v1/statistics" in paths
