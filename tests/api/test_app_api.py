"""
API tests for application-level endpoints.

Tests cover:
- Health check and root info
- Error body shape for unknown routes
"""

from fastapi.testclient import TestClient


class TestAppAPI:

    def test_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_root(self, client: TestClient):
        data = client.get("/").json()

        assert data["app"] == "TurtleTrace"
        assert data["docs"] == "/docs"

    def test_unknown_route_returns_404(self, client: TestClient):
        assert client.get("/nothing-here").status_code == 404
