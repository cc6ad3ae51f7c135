# =============================================================================
# tests/test_health.py - Health Endpoints and Startup Tests
# =============================================================================
# Health/readiness/liveness endpoints and the lifespan handler that
# connects the database before serving.
# =============================================================================

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from app import API_VERSION
from app.main import create_app
from lib.supabase_client import SupabaseClientError


class TestHealthEndpoints:
    """Tests for /api/health*."""

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "healthy"
        assert data["environment"] == "development"

    def test_liveness(self, client):
        assert client.get("/api/health/live").json()["data"]["status"] == "alive"

    def test_readiness_without_database(self, client):
        data = client.get("/api/health/ready").json()["data"]

        assert data["status"] == "degraded"
        assert data["checks"]["database"] == "unhealthy: not connected"

    def test_readiness_with_database(self, test_app, client):
        db = MagicMock()
        db.is_connected = True
        db.ping.return_value = True
        test_app.state.db = db

        data = client.get("/api/health/ready").json()["data"]

        assert data["status"] == "ready"
        assert data["checks"]["database"] == "healthy"

    def test_readiness_ping_failure(self, test_app, client):
        db = MagicMock()
        db.is_connected = True
        db.ping.return_value = False
        test_app.state.db = db

        assert client.get("/api/health/ready").json()["data"]["status"] == "degraded"

    def test_root(self, client):
        body = client.get("/").json()
        assert body["success"] is True
        assert body["data"]["health"] == "/api/health"

    def test_version_is_consistent(self, test_app, client):
        """Root, health and the OpenAPI schema all report the package version."""
        assert client.get("/").json()["data"]["version"] == API_VERSION
        assert client.get("/api/health").json()["data"]["version"] == API_VERSION
        assert test_app.openapi()["info"]["version"] == API_VERSION


class TestDatabaseDependency:
    """Routes that need the database answer 503 until it is connected."""

    def test_unconnected_database_is_503(self, settings, token):
        app = create_app(settings)
        client = TestClient(app, raise_server_exceptions=False)

        response = client.get("/api/sessions", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 503
        assert response.json()["success"] is False


class TestLifespan:
    """Tests for startup and shutdown."""

    def test_startup_connects_and_shutdown_closes(self, settings):
        with patch("app.main.SupabaseClient") as client_cls:
            db = client_cls.return_value
            app = create_app(settings)

            with TestClient(app):
                assert app.state.db is db
                db.connect.assert_called_once()

            db.close.assert_called_once()

    def test_startup_fails_when_database_unreachable(self, settings):
        with patch("app.main.SupabaseClient") as client_cls:
            client_cls.return_value.connect.side_effect = SupabaseClientError(
                "Failed to connect", code="CLIENT_INIT_FAILED"
            )
            app = create_app(settings)

            with pytest.raises(SupabaseClientError):
                with TestClient(app):
                    pass
