# =============================================================================
# tests/test_pipeline.py - Request Pipeline Tests
# =============================================================================
# Tests for the ordered middleware stages and the terminal error handler:
# - Every error, however it was raised, comes back as an envelope
# - Unclassified errors become a generic 500
# - CORS headers are only granted to the configured frontend origin
# - Request IDs are echoed back
# =============================================================================

from uuid import UUID

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from app.exceptions import GENERIC_ERROR_MESSAGE, SessionNotFoundError
from app.middleware import (
    PIPELINE_STAGES,
    REQUEST_ID_HEADER,
    CredentialedCORSMiddleware,
    RequestContextMiddleware,
)
from tests.conftest import FRONTEND_ORIGIN

EVIL_ORIGIN = "https://evil.example.com"


class TeapotError(Exception):
    """A third-party style exception carrying its own status code."""

    status_code = 418

    def __init__(self):
        super().__init__("short and stout")
        self.message = "I'm a teapot"


class BogusStatusError(Exception):
    """An exception whose status_code is not an HTTP error code."""

    status_code = 200


@pytest.fixture
def failing_app(test_app):
    """The test app plus a few routes that fail in different ways."""

    @test_app.get("/boom")
    async def boom():
        raise RuntimeError("secret internal detail")

    @test_app.get("/boom-sync")
    def boom_sync():
        raise KeyError("missing")

    @test_app.get("/teapot")
    async def teapot():
        raise TeapotError()

    @test_app.get("/bogus")
    async def bogus():
        raise BogusStatusError("nope")

    @test_app.get("/http-error")
    async def http_error():
        raise HTTPException(status_code=409, detail="Conflict here")

    @test_app.get("/domain-error")
    async def domain_error():
        raise SessionNotFoundError("abc")

    return test_app


@pytest.fixture
def failing_client(failing_app):
    return TestClient(failing_app, raise_server_exceptions=False)


# =============================================================================
# Pipeline Order
# =============================================================================

class TestPipelineOrder:
    """Tests for how the stages are installed."""

    def test_stage_names_in_order(self):
        assert [stage.name for stage in PIPELINE_STAGES] == ["cors", "request_context"]

    def test_cors_is_outermost(self, test_app):
        classes = [middleware.cls for middleware in test_app.user_middleware]
        assert classes == [CredentialedCORSMiddleware, RequestContextMiddleware]


# =============================================================================
# Terminal Error Handler
# =============================================================================

class TestErrorEnvelope:
    """Tests for the terminal error handler."""

    @pytest.mark.parametrize("path", ["/boom", "/boom-sync"])
    def test_unclassified_error_is_generic_500(self, failing_client, path):
        response = failing_client.get(path)

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "message": GENERIC_ERROR_MESSAGE,
            "data": None,
        }
        assert "secret" not in response.text

    def test_status_attribute_is_honoured(self, failing_client):
        response = failing_client.get("/teapot")

        assert response.status_code == 418
        assert response.json() == {"success": False, "message": "I'm a teapot", "data": None}

    def test_non_error_status_attribute_is_500(self, failing_client):
        response = failing_client.get("/bogus")

        assert response.status_code == 500
        assert response.json()["message"] == GENERIC_ERROR_MESSAGE

    def test_http_exception(self, failing_client):
        response = failing_client.get("/http-error")

        assert response.status_code == 409
        assert response.json() == {"success": False, "message": "Conflict here", "data": None}

    def test_domain_error(self, failing_client):
        response = failing_client.get("/domain-error")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Session not found", "data": None}

    def test_unknown_route(self, client):
        response = client.get("/api/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Not Found", "data": None}

    def test_wrong_method(self, client):
        response = client.put("/api/health")

        assert response.status_code == 405
        assert response.json()["success"] is False

    def test_malformed_json_body(self, client, auth_headers):
        response = client.post(
            "/api/ai/generate-explanation",
            content="{not json",
            headers={**auth_headers, "Content-Type": "application/json"},
        )

        assert response.status_code == 422
        body = response.json()
        assert body["success"] is False
        assert body["message"].startswith("Validation error")
        assert body["data"] is None


# =============================================================================
# Request Context
# =============================================================================

class TestRequestId:
    """Tests for X-Request-ID handling."""

    def test_request_id_echoed(self, client):
        response = client.get("/api/health", headers={REQUEST_ID_HEADER: "abc-123"})
        assert response.headers[REQUEST_ID_HEADER] == "abc-123"

    def test_unsafe_request_id_replaced(self, client):
        response = client.get("/api/health", headers={REQUEST_ID_HEADER: "bad id <script>"})

        request_id = response.headers[REQUEST_ID_HEADER]
        assert request_id != "bad id <script>"
        UUID(request_id)

    def test_request_id_on_error_response(self, failing_client):
        response = failing_client.get("/boom", headers={REQUEST_ID_HEADER: "err-1"})
        assert response.headers[REQUEST_ID_HEADER] == "err-1"


# =============================================================================
# CORS
# =============================================================================

class TestCors:
    """Tests for the credentialed CORS stage."""

    def test_allowed_origin_gets_credentials(self, client):
        response = client.get("/api/health", headers={"Origin": FRONTEND_ORIGIN})

        assert response.headers["access-control-allow-origin"] == FRONTEND_ORIGIN
        assert response.headers["access-control-allow-credentials"] == "true"

    def test_disallowed_origin_gets_nothing(self, client):
        response = client.get("/api/health", headers={"Origin": EVIL_ORIGIN})

        assert response.status_code == 200
        assert "access-control-allow-origin" not in response.headers
        assert "access-control-allow-credentials" not in response.headers

    def test_preflight_allowed(self, client):
        response = client.options(
            "/api/sessions",
            headers={
                "Origin": FRONTEND_ORIGIN,
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "content-type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == FRONTEND_ORIGIN
        assert response.headers["access-control-allow-credentials"] == "true"

    def test_preflight_disallowed(self, client):
        response = client.options(
            "/api/sessions",
            headers={"Origin": EVIL_ORIGIN, "Access-Control-Request-Method": "POST"},
        )

        assert response.status_code == 400
        assert "access-control-allow-origin" not in response.headers
        assert "access-control-allow-credentials" not in response.headers

    def test_error_responses_keep_cors_headers(self, failing_client):
        response = failing_client.get("/boom", headers={"Origin": FRONTEND_ORIGIN})

        assert response.status_code == 500
        assert response.headers["access-control-allow-origin"] == FRONTEND_ORIGIN
        assert response.headers["access-control-allow-credentials"] == "true"

    def test_unauthenticated_response_keeps_cors_headers(self, client):
        response = client.get("/api/sessions", headers={"Origin": FRONTEND_ORIGIN})

        assert response.status_code == 401
        assert response.headers["access-control-allow-origin"] == FRONTEND_ORIGIN
