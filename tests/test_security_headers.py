"""Tests for security headers middleware and CORS configuration."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from feedback_collector.middleware.security_headers import (
    HSTS_VALUE,
    SECURITY_HEADERS,
    SecurityHeadersMiddleware,
)


@pytest.fixture
def client() -> TestClient:
    app = FastAPI()
    app.add_middleware(SecurityHeadersMiddleware)

    @app.get("/test")
    async def endpoint():
        return {"ok": True}

    return TestClient(app)


class TestSecurityHeaders:
    def test_all_headers_present(self, client):
        response = client.get("/test")

        assert response.status_code == 200
        for name, value in SECURITY_HEADERS.items():
            assert response.headers[name] == value

    def test_responses_are_not_cacheable(self, client):
        response = client.get("/test")

        assert response.headers["Cache-Control"] == "no-store"

    def test_no_hsts_over_plain_http(self, client):
        response = client.get("/test")

        assert "Strict-Transport-Security" not in response.headers

    def test_hsts_behind_tls_proxy(self, client):
        response = client.get("/test", headers={"X-Forwarded-Proto": "https"})

        assert response.headers["Strict-Transport-Security"] == HSTS_VALUE

    def test_hsts_over_https(self):
        app = FastAPI()
        app.add_middleware(SecurityHeadersMiddleware)

        @app.get("/test")
        async def endpoint():
            return {"ok": True}

        response = TestClient(app, base_url="https://testserver").get("/test")

        assert response.headers["Strict-Transport-Security"] == HSTS_VALUE

    def test_headers_on_not_found(self, client):
        response = client.get("/missing")

        assert response.status_code == 404
        assert response.headers["X-Content-Type-Options"] == "nosniff"


class TestAppMiddleware:
    """Headers and CORS on the assembled application."""

    async def test_unauthorized_response_carries_headers(self, async_client):
        response = await async_client.get("/auth/me")

        assert response.status_code == 401
        assert response.headers["X-Frame-Options"] == "DENY"

    async def test_cors_allows_configured_origin(self, async_client):
        response = await async_client.options(
            "/auth/login",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"

    async def test_cors_rejects_other_origin(self, async_client):
        response = await async_client.options(
            "/auth/login",
            headers={
                "Origin": "http://evil.example",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert "access-control-allow-origin" not in response.headers

    async def test_docs_disabled_outside_debug(self, async_client):
        response = await async_client.get("/docs")

        assert response.status_code == 404
