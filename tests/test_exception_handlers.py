"""Tests for the central exception handlers."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel, Field

from feedback_collector.api.exception_handlers import setup_exception_handlers
from feedback_collector.services.credentials import HashFailureError, MalformedHashError


class Payload(BaseModel):
    password: str = Field(..., min_length=8)


@pytest.fixture
def client() -> TestClient:
    app = FastAPI()
    setup_exception_handlers(app)

    @app.post("/validate")
    async def validate(payload: Payload):
        return {"ok": True}

    @app.get("/hash-failure")
    async def hash_failure():
        raise HashFailureError("argon2 could not allocate memory")

    @app.get("/malformed-hash")
    async def malformed_hash():
        raise MalformedHashError("Stored hash is malformed")

    return TestClient(app, raise_server_exceptions=False)


def test_validation_error_is_400_without_input(client):
    response = client.post("/validate", json={"password": "hunter2"})

    assert response.status_code == 400
    [error] = response.json()["detail"]
    assert error["loc"] == ["body", "password"]
    assert set(error) == {"loc", "msg", "type"}
    assert "hunter2" not in response.text


def test_hash_failure_is_503(client):
    response = client.get("/hash-failure")

    assert response.status_code == 503
    assert response.json() == {"detail": "Service temporarily unavailable"}
    assert "argon2" not in response.text


def test_malformed_hash_is_500(client):
    response = client.get("/malformed-hash")

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
