"""Tests for API key enforcement on attendance routes."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from punch_ingestor.api.main import app
from punch_ingestor.utils.config import get_settings


@pytest.fixture(name="client")
def client_fixture(monkeypatch: pytest.MonkeyPatch) -> Iterator[TestClient]:
    """Provide a FastAPI test client with API keys configured."""

    monkeypatch.setenv("PUNCH_API_KEYS", '["valid-key", "another-key"]')
    get_settings(reload=True)

    with TestClient(app) as test_client:
        yield test_client

    get_settings(reload=True)


def test_attendance_routes_accept_valid_api_key(client: TestClient) -> None:
    """Requests with any configured API key succeed."""

    for key in ("valid-key", "another-key"):
        response = client.get("/api/v1/attendance/formats", headers={"X-API-Key": key})
        assert response.status_code == 200


def test_attendance_routes_reject_missing_api_key(client: TestClient) -> None:
    """Requests without an API key are rejected with 401."""

    response = client.post(
        "/api/v1/attendance/parse",
        json={"text_content": "x", "organization_id": "org-1"},
    )

    assert response.status_code == 401
    assert response.json() == {"detail": "Missing API key."}


def test_attendance_routes_reject_invalid_api_key(client: TestClient) -> None:
    """Requests with an invalid API key receive 403."""

    response = client.get(
        "/api/v1/attendance/formats",
        headers={"X-API-Key": "not-correct"},
    )

    assert response.status_code == 403
    assert response.json() == {"detail": "Invalid API key."}


def test_attendance_routes_require_configured_keys(
    client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    """An empty key list disables access instead of allowing everyone."""

    monkeypatch.setenv("PUNCH_API_KEYS", "[]")
    get_settings(reload=True)

    response = client.get("/api/v1/attendance/formats", headers={"X-API-Key": "valid-key"})

    assert response.status_code == 401
    assert response.json() == {"detail": "API authentication is not configured."}


def test_health_does_not_require_api_key(client: TestClient) -> None:
    """Probes stay unauthenticated."""

    assert client.get("/health").status_code == 200
