"""Tests for health and metrics endpoints."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from punch_ingestor.api.main import app
from punch_ingestor.monitoring.metrics import record_upload_attempt
from punch_ingestor.utils.config import get_settings


@pytest.fixture(name="client")
def client_fixture() -> Iterator[TestClient]:
    get_settings(reload=True)
    with TestClient(app) as test_client:
        yield test_client


def test_health_reports_database_status(client: TestClient) -> None:
    """Health includes the database probe."""

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "healthy",
        "service": "punch_ingestor",
        "database": {"status": "ok"},
    }


def test_health_reports_unreachable_database(
    client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    """A failing database marks the service unhealthy."""

    def _broken_engine():  # type: ignore[no-untyped-def]
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    monkeypatch.setattr("punch_ingestor.api.routes.health.get_engine", _broken_engine)

    body = client.get("/health").json()

    assert body["status"] == "unhealthy"
    assert body["database"]["status"] == "error"


def test_metrics_endpoint_exposes_attendance_counters(client: TestClient) -> None:
    """Prometheus exposition includes the attendance metrics."""

    record_upload_attempt("summary", "success")

    response = client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert 'attendance_uploads_total{format="summary",status="success"}' in response.text
