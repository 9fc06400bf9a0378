"""Pytest configuration - no path manipulation, rely on proper package installation."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from punch_ingestor.models.base import reset_engine
from punch_ingestor.utils.config import get_settings

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def _ensure_database_url(monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory):
    """Guarantee PUNCH_DATABASE_URL points at a fresh SQLite file for every test."""

    if os.getenv("PUNCH_DATABASE_URL") is None:
        db_path = tmp_path_factory.mktemp("sqlite-db") / "attendance.sqlite"
        monkeypatch.setenv("PUNCH_DATABASE_URL", f"sqlite:///{db_path}")
    if os.getenv("PUNCH_API_KEYS") is None:
        monkeypatch.setenv("PUNCH_API_KEYS", '["test-key"]')

    reset_engine()
    get_settings(reload=True)
    yield
    reset_engine()
    get_settings(reload=True)


@pytest.fixture
def punch_export_text() -> str:
    """Fixture providing a punch-record export with two employee blocks."""
    return (FIXTURES_DIR / "punch_export.txt").read_text(encoding="utf-8")


@pytest.fixture
def summary_export_text() -> str:
    """Fixture providing a daily summary export with full and simple rows."""
    return (FIXTURES_DIR / "summary_export.txt").read_text(encoding="utf-8")


@pytest.fixture
def fragmented_export_text() -> str:
    """Fixture providing column-fragmented text no dialect can parse."""
    return (FIXTURES_DIR / "fragmented_export.txt").read_text(encoding="utf-8")
