"""Tests for batch reconciliation of resolved punches."""

from __future__ import annotations

import uuid
from datetime import datetime

import pytest

from punch_ingestor.models.repository import PunchRowCreate
from punch_ingestor.reconcile.reconciler import PunchReconciler
from punch_ingestor.schemas.punches import ParsedPunch


class InMemoryPunchStore:
    """Punch store keyed by (organization, profile, time)."""

    def __init__(self, fail_codes: set[str] | None = None) -> None:
        self.rows: dict[tuple[str, str, datetime], PunchRowCreate] = {}
        self.fail_codes = fail_codes or set()

    def insert_if_absent(self, row: PunchRowCreate) -> bool:
        if row.employee_code in self.fail_codes:
            raise RuntimeError("connection reset")
        key = (row.organization_id, row.profile_id, row.punch_datetime)
        if key in self.rows:
            return False
        self.rows[key] = row
        return True


def _punch(code: str, when: str, **kwargs: str) -> ParsedPunch:
    return ParsedPunch(employee_code=code, punch_datetime=when, **kwargs)


PUNCHES = [
    _punch("1001", "2026-03-01T09:00:00", raw_status="P", card_no="5001"),
    _punch("1001", "2026-03-01T18:00:00", raw_status="P", card_no="5001"),
    _punch("1002", "2026-03-01T09:30:00"),
    _punch("X9", "2026-03-01T10:00:00"),
]
MAPPING = {"1001": "p-john", "1002": "p-jane"}


def test_inserts_resolved_punches_with_batch_id() -> None:
    """Every resolved punch is written under one batch id."""

    store = InMemoryPunchStore()

    summary = PunchReconciler(store).reconcile("org-1", PUNCHES, MAPPING)

    assert summary.inserted == 3
    assert summary.duplicates == 0
    assert summary.errors == []
    uuid.UUID(summary.batch_id)
    assert {row.upload_batch_id for row in store.rows.values()} == {summary.batch_id}

    row = store.rows[("org-1", "p-john", datetime(2026, 3, 1, 9, 0))]
    assert row.raw_status == "P"
    assert row.card_no == "5001"
    assert row.punch_source == "upload"


def test_unmatched_codes_are_never_written() -> None:
    """Punches of unresolved codes are skipped silently."""

    store = InMemoryPunchStore()

    PunchReconciler(store).reconcile("org-1", PUNCHES, MAPPING)

    assert all(row.employee_code != "X9" for row in store.rows.values())


def test_second_pass_counts_duplicates() -> None:
    """Re-running the same punches inserts nothing."""

    store = InMemoryPunchStore()
    reconciler = PunchReconciler(store)

    first = reconciler.reconcile("org-1", PUNCHES, MAPPING)
    second = reconciler.reconcile("org-1", PUNCHES, MAPPING)

    assert first.inserted == 3
    assert second.inserted == 0
    assert second.duplicates == 3
    assert second.batch_id != first.batch_id
    assert len(store.rows) == 3


def test_duplicates_within_one_upload() -> None:
    """Repeated punches in the same document count as duplicates."""

    store = InMemoryPunchStore()
    punches = [PUNCHES[0], PUNCHES[0]]

    summary = PunchReconciler(store).reconcile("org-1", punches, MAPPING)

    assert (summary.inserted, summary.duplicates) == (1, 1)


def test_same_time_different_organization_is_distinct() -> None:
    """Uniqueness is scoped by organization."""

    store = InMemoryPunchStore()
    reconciler = PunchReconciler(store)

    reconciler.reconcile("org-1", PUNCHES[:1], MAPPING)
    summary = reconciler.reconcile("org-2", PUNCHES[:1], MAPPING)

    assert summary.inserted == 1


def test_row_failure_does_not_abort_batch() -> None:
    """A failing row is reported and later rows still persist."""

    store = InMemoryPunchStore(fail_codes={"1001"})

    summary = PunchReconciler(store).reconcile("org-1", PUNCHES, MAPPING, batch_id="batch-1")

    assert summary.batch_id == "batch-1"
    assert summary.inserted == 1
    assert summary.errors == [
        "Insert error for 1001: connection reset",
        "Insert error for 1001: connection reset",
    ]


@pytest.mark.parametrize("punches", [[], PUNCHES[3:]])
def test_nothing_to_write(punches: list[ParsedPunch]) -> None:
    """Empty or fully unmatched input yields an empty summary."""

    summary = PunchReconciler(InMemoryPunchStore()).reconcile("org-1", punches, MAPPING)

    assert (summary.inserted, summary.duplicates, summary.errors) == (0, 0, [])


def test_store_needs_only_insert_if_absent() -> None:
    """Deduplication relies solely on the store's insert outcome."""

    class InsertOnlyStore:
        def __init__(self) -> None:
            self.keys: set[tuple[str, str, datetime]] = set()

        def insert_if_absent(self, row: PunchRowCreate) -> bool:
            key = (row.organization_id, row.profile_id, row.punch_datetime)
            if key in self.keys:
                return False
            self.keys.add(key)
            return True

    reconciler = PunchReconciler(InsertOnlyStore())
    reconciler.reconcile("org-1", PUNCHES, MAPPING)
    summary = reconciler.reconcile("org-1", PUNCHES, MAPPING)

    assert (summary.inserted, summary.duplicates, summary.errors) == (0, 3, [])
