"""Deduplicating persistence of resolved punches."""

from __future__ import annotations

import uuid
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from ..models.repository import PunchRowCreate
from ..monitoring.metrics import record_duplicate_punches, record_inserted_punches, record_row_error
from ..schemas.punches import ParsedPunch
from ..utils.logging import setup_logger

logger = setup_logger(__name__, context={"component": "PunchReconciler"})


class PunchStore(Protocol):
    """Punch persistence with idempotent inserts keyed by (organization, profile, time)."""

    def insert_if_absent(self, row: PunchRowCreate) -> bool:
        """Return True when written, False when the key was already present."""
        ...


@dataclass(slots=True)
class ReconcileSummary:
    """Counts produced by one reconcile pass."""

    batch_id: str
    inserted: int = 0
    duplicates: int = 0
    errors: list[str] = field(default_factory=list)


class PunchReconciler:
    """Persist resolved punches one row at a time under a shared batch id."""

    def __init__(self, store: PunchStore) -> None:
        self._store = store

    def reconcile(
        self,
        organization_id: str,
        punches: Sequence[ParsedPunch],
        code_to_profile: Mapping[str, str],
        *,
        batch_id: str | None = None,
    ) -> ReconcileSummary:
        """
        Insert every punch whose code resolved to a profile.

        Punches of unresolved codes are skipped. A failing row is recorded in
        ``errors`` and processing continues with the next row.

        Args:
            organization_id: Owning organization
            punches: Extracted punches in document order
            code_to_profile: Resolved ``employee code -> profile id`` map
            batch_id: Upload batch id; a new UUID4 when omitted

        Returns:
            ReconcileSummary with inserted/duplicate counts and row errors
        """
        summary = ReconcileSummary(batch_id=batch_id or str(uuid.uuid4()))

        for punch in punches:
            profile_id = code_to_profile.get(punch.employee_code)
            if profile_id is None:
                continue

            row = PunchRowCreate(
                organization_id=organization_id,
                profile_id=profile_id,
                employee_code=punch.employee_code,
                card_no=punch.card_no,
                punch_datetime=punch.as_datetime(),
                raw_status=punch.raw_status,
                upload_batch_id=summary.batch_id,
            )
            try:
                written = self._store.insert_if_absent(row)
            except Exception as exc:
                summary.errors.append(f"Insert error for {punch.employee_code}: {exc}")
                record_row_error()
                logger.warning(
                    "Punch insert failed for %s at %s: %s",
                    punch.employee_code,
                    punch.punch_datetime,
                    exc,
                    extra={
                        "organization_id": organization_id,
                        "batch_id": summary.batch_id,
                        "status": "error",
                    },
                )
                continue

            if written:
                summary.inserted += 1
            else:
                summary.duplicates += 1

        record_inserted_punches(summary.inserted)
        record_duplicate_punches(summary.duplicates)
        return summary
