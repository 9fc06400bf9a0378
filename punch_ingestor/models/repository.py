"""Repository helpers implementing the ingestion collaborators on SQLAlchemy."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from ..resolution.identity import ProfileRecord
from .attendance import AttendanceParseDiagnostic, AttendancePunch, AttendanceUploadLog
from .base import session_scope
from .directory import EmployeeIdentifier, Profile

PUNCH_UNIQUE_COLUMNS = ("organization_id", "profile_id", "punch_datetime")
_UPSERT_INSERTS = {"postgresql": postgresql_insert, "sqlite": sqlite_insert}


@dataclass(slots=True)
class PunchRowCreate:
    """Value object for one punch row tagged with its upload batch."""

    organization_id: str
    profile_id: str
    employee_code: str
    punch_datetime: datetime
    upload_batch_id: str
    card_no: str | None = None
    raw_status: str | None = None
    punch_source: str = "upload"


@dataclass(slots=True)
class UploadLogCreate:
    """Value object capturing the summary of one import call."""

    organization_id: str
    file_name: str
    file_type: str
    batch_id: str
    format: str
    total_parsed: int
    total_punches: int
    matched_employees: int
    duplicate_punches: int
    uploaded_by: str | None = None
    unmatched_codes: list[str] = field(default_factory=list)
    parse_errors: list[str] = field(default_factory=list)
    resolution_methods: dict[str, str] = field(default_factory=dict)
    status: str = "completed"


@dataclass(slots=True)
class DiagnosticCreate:
    """Value object for a persisted diagnostic snapshot."""

    organization_id: str
    file_name: str
    raw_excerpt: str
    metrics: dict[str, Any]
    trigger: str


class SqlEmployeeDirectory:
    """Employee lookups backed by the ``employee_identifiers`` and ``profiles`` tables."""

    def __init__(self, session_factory: sessionmaker[Session] | None = None):
        self._session_factory = session_factory

    def identifiers_for(self, organization_id: str, codes: Sequence[str]) -> Mapping[str, str]:
        if not codes:
            return {}
        stmt = select(EmployeeIdentifier.employee_id_number, EmployeeIdentifier.profile_id).where(
            EmployeeIdentifier.organization_id == organization_id,
            EmployeeIdentifier.employee_id_number.in_(list(codes)),
        )
        with session_scope(self._session_factory) as session:
            return {code: profile_id for code, profile_id in session.execute(stmt)}

    def profiles_for(self, organization_id: str) -> Sequence[ProfileRecord]:
        stmt = select(Profile.id, Profile.full_name, Profile.email).where(
            Profile.organization_id == organization_id
        )
        with session_scope(self._session_factory) as session:
            return [
                ProfileRecord(profile_id=profile_id, full_name=full_name, email=email)
                for profile_id, full_name, email in session.execute(stmt)
            ]


class SqlPunchStore:
    """Punch persistence guarded by the unique (organization, profile, time) constraint.

    Every call runs in its own short transaction, so a failing row never rolls
    back rows written before it.
    """

    def __init__(self, session_factory: sessionmaker[Session] | None = None):
        self._session_factory = session_factory

    def exists(self, organization_id: str, profile_id: str, punch_datetime: datetime) -> bool:
        """Return True when a punch is already stored for the key."""

        stmt = (
            select(AttendancePunch.id)
            .where(
                AttendancePunch.organization_id == organization_id,
                AttendancePunch.profile_id == profile_id,
                AttendancePunch.punch_datetime == punch_datetime,
            )
            .limit(1)
        )
        with session_scope(self._session_factory) as session:
            return session.execute(stmt).first() is not None

    def insert_if_absent(self, row: PunchRowCreate) -> bool:
        """
        Insert ``row`` unless its key already exists.

        Returns:
            True if a row was written, False if it was a duplicate
        """
        values = asdict(row)
        with session_scope(self._session_factory) as session:
            insert_factory = _UPSERT_INSERTS.get(session.get_bind().dialect.name)
            if insert_factory is not None:
                stmt = (
                    insert_factory(AttendancePunch)
                    .values(**values)
                    .on_conflict_do_nothing(index_elements=list(PUNCH_UNIQUE_COLUMNS))
                )
                return session.execute(stmt).rowcount == 1

        # Dialects without ON CONFLICT rely on the constraint raising.
        try:
            with session_scope(self._session_factory) as session:
                session.add(AttendancePunch(**values))
        except IntegrityError:
            if self.exists(row.organization_id, row.profile_id, row.punch_datetime):
                return False
            raise
        return True


class SqlUploadLogSink:
    """Write-once sink for upload summaries."""

    def __init__(self, session_factory: sessionmaker[Session] | None = None):
        self._session_factory = session_factory

    def record(self, log: UploadLogCreate) -> AttendanceUploadLog:
        with session_scope(self._session_factory) as session:
            entry = AttendanceUploadLog(**asdict(log))
            session.add(entry)
            session.flush()
            return entry


class SqlDiagnosticsSink:
    """Write-once sink for diagnostic snapshots."""

    def __init__(self, session_factory: sessionmaker[Session] | None = None):
        self._session_factory = session_factory

    def record(self, diagnostic: DiagnosticCreate) -> AttendanceParseDiagnostic:
        with session_scope(self._session_factory) as session:
            entry = AttendanceParseDiagnostic(**asdict(diagnostic))
            session.add(entry)
            session.flush()
            return entry
