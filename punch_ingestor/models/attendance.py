"""SQLAlchemy models for attendance punches and upload audit records."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AttendancePunch(Base):
    """One biometric punch attributed to a profile."""

    __tablename__ = "attendance_punches"
    __table_args__ = (
        UniqueConstraint(
            "organization_id",
            "profile_id",
            "punch_datetime",
            name="uq_attendance_punch_org_profile_time",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    organization_id: Mapped[str] = mapped_column(String(64), nullable=False)
    profile_id: Mapped[str] = mapped_column(String(64), nullable=False)
    employee_code: Mapped[str] = mapped_column(String(128), nullable=False)
    card_no: Mapped[str | None] = mapped_column(String(128), nullable=True)
    # Naive wall-clock time as printed by the terminal.
    punch_datetime: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    punch_source: Mapped[str] = mapped_column(String(32), nullable=False, default="upload")
    raw_status: Mapped[str | None] = mapped_column(String(16), nullable=True)
    upload_batch_id: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return (
            f"<AttendancePunch id={self.id} profile={self.profile_id} "
            f"at={self.punch_datetime.isoformat()}>"
        )


class AttendanceUploadLog(Base):
    """Summary of one import call; written once, never updated."""

    __tablename__ = "attendance_upload_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    organization_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    uploaded_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    file_name: Mapped[str] = mapped_column(String(512), nullable=False)
    file_type: Mapped[str] = mapped_column(String(16), nullable=False, default="pdf")
    batch_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    format: Mapped[str] = mapped_column(String(16), nullable=False)
    total_parsed: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_punches: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    matched_employees: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    unmatched_codes: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    duplicate_punches: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    parse_errors: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    resolution_methods: Mapped[dict[str, str]] = mapped_column(JSON, nullable=False, default=dict)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="completed")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )


class AttendanceParseDiagnostic(Base):
    """Diagnostic snapshot of an export, kept for operator triage."""

    __tablename__ = "attendance_parse_diagnostics"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    organization_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    file_name: Mapped[str] = mapped_column(String(512), nullable=False)
    raw_excerpt: Mapped[str] = mapped_column(Text, nullable=False, default="")
    metrics: Mapped[dict[str, object]] = mapped_column(JSON, nullable=False)
    trigger: Mapped[str] = mapped_column(String(32), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )
