"""Read models for the employee lookups used during code resolution."""

from __future__ import annotations

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class Profile(Base):
    """Internal employee profile."""

    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    organization_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    full_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)


class EmployeeIdentifier(Base):
    """Vendor employee number registered for a profile."""

    __tablename__ = "employee_identifiers"
    __table_args__ = (
        UniqueConstraint("organization_id", "employee_id_number", name="uq_employee_identifier"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    organization_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    profile_id: Mapped[str] = mapped_column(String(64), nullable=False)
    employee_id_number: Mapped[str] = mapped_column(String(128), nullable=False)
