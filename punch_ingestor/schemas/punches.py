"""Pydantic schemas for extracted attendance punches."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

PUNCH_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S"

AttendanceFormat = Literal["punch", "summary", "unknown"]


class ParsedPunch(BaseModel):
    """A single punch event extracted from terminal text."""

    model_config = ConfigDict(frozen=True)

    employee_code: str = Field(..., min_length=1, description="Vendor-assigned employee code")
    card_no: str | None = Field(None, description="Optional secondary identifier")
    punch_datetime: str = Field(..., description="Local wall-clock time, YYYY-MM-DDTHH:MM:SS")
    raw_status: str | None = Field(None, description="Vendor status code (P, A, NA, MIS, HD)")
    name: str | None = Field(None, description="Employee name as printed")

    @field_validator("punch_datetime")
    @classmethod
    def _validate_punch_datetime(cls, value: str) -> str:
        # strptime accepts unpadded fields, so the length check enforces padding
        if len(value) != 19:
            raise ValueError("punch_datetime must be a zero-padded YYYY-MM-DDTHH:MM:SS string")
        datetime.strptime(value, PUNCH_DATETIME_FORMAT)
        return value

    def as_datetime(self) -> datetime:
        """Return the punch time as a naive datetime."""

        return datetime.strptime(self.punch_datetime, PUNCH_DATETIME_FORMAT)


class FormatDecision(BaseModel):
    """Explainable outcome of dialect detection."""

    format: AttendanceFormat = Field(..., description="Chosen dialect")
    method: Literal["header", "summary_row", "fallback", "none"] = Field(
        ..., description="Which rule produced the decision"
    )
    scores: dict[str, float] = Field(
        default_factory=dict, description="Confidence score per dialect"
    )
    signals: list[str] = Field(default_factory=list, description="Matcher signals that fired")


class ParseResult(BaseModel):
    """Outcome of extracting punches from one text document."""

    punches: list[ParsedPunch] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    format: AttendanceFormat = "unknown"
    decision: FormatDecision | None = None
