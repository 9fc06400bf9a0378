"""Request and response schemas for the attendance upload endpoint."""

from typing import Literal

from pydantic import BaseModel, Field

from .diagnostics import DiagnosticReport
from .punches import AttendanceFormat


class AttendanceUploadRequest(BaseModel):
    """Request schema for parsing an extracted attendance export."""

    # Presence is checked by the service so that missing fields map to a 400.
    text_content: str | None = Field(None, description="Plain text extracted from the export")
    organization_id: str | None = Field(None, description="Organization owning the punches")
    file_name: str | None = Field(None, description="Original file name, for audit only")
    diagnostic_mode: bool = Field(False, description="Run diagnostics instead of importing")
    uploaded_by: str | None = Field(None, description="Caller identity recorded in the upload log")


class AttendanceUploadResponse(BaseModel):
    """Batch result of a successful import."""

    success: Literal[True] = True
    format: AttendanceFormat
    batch_id: str
    total_parsed: int
    inserted: int
    duplicates_skipped: int
    matched_employees: int
    unmatched_codes: list[str] = Field(default_factory=list)
    parse_errors: list[str] = Field(default_factory=list)


class AttendanceUploadFailure(BaseModel):
    """Structured failure returned when no punches could be parsed."""

    success: Literal[False] = False
    error: str
    parse_errors: list[str] = Field(default_factory=list)
    format: AttendanceFormat


class DiagnosticResponse(BaseModel):
    """Response returned when diagnostic mode is requested."""

    success: Literal[True] = True
    diagnostic_mode: Literal[True] = True
    diagnostic: DiagnosticReport
