"""Schemas package initialization."""
from .diagnostics import DiagnosticReport
from .punches import FormatDecision, ParsedPunch, ParseResult
from .requests import (
    AttendanceUploadFailure,
    AttendanceUploadRequest,
    AttendanceUploadResponse,
    DiagnosticResponse,
)

__all__ = [
    "AttendanceUploadFailure",
    "AttendanceUploadRequest",
    "AttendanceUploadResponse",
    "DiagnosticReport",
    "DiagnosticResponse",
    "FormatDecision",
    "ParsedPunch",
    "ParseResult",
]
