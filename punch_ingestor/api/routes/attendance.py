"""Attendance upload API endpoints."""

import asyncio

from fastapi import APIRouter, Depends

from ...parsing.registry import list_extractors
from ...schemas.requests import (
    AttendanceUploadFailure,
    AttendanceUploadRequest,
    AttendanceUploadResponse,
    DiagnosticResponse,
)
from ...services.ingestion import AttendanceIngestionService
from ..dependencies import get_ingestion_service, require_api_key

router = APIRouter(dependencies=[Depends(require_api_key)])


@router.post(
    "/attendance/parse",
    response_model=AttendanceUploadResponse | AttendanceUploadFailure | DiagnosticResponse,
)
async def parse_attendance(
    request: AttendanceUploadRequest,
    service: AttendanceIngestionService = Depends(get_ingestion_service),
) -> AttendanceUploadResponse | AttendanceUploadFailure | DiagnosticResponse:
    """
    Parse an extracted attendance export and import its punches.

    With ``diagnostic_mode`` set, only the diagnostic report is produced and
    no punches are written.
    """
    # Row inserts are blocking; keep them off the event loop.
    return await asyncio.to_thread(service.ingest, request)


@router.get("/attendance/formats")
async def list_formats() -> dict[str, list[str]]:
    """List the attendance export dialects the parser recognizes."""

    return {"formats": list_extractors()}
