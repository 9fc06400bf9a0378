"""Service layer for attendance ingestion."""

from .ingestion import AttendanceIngestionService, build_default_service

__all__ = ["AttendanceIngestionService", "build_default_service"]
