"""Attendance ingestion service wiring parsing, resolution and reconciliation."""

from __future__ import annotations

import time
from typing import Any, Protocol

from ..exceptions import MissingFieldError, PayloadTooLargeError
from ..models.repository import (
    DiagnosticCreate,
    SqlDiagnosticsSink,
    SqlEmployeeDirectory,
    SqlPunchStore,
    SqlUploadLogSink,
    UploadLogCreate,
)
from ..monitoring.metrics import (
    observe_processing_duration,
    record_diagnostic_run,
    record_unmatched_codes,
    record_upload_attempt,
    record_upload_rejection,
)
from ..parsing.classifier import FormatClassifier
from ..parsing.diagnostics import DiagnosticAnalyzer
from ..reconcile.reconciler import PunchReconciler, PunchStore
from ..resolution.identity import EmployeeDirectory, IdentityResolver
from ..schemas.diagnostics import DiagnosticReport
from ..schemas.requests import (
    AttendanceUploadFailure,
    AttendanceUploadRequest,
    AttendanceUploadResponse,
    DiagnosticResponse,
)
from ..utils.config import GlobalSettings, get_settings
from ..utils.logging import log_upload_attempt, setup_logger

logger = setup_logger(__name__, context={"component": "AttendanceIngestion"})

NO_RECORDS_ERROR = "No attendance records could be parsed from the file"
DEFAULT_DIAGNOSTIC_FILE_NAME = "unknown"
DEFAULT_UPLOAD_FILE_NAME = "unknown.pdf"

UploadOutcome = AttendanceUploadResponse | AttendanceUploadFailure | DiagnosticResponse


class UploadLogSink(Protocol):
    def record(self, log: UploadLogCreate) -> Any:
        ...


class DiagnosticsSink(Protocol):
    def record(self, diagnostic: DiagnosticCreate) -> Any:
        ...


def _file_type(file_name: str) -> str:
    return "zip" if file_name.lower().endswith(".zip") else "pdf"


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


class AttendanceIngestionService:
    """
    Turn one extracted attendance export into persisted punches.

    Only rejected input raises. Undetected formats, unmatched codes, failed
    rows and duplicates are all reported in the returned result.
    """

    def __init__(
        self,
        directory: EmployeeDirectory,
        store: PunchStore,
        upload_logs: UploadLogSink,
        diagnostics: DiagnosticsSink,
        *,
        settings: GlobalSettings | None = None,
        classifier: FormatClassifier | None = None,
        analyzer: DiagnosticAnalyzer | None = None,
    ):
        self._settings = settings or get_settings()
        self._classifier = classifier or FormatClassifier()
        self._analyzer = analyzer or DiagnosticAnalyzer(self._settings.diagnostics)
        self._resolver = IdentityResolver(directory)
        self._reconciler = PunchReconciler(store)
        self._upload_logs = upload_logs
        self._diagnostics = diagnostics

    def validate_request(self, request: AttendanceUploadRequest) -> tuple[str, str]:
        """
        Check presence and size of the required fields.

        Raises:
            MissingFieldError: If text_content or organization_id is empty
            PayloadTooLargeError: If text_content exceeds the configured limit
        """
        missing = [
            name
            for name in ("text_content", "organization_id")
            if not getattr(request, name)
        ]
        if missing:
            record_upload_rejection("missing_fields")
            raise MissingFieldError(missing)

        text = request.text_content or ""
        limit = self._settings.parsing.max_text_chars
        if len(text) > limit:
            record_upload_rejection("too_large")
            raise PayloadTooLargeError(len(text), limit)

        return text, request.organization_id or ""

    def ingest(self, request: AttendanceUploadRequest) -> UploadOutcome:
        """Run diagnostics or the full import for ``request``."""

        text, organization_id = self.validate_request(request)
        started = time.perf_counter()

        if request.diagnostic_mode:
            file_name = request.file_name or DEFAULT_DIAGNOSTIC_FILE_NAME
            report = self.diagnose(text, organization_id, file_name, trigger="requested")
            log_upload_attempt(
                logger,
                organization_id=organization_id,
                file_name=file_name,
                duration_ms=_elapsed_ms(started),
                status="diagnostic",
                summary={
                    "guess": report.classification.guess,
                    "dates": report.patterns.date_count,
                    "times": report.patterns.time_count,
                    "employee_codes": report.patterns.employee_code_count,
                },
            )
            return DiagnosticResponse(diagnostic=report)

        try:
            return self._import(text, organization_id, request)
        finally:
            observe_processing_duration(time.perf_counter() - started)

    def diagnose(
        self,
        text: str,
        organization_id: str,
        file_name: str,
        *,
        trigger: str,
    ) -> DiagnosticReport:
        """Analyze ``text`` and store the snapshot; a failing sink only logs."""

        report = self._analyzer.analyze(text, file_name)
        record_diagnostic_run(trigger, report.classification.guess)

        snapshot = DiagnosticCreate(
            organization_id=organization_id,
            file_name=file_name,
            raw_excerpt=text[: self._settings.parsing.diagnostic_excerpt_chars],
            metrics=report.metrics(),
            trigger=trigger,
        )
        try:
            self._diagnostics.record(snapshot)
        except Exception as exc:
            logger.warning(
                "Failed to store diagnostic snapshot: %s",
                exc,
                extra={"organization_id": organization_id, "file_name": file_name},
            )
        return report

    def _import(
        self,
        text: str,
        organization_id: str,
        request: AttendanceUploadRequest,
    ) -> AttendanceUploadResponse | AttendanceUploadFailure:
        started = time.perf_counter()
        file_name = request.file_name or DEFAULT_UPLOAD_FILE_NAME
        result = self._classifier.classify(text)

        if not result.punches:
            report = self.diagnose(
                text,
                organization_id,
                request.file_name or DEFAULT_DIAGNOSTIC_FILE_NAME,
                trigger="zero_punches",
            )
            record_upload_attempt(result.format, "failed")
            log_upload_attempt(
                logger,
                organization_id=organization_id,
                file_name=file_name,
                duration_ms=_elapsed_ms(started),
                status="failed",
                summary={
                    "format": result.format,
                    "parse_errors": result.errors,
                    "guess": report.classification.guess,
                    "signals": report.classification.confidence_signals,
                },
            )
            return AttendanceUploadFailure(
                error=NO_RECORDS_ERROR,
                parse_errors=result.errors,
                format=result.format,
            )

        outcome = self._resolver.resolve(organization_id, result.punches)
        record_unmatched_codes(len(outcome.unmatched_codes))

        summary = self._reconciler.reconcile(
            organization_id, result.punches, outcome.code_to_profile
        )
        parse_errors = [*result.errors, *summary.errors]

        upload_log = UploadLogCreate(
            organization_id=organization_id,
            uploaded_by=request.uploaded_by,
            file_name=file_name,
            file_type=_file_type(file_name),
            batch_id=summary.batch_id,
            format=result.format,
            total_parsed=len(result.punches),
            total_punches=summary.inserted,
            matched_employees=outcome.matched_count,
            unmatched_codes=outcome.unmatched_codes,
            duplicate_punches=summary.duplicates,
            parse_errors=list(parse_errors),
            resolution_methods=outcome.methods,
        )
        try:
            self._upload_logs.record(upload_log)
        except Exception as exc:
            parse_errors.append(f"Upload log error: {exc}")
            logger.error(
                "Failed to write upload log: %s",
                exc,
                extra={"organization_id": organization_id, "batch_id": summary.batch_id},
            )

        record_upload_attempt(result.format, "success")
        log_upload_attempt(
            logger,
            organization_id=organization_id,
            file_name=file_name,
            duration_ms=_elapsed_ms(started),
            status="success",
            batch_id=summary.batch_id,
            summary={
                "format": result.format,
                "total_parsed": len(result.punches),
                "inserted": summary.inserted,
                "duplicates": summary.duplicates,
                "unmatched": outcome.unmatched_codes,
                "errors": len(parse_errors),
            },
        )

        return AttendanceUploadResponse(
            format=result.format,
            batch_id=summary.batch_id,
            total_parsed=len(result.punches),
            inserted=summary.inserted,
            duplicates_skipped=summary.duplicates,
            matched_employees=outcome.matched_count,
            unmatched_codes=outcome.unmatched_codes,
            parse_errors=parse_errors,
        )


def build_default_service(settings: GlobalSettings | None = None) -> AttendanceIngestionService:
    """Create a service backed by the SQLAlchemy collaborators."""

    return AttendanceIngestionService(
        directory=SqlEmployeeDirectory(),
        store=SqlPunchStore(),
        upload_logs=SqlUploadLogSink(),
        diagnostics=SqlDiagnosticsSink(),
        settings=settings,
    )
