"""Prometheus metrics definitions for punch_ingestor."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

UPLOAD_ATTEMPTS = Counter(
    "attendance_uploads_total",
    "Total attendance uploads by detected format and outcome.",
    labelnames=("format", "status"),
)

UPLOAD_REJECTIONS = Counter(
    "attendance_upload_rejections_total",
    "Uploads rejected before parsing, grouped by reason.",
    labelnames=("reason",),
)

PUNCHES_INSERTED = Counter(
    "attendance_punches_inserted_total",
    "Total punch rows written to the store.",
)

PUNCHES_DUPLICATE = Counter(
    "attendance_punches_duplicate_total",
    "Total punches skipped because an identical punch already existed.",
)

PUNCH_ROW_ERRORS = Counter(
    "attendance_punch_row_errors_total",
    "Total punch rows that failed to persist.",
)

UNMATCHED_CODES = Counter(
    "attendance_unmatched_codes_total",
    "Total employee codes that could not be resolved to a profile.",
)

DIAGNOSTIC_RUNS = Counter(
    "attendance_diagnostic_runs_total",
    "Diagnostic analyses by trigger and classification guess.",
    labelnames=("trigger", "guess"),
)

PROCESSING_DURATION = Histogram(
    "attendance_processing_duration_seconds",
    "Distribution of upload processing durations in seconds.",
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10, 30, 60),
)


def record_upload_attempt(format: str, status: str) -> None:
    """Increment the upload counter with the supplied labels."""

    UPLOAD_ATTEMPTS.labels(format=format, status=status).inc()


def record_upload_rejection(reason: str) -> None:
    """Increment the rejection counter for the provided reason."""

    UPLOAD_REJECTIONS.labels(reason=reason).inc()


def record_inserted_punches(count: int) -> None:
    PUNCHES_INSERTED.inc(max(count, 0))


def record_duplicate_punches(count: int) -> None:
    PUNCHES_DUPLICATE.inc(max(count, 0))


def record_row_error() -> None:
    PUNCH_ROW_ERRORS.inc()


def record_unmatched_codes(count: int) -> None:
    UNMATCHED_CODES.inc(max(count, 0))


def record_diagnostic_run(trigger: str, guess: str) -> None:
    """Count a diagnostic analysis by what triggered it and what it guessed."""

    DIAGNOSTIC_RUNS.labels(trigger=trigger, guess=guess).inc()


def observe_processing_duration(duration_seconds: float) -> None:
    """Record the upload processing duration in seconds."""

    PROCESSING_DURATION.observe(max(duration_seconds, 0.0))
