"""Tests for the diagnostic analyzer."""

from __future__ import annotations

from punch_ingestor.parsing.diagnostics import DiagnosticAnalyzer
from punch_ingestor.utils.config import DiagnosticThresholds


def _summary_rows(count: int) -> str:
    return "\n".join(
        f"{day % 28 + 1:02d}/01/2026 EMP{day} 09:00 18:00 P" for day in range(count)
    )


def test_fragmented_text_signals(fragmented_export_text: str) -> None:
    """Column-broken text is flagged with every fragmentation signal."""

    report = DiagnosticAnalyzer().analyze(fragmented_export_text, "broken.pdf")

    assert report.file_name == "broken.pdf"
    assert report.classification.guess == "unknown"
    assert report.classification.confidence_signals == [
        "Status tokens found (12): P/A/NA/MIS/HD",
        "HIGH FRAGMENTATION: 37/37 lines are single-token",
        "Isolated time values detected: 12 lines",
        "Numeric-only lines: 12",
        "Very short avg line length (3) - likely column-fragmented PDF",
    ]
    assert report.fragmentation.single_token_ratio == 1.0
    assert report.fragmentation.empty_line_count == 1
    assert report.extraction.line_count == 38


def test_dense_dates_and_times_guess_summary() -> None:
    """Many dates and times suggest the summary dialect."""

    report = DiagnosticAnalyzer().analyze(_summary_rows(21))

    assert report.classification.guess == "likely_summary"
    assert report.classification.confidence_signals[0] == (
        "High date density (21) + time density (42)"
    )
    assert report.patterns.date_samples[:2] == ["01/01/2026", "02/01/2026"]
    assert len(report.patterns.time_samples) == 10


def test_headers_outrank_date_density() -> None:
    """Employee Code headers with enough times suggest the punch dialect."""

    blocks = []
    for code in range(6):
        blocks.append(f"Employee Code: {code}")
        blocks.extend(f"0{day + 1}/02/2026 0{day}:15" for day in range(4))
    text = "\n".join(blocks)

    report = DiagnosticAnalyzer().analyze(text)

    assert report.patterns.employee_code_count == 6
    assert report.patterns.time_count == 24
    assert report.classification.guess == "likely_punch"
    assert "Employee Code headers (6) + times (24)" in report.classification.confidence_signals


def test_thresholds_are_configurable(summary_export_text: str) -> None:
    """Lower thresholds let a small export reach a guess."""

    thresholds = DiagnosticThresholds(summary_min_dates=1, summary_min_times=1)

    report = DiagnosticAnalyzer(thresholds).analyze(summary_export_text)

    assert report.classification.guess == "likely_summary"


def test_empty_text() -> None:
    """Empty input produces zeroed metrics and no signals."""

    report = DiagnosticAnalyzer().analyze("")

    assert report.extraction.total_characters == 0
    assert report.extraction.last_1000_chars == ""
    assert report.fragmentation.avg_line_length == 0
    assert report.classification.guess == "unknown"
    assert report.classification.confidence_signals == []


def test_excerpts_are_bounded() -> None:
    """Snapshot excerpts are limited to the first and last 1000 characters."""

    text = "a" * 1500 + "\n" + "b" * 1500

    report = DiagnosticAnalyzer().analyze(text)

    assert report.extraction.first_1000_chars == "a" * 1000
    assert report.extraction.last_1000_chars == "b" * 1000
    assert report.extraction.first_50_lines == ["a" * 1500, "b" * 1500]


def test_metrics_subset_for_persistence(punch_export_text: str) -> None:
    """Persisted metrics omit raw excerpts."""

    metrics = DiagnosticAnalyzer().analyze(punch_export_text).metrics()

    assert set(metrics) == {"extraction", "patterns", "fragmentation", "classification"}
    assert set(metrics["extraction"]) == {"total_characters", "line_count"}
