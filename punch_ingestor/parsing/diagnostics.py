"""Diagnostic analysis of raw attendance text.

The analyzer describes the input for operators triaging unsupported or
column-broken exports. Its guess never feeds back into the classifier.
"""

from __future__ import annotations

import re

from ..schemas.diagnostics import (
    ClassificationGuess,
    DiagnosticReport,
    ExtractionSnapshot,
    FragmentationMetrics,
    PatternDensity,
)
from ..utils.config import DiagnosticThresholds
from .summary_format import STATUS_TOKENS

DATE_TOKEN = re.compile(r"\d{2}/\d{2}/\d{4}")
TIME_TOKEN = re.compile(r"\d{1,2}:\d{2}")
EMPLOYEE_HEADER = re.compile(r"Employee\s+Code", re.IGNORECASE)
STATUS_TOKEN = re.compile(r"\b(?:" + "|".join(STATUS_TOKENS) + r")\b")
NUMERIC_ONLY = re.compile(r"^\d+$")
TIME_ONLY = re.compile(r"^\d{1,2}:\d{2}(:\d{2})?$")

EXCERPT_CHARS = 1000
SAMPLE_LINES = 50
SAMPLE_TOKENS = 10


def _ratio(count: int, total: int) -> float:
    return round(count / total, 4) if total else 0.0


class DiagnosticAnalyzer:
    """Compute descriptive statistics and a dialect guess over raw text."""

    def __init__(self, thresholds: DiagnosticThresholds | None = None) -> None:
        self.thresholds = thresholds or DiagnosticThresholds()

    def analyze(self, text: str, file_name: str = "unknown") -> DiagnosticReport:
        """Build a :class:`DiagnosticReport` for ``text``."""

        raw_lines = text.split("\n")
        non_empty = [line.strip() for line in raw_lines if line.strip()]

        extraction = ExtractionSnapshot(
            total_characters=len(text),
            first_1000_chars=text[:EXCERPT_CHARS],
            last_1000_chars=text[-EXCERPT_CHARS:] if text else "",
            line_count=len(raw_lines),
            first_50_lines=raw_lines[:SAMPLE_LINES],
        )

        dates = DATE_TOKEN.findall(text)
        times = TIME_TOKEN.findall(text)
        patterns = PatternDensity(
            date_count=len(dates),
            time_count=len(times),
            employee_code_count=len(EMPLOYEE_HEADER.findall(text)),
            status_count=len(STATUS_TOKEN.findall(text)),
            date_samples=dates[:SAMPLE_TOKENS],
            time_samples=times[:SAMPLE_TOKENS],
        )

        fragmentation = self._fragmentation(raw_lines, non_empty)
        classification = self._classify(patterns, fragmentation, len(non_empty))

        return DiagnosticReport(
            file_name=file_name,
            extraction=extraction,
            patterns=patterns,
            fragmentation=fragmentation,
            classification=classification,
        )

    @staticmethod
    def _fragmentation(raw_lines: list[str], non_empty: list[str]) -> FragmentationMetrics:
        lengths = [len(line) for line in non_empty]
        single_token = sum(1 for line in non_empty if len(line.split()) == 1)
        numeric_only = sum(1 for line in non_empty if NUMERIC_ONLY.match(line))
        time_only = sum(1 for line in non_empty if TIME_ONLY.match(line))
        total = len(non_empty)

        return FragmentationMetrics(
            single_token_lines=single_token,
            numeric_only_lines=numeric_only,
            time_only_lines=time_only,
            single_token_ratio=_ratio(single_token, total),
            numeric_only_ratio=_ratio(numeric_only, total),
            time_only_ratio=_ratio(time_only, total),
            avg_line_length=round(sum(lengths) / total) if total else 0,
            max_line_length=max(lengths, default=0),
            min_line_length=min(lengths, default=0),
            empty_line_count=len(raw_lines) - total,
        )

    def _classify(
        self,
        patterns: PatternDensity,
        fragmentation: FragmentationMetrics,
        non_empty_count: int,
    ) -> ClassificationGuess:
        limits = self.thresholds
        signals: list[str] = []
        guess = "unknown"

        if patterns.date_count > limits.summary_min_dates and patterns.time_count > limits.summary_min_times:
            guess = "likely_summary"
            signals.append(
                f"High date density ({patterns.date_count}) + time density ({patterns.time_count})"
            )
        # A header-backed punch export outranks raw date/time density.
        if (
            patterns.employee_code_count > limits.punch_min_headers
            and patterns.time_count > limits.punch_min_times
        ):
            guess = "likely_punch"
            signals.append(
                f"Employee Code headers ({patterns.employee_code_count}) + times ({patterns.time_count})"
            )
        if patterns.status_count > limits.status_min_tokens:
            signals.append(
                f"Status tokens found ({patterns.status_count}): {'/'.join(STATUS_TOKENS)}"
            )
        if non_empty_count and fragmentation.single_token_lines > non_empty_count * limits.fragmentation_ratio:
            signals.append(
                f"HIGH FRAGMENTATION: {fragmentation.single_token_lines}/{non_empty_count} "
                "lines are single-token"
            )
        if fragmentation.time_only_lines > limits.time_only_min_lines:
            signals.append(f"Isolated time values detected: {fragmentation.time_only_lines} lines")
        if fragmentation.numeric_only_lines > limits.numeric_only_min_lines:
            signals.append(f"Numeric-only lines: {fragmentation.numeric_only_lines}")
        if non_empty_count and fragmentation.avg_line_length < limits.short_line_length:
            signals.append(
                f"Very short avg line length ({fragmentation.avg_line_length}) "
                "- likely column-fragmented PDF"
            )

        return ClassificationGuess(guess=guess, confidence_signals=signals)
