"""Dialect detection and punch extraction for attendance text."""

from .base import BaseExtractor, build_punch_datetime, normalize_lines
from .classifier import FormatClassifier, MatcherResult, parse_attendance_text
from .diagnostics import DiagnosticAnalyzer
from .punch_format import PunchFormatExtractor
from .registry import get_extractor, list_extractors, register_extractor
from .summary_format import SummaryFormatExtractor

__all__ = [
    "BaseExtractor",
    "DiagnosticAnalyzer",
    "FormatClassifier",
    "MatcherResult",
    "PunchFormatExtractor",
    "SummaryFormatExtractor",
    "build_punch_datetime",
    "get_extractor",
    "list_extractors",
    "normalize_lines",
    "parse_attendance_text",
    "register_extractor",
]
