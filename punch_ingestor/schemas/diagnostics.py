"""Pydantic schemas for diagnostic reports over raw attendance text."""

from typing import Literal

from pydantic import BaseModel, Field


class ExtractionSnapshot(BaseModel):
    """Raw extraction snapshot of the submitted text."""

    total_characters: int
    first_1000_chars: str
    last_1000_chars: str
    line_count: int
    first_50_lines: list[str] = Field(default_factory=list)


class PatternDensity(BaseModel):
    """Counts of date, time, header and status tokens."""

    date_count: int
    time_count: int
    employee_code_count: int
    status_count: int
    date_samples: list[str] = Field(default_factory=list)
    time_samples: list[str] = Field(default_factory=list)


class FragmentationMetrics(BaseModel):
    """Line fragmentation metrics over non-empty lines."""

    single_token_lines: int
    numeric_only_lines: int
    time_only_lines: int
    single_token_ratio: float
    numeric_only_ratio: float
    time_only_ratio: float
    avg_line_length: int
    max_line_length: int
    min_line_length: int
    empty_line_count: int


class ClassificationGuess(BaseModel):
    """Probabilistic dialect guess with supporting signals."""

    guess: Literal["likely_summary", "likely_punch", "unknown"]
    confidence_signals: list[str] = Field(default_factory=list)


class DiagnosticReport(BaseModel):
    """Descriptive snapshot of raw input used for triage."""

    file_name: str
    extraction: ExtractionSnapshot
    patterns: PatternDensity
    fragmentation: FragmentationMetrics
    classification: ClassificationGuess

    def metrics(self) -> dict[str, object]:
        """Return the subset persisted with diagnostic snapshots."""

        return {
            "extraction": {
                "total_characters": self.extraction.total_characters,
                "line_count": self.extraction.line_count,
            },
            "patterns": self.patterns.model_dump(),
            "fragmentation": self.fragmentation.model_dump(),
            "classification": self.classification.model_dump(),
        }
