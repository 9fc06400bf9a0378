"""Dialect detection for extracted attendance text.

Detection is a set of named pattern matchers. Each matcher scores one dialect
and reports the signals it saw, so the final decision can be explained and
tested without running an extractor.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from ..schemas.punches import FormatDecision, ParseResult
from .base import normalize_lines
from .registry import get_extractor
from .summary_format import STATUS_TOKENS

PUNCH_HEADER = re.compile(r"Employee\s*Code|Punch\s*Records", re.IGNORECASE)
SUMMARY_DATE_PREFIX = re.compile(r"^\d{2}/\d{2}/\d{4}")
STATUS_TOKEN = re.compile(r"\b(" + "|".join(STATUS_TOKENS) + r")\b")
TIME_TOKEN = re.compile(r"\d{1,2}:\d{2}")

UNDETECTED_ERROR = "Could not detect attendance format"


@dataclass(frozen=True)
class MatcherResult:
    """Score a single matcher assigned to its dialect."""

    matcher: str
    dialect: str
    score: float
    signals: list[str] = field(default_factory=list)


PatternMatcher = Callable[[Sequence[str]], MatcherResult]


def match_punch_headers(lines: Sequence[str]) -> MatcherResult:
    """Score the punch dialect by ``Employee Code`` / ``Punch Records`` headers."""

    hits = [number for number, line in enumerate(lines, start=1) if PUNCH_HEADER.search(line)]
    if not hits:
        return MatcherResult("punch_header", "punch", 0.0)
    return MatcherResult(
        "punch_header",
        "punch",
        1.0,
        [f"punch_header: {len(hits)} header line(s), first at line {hits[0]}"],
    )


def is_summary_row(line: str) -> bool:
    """Return True when a line carries a leading date, a status and a time."""

    return bool(
        SUMMARY_DATE_PREFIX.match(line)
        and STATUS_TOKEN.search(line)
        and TIME_TOKEN.search(line)
    )


def match_summary_rows(lines: Sequence[str]) -> MatcherResult:
    """Score the summary dialect by rows with co-occurring date, status and time."""

    hits = sum(1 for line in lines if is_summary_row(line))
    if not hits:
        return MatcherResult("summary_row", "summary", 0.0)
    # Any co-occurrence is a decision; density only raises confidence.
    score = round(0.5 + 0.5 * hits / len(lines), 4)
    return MatcherResult(
        "summary_row",
        "summary",
        score,
        [f"summary_row: {hits}/{len(lines)} lines with date, status and time"],
    )


DEFAULT_MATCHERS: tuple[PatternMatcher, ...] = (match_punch_headers, match_summary_rows)


class FormatClassifier:
    """Decide which extraction dialect applies and run it."""

    def __init__(self, matchers: Sequence[PatternMatcher] = DEFAULT_MATCHERS) -> None:
        self._matchers = tuple(matchers)

    def score(self, lines: Sequence[str]) -> list[MatcherResult]:
        """Run every matcher over normalized lines."""

        return [matcher(lines) for matcher in self._matchers]

    def decide(self, lines: Sequence[str]) -> FormatDecision:
        """
        Return the dialect chosen by the matchers alone.

        Header evidence wins over summary rows. When nothing scores, the
        decision is ``unknown`` with method ``fallback`` so callers know that
        trial extraction is still required.
        """
        results = self.score(lines)
        scores: dict[str, float] = {}
        signals: list[str] = []
        for result in results:
            scores[result.dialect] = max(scores.get(result.dialect, 0.0), result.score)
            signals.extend(result.signals)

        if scores.get("punch", 0.0) > 0:
            return FormatDecision(format="punch", method="header", scores=scores, signals=signals)
        if scores.get("summary", 0.0) > 0:
            return FormatDecision(
                format="summary", method="summary_row", scores=scores, signals=signals
            )
        return FormatDecision(format="unknown", method="fallback", scores=scores, signals=signals)

    def classify(self, text: str) -> ParseResult:
        """
        Detect the dialect of ``text`` and extract its punches.

        Args:
            text: Full extracted text of one export

        Returns:
            ParseResult carrying the decision that produced it
        """
        lines = normalize_lines(text)
        decision = self.decide(lines)

        if decision.format != "unknown":
            result = get_extractor(decision.format)().extract(lines)
            return result.model_copy(update={"decision": decision})

        for dialect in ("summary", "punch"):
            result = get_extractor(dialect)().extract(lines)
            if result.punches:
                fallback = decision.model_copy(
                    update={
                        "format": dialect,
                        "signals": [
                            *decision.signals,
                            f"fallback: {dialect} extraction yielded {len(result.punches)} punch(es)",
                        ],
                    }
                )
                return result.model_copy(update={"decision": fallback})

        return ParseResult(
            punches=[],
            errors=[UNDETECTED_ERROR],
            format="unknown",
            decision=decision.model_copy(update={"method": "none"}),
        )


def parse_attendance_text(text: str) -> ParseResult:
    """Classify and extract ``text`` with the default matchers."""

    return FormatClassifier().classify(text)
