"""Extractor for punch-record exports grouped under employee header blocks."""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..schemas.punches import ParsedPunch, ParseResult
from .base import BaseExtractor, build_punch_datetime

COMBINED_HEADER = re.compile(
    r"Employee\s*Code\s*[:\-]\s*(\w+).*?Name\s*[:\-]\s*(.+?)"
    r"(?:\s+Card\s*No\s*[:\-]\s*(\w+))?$",
    re.IGNORECASE,
)
SIMPLE_HEADER = re.compile(r"Employee\s*Code\s*[:\-]\s*(\w+)", re.IGNORECASE)
NAME_FIELD = re.compile(r"Name\s*[:\-]\s*(.+?)(?:\s+Card|$)", re.IGNORECASE)
DATE_TIME_PAIR = re.compile(r"(\d{2}[/-]\d{2}[/-]\d{4})\s+(\d{1,2}:\d{2}(?::\d{2})?)")


@dataclass(frozen=True)
class NoActiveEmployee:
    """No header seen yet; punch lines cannot be attributed."""


@dataclass(frozen=True)
class ActiveEmployee:
    """Header block currently in effect for subsequent punch lines."""

    code: str
    name: str | None = None
    card_no: str | None = None


ExtractorState = NoActiveEmployee | ActiveEmployee


def next_state(state: ExtractorState, line: str) -> ExtractorState | None:
    """
    Return the state after a header line, or ``None`` if ``line`` is no header.

    The combined header replaces every field. The simple header replaces the
    code, and the name only when one is printed on the same line.
    """
    combined = COMBINED_HEADER.search(line)
    if combined:
        return ActiveEmployee(
            code=combined.group(1).strip(),
            name=combined.group(2).strip() or None,
            card_no=(combined.group(3) or "").strip() or None,
        )

    simple = SIMPLE_HEADER.search(line)
    if simple is None:
        return None

    previous = state if isinstance(state, ActiveEmployee) else ActiveEmployee(code="")
    name_match = NAME_FIELD.search(line)
    name = name_match.group(1).strip() if name_match else previous.name
    return ActiveEmployee(code=simple.group(1).strip(), name=name or None, card_no=previous.card_no)


class PunchFormatExtractor(BaseExtractor):
    """Line scanner emitting one punch per date/time pair under the active header."""

    format_name = "punch"

    def extract(self, lines: list[str]) -> ParseResult:
        punches: list[ParsedPunch] = []
        errors: list[str] = []
        state: ExtractorState = NoActiveEmployee()

        for line_number, line in enumerate(lines, start=1):
            header_state = next_state(state, line)
            if header_state is not None:
                state = header_state
                continue

            if not isinstance(state, ActiveEmployee):
                continue

            match = DATE_TIME_PAIR.search(line)
            if match is None:
                continue

            try:
                punch_datetime = build_punch_datetime(match.group(1), match.group(2))
            except ValueError:
                errors.append(
                    f"Line {line_number}: invalid date/time "
                    f"'{match.group(1)} {match.group(2)}' for {state.code}"
                )
                continue

            punches.append(
                ParsedPunch(
                    employee_code=state.code,
                    card_no=state.card_no,
                    punch_datetime=punch_datetime,
                    name=state.name,
                )
            )

        return ParseResult(punches=punches, errors=errors, format=self.format_name)
