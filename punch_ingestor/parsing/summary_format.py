"""Extractor for daily summary exports with one in/out row per employee-day."""

from __future__ import annotations

import re

from ..schemas.punches import ParsedPunch, ParseResult
from .base import BaseExtractor, build_punch_datetime

STATUS_TOKENS = ("P", "A", "NA", "MIS", "HD")
_STATUS = r"(" + "|".join(STATUS_TOKENS) + r")\b"
_TIME = r"(\d{1,2}:\d{2})"

# date code name card in out <two more times> shift-label shift-range status
FULL_ROW = re.compile(
    r"^(\d{2}/\d{2}/\d{4})\s+(\w+)\s+(.+?)\s+(\d+)\s+"
    + _TIME + r"\s+" + _TIME + r"\s+" + _TIME + r"\s+" + _TIME
    + r"\s+(\w+)\s+(\d{2}:\d{2}-\d{2}:\d{2})\s+" + _STATUS
)
SIMPLE_ROW = re.compile(r"^(\d{2}/\d{2}/\d{4})\s+(\w+)\s+" + _TIME + r"\s+" + _TIME + r"\s+" + _STATUS)

NOT_CLOCKED_OUT = "00:00"


def _is_not_clocked_out(out_time: str) -> bool:
    return out_time.zfill(5) == NOT_CLOCKED_OUT


class SummaryFormatExtractor(BaseExtractor):
    """Stateless per-line extractor producing in/out punch pairs."""

    format_name = "summary"

    def extract(self, lines: list[str]) -> ParseResult:
        punches: list[ParsedPunch] = []
        errors: list[str] = []

        for line_number, line in enumerate(lines, start=1):
            full = FULL_ROW.match(line)
            if full:
                date_str, code, name, card_no, in_time, out_time = full.groups()[:6]
                status = full.group(11)
                fields = {
                    "employee_code": code,
                    "card_no": card_no,
                    "name": name.strip(),
                    "raw_status": status,
                }
            else:
                simple = SIMPLE_ROW.match(line)
                if simple is None:
                    continue
                date_str, code, in_time, out_time, status = simple.groups()
                fields = {"employee_code": code, "raw_status": status}

            times = [in_time]
            if not _is_not_clocked_out(out_time):
                times.append(out_time)

            # Each time stands alone; a bad out-time keeps the in-punch.
            invalid = False
            for value in times:
                try:
                    stamp = build_punch_datetime(date_str, value)
                except ValueError:
                    invalid = True
                    continue
                punches.append(ParsedPunch(punch_datetime=stamp, **fields))

            if invalid:
                errors.append(f"Line {line_number}: invalid date/time on row for {code}")

        return ParseResult(punches=punches, errors=errors, format=self.format_name)
