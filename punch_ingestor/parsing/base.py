"""Base extractor abstract class and shared text helpers."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from datetime import datetime
from typing import ClassVar

from ..schemas.punches import PUNCH_DATETIME_FORMAT, AttendanceFormat, ParseResult

_TAB_RUN = re.compile(r"\t+")


def normalize_lines(text: str) -> list[str]:
    """Normalize line endings and tabs, returning trimmed non-empty lines."""

    normalized = _TAB_RUN.sub(" ", text.replace("\r\n", "\n"))
    return [line.strip() for line in normalized.split("\n") if line.strip()]


def build_punch_datetime(date_str: str, time_str: str) -> str:
    """
    Combine a ``DD/MM/YYYY`` (or ``DD-MM-YYYY``) date and an ``H:MM[:SS]`` time.

    Args:
        date_str: Day-first date as printed by the terminal
        time_str: Clock time, hours optionally unpadded

    Returns:
        Zero-padded ``YYYY-MM-DDTHH:MM:SS`` string

    Raises:
        ValueError: If the digits do not form a real calendar date and time
    """
    day, month, year = date_str.replace("-", "/").split("/")
    parts = time_str.split(":")
    hours, minutes = parts[0], parts[1]
    seconds = parts[2] if len(parts) > 2 else "00"

    value = f"{year}-{month}-{day}T{hours.zfill(2)}:{minutes}:{seconds}"
    datetime.strptime(value, PUNCH_DATETIME_FORMAT)
    return value


class BaseExtractor(ABC):
    """
    Abstract base class for all dialect extractors.

    Each extractor turns normalized lines into a :class:`ParseResult` for one
    terminal export dialect.
    """

    format_name: ClassVar[AttendanceFormat]

    @abstractmethod
    def extract(self, lines: list[str]) -> ParseResult:
        """
        Extract punches from normalized lines.

        Args:
            lines: Trimmed, non-empty lines from :func:`normalize_lines`

        Returns:
            ParseResult tagged with this extractor's format
        """
        pass

    def extract_text(self, text: str) -> ParseResult:
        """Normalize raw text and run :meth:`extract` over it."""

        return self.extract(normalize_lines(text))
