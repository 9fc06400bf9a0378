"""Tests for line normalization, datetime assembly and the punch schema."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from punch_ingestor.parsing.base import build_punch_datetime, normalize_lines
from punch_ingestor.schemas.punches import ParsedPunch


class TestNormalizeLines:
    """Test suite for normalize_lines."""

    def test_crlf_and_blank_lines_removed(self):
        """CRLF endings are normalized and blank lines dropped."""
        assert normalize_lines("a\r\n\r\n  b  \r\n\n") == ["a", "b"]

    def test_tab_runs_collapse_to_single_space(self):
        """Consecutive tabs become one space."""
        assert normalize_lines("01/01/2026\t\tEMP1\t09:00") == ["01/01/2026 EMP1 09:00"]

    def test_empty_text(self):
        """Empty input yields no lines."""
        assert normalize_lines("") == []
        assert normalize_lines("\n \n\t\n") == []


class TestBuildPunchDatetime:
    """Test suite for build_punch_datetime."""

    def test_day_first_slash_date(self):
        """DD/MM/YYYY dates are reordered to ISO."""
        assert build_punch_datetime("01/03/2026", "09:05") == "2026-03-01T09:05:00"

    def test_dash_separated_date(self):
        """DD-MM-YYYY dates are accepted."""
        assert build_punch_datetime("15-12-2025", "18:30") == "2025-12-15T18:30:00"

    def test_single_digit_hour_is_padded(self):
        """Unpadded hours are zero-padded."""
        assert build_punch_datetime("01/01/2026", "9:00") == "2026-01-01T09:00:00"

    def test_seconds_are_kept(self):
        """Explicit seconds survive."""
        assert build_punch_datetime("01/01/2026", "17:30:45") == "2026-01-01T17:30:45"

    @pytest.mark.parametrize(
        ("date_str", "time_str"),
        [("31/02/2026", "09:00"), ("01/13/2026", "09:00"), ("01/01/2026", "25:00")],
    )
    def test_invalid_values_raise(self, date_str: str, time_str: str):
        """Impossible dates and times raise ValueError."""
        with pytest.raises(ValueError):
            build_punch_datetime(date_str, time_str)


class TestParsedPunch:
    """Test suite for the ParsedPunch schema."""

    def test_as_datetime_is_naive(self):
        """Punch times carry no timezone."""
        punch = ParsedPunch(employee_code="1001", punch_datetime="2026-03-01T09:02:11")

        assert punch.as_datetime() == datetime(2026, 3, 1, 9, 2, 11)
        assert punch.as_datetime().tzinfo is None

    def test_unpadded_datetime_rejected(self):
        """Only the zero-padded canonical form is accepted."""
        with pytest.raises(ValidationError):
            ParsedPunch(employee_code="1001", punch_datetime="2026-3-1T9:02:11")

    def test_empty_employee_code_rejected(self):
        """A punch must belong to a code."""
        with pytest.raises(ValidationError):
            ParsedPunch(employee_code="", punch_datetime="2026-03-01T09:02:11")

    def test_punch_is_immutable(self):
        """Parsed punches are frozen."""
        punch = ParsedPunch(employee_code="1001", punch_datetime="2026-03-01T09:02:11")
        with pytest.raises(ValidationError):
            punch.employee_code = "1002"  # type: ignore[misc]
