"""Tests for the attendance parse CLI module."""

import json
from pathlib import Path

from click.testing import CliRunner

from punch_ingestor.cli.parse_attendance import parse_attendance, summarize_result
from punch_ingestor.parsing.classifier import parse_attendance_text


def _write(tmp_path: Path, text: str, name: str = "export.txt") -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


class TestSummarizeResult:
    """Test suite for summarize_result."""

    def test_summary_fields(self, summary_export_text: str):
        """Summary carries decision details and distinct codes."""
        summary = summarize_result(parse_attendance_text(summary_export_text))

        assert summary["format"] == "summary"
        assert summary["method"] == "summary_row"
        assert summary["total_parsed"] == 5
        assert summary["employee_codes"] == ["EMP1", "EMP2", "EMP3"]
        assert summary["punches"][0]["punch_datetime"] == "2026-01-01T09:00:00"

    def test_unknown_text(self):
        """Undetected text has no punches and keeps the error."""
        summary = summarize_result(parse_attendance_text("nothing"))

        assert summary["format"] == "unknown"
        assert summary["method"] == "none"
        assert summary["parse_errors"] == ["Could not detect attendance format"]


class TestParseAttendanceCommand:
    """Test suite for the punch-parse command."""

    def test_text_output(self, tmp_path: Path, punch_export_text: str):
        """Formatted output lists the detection and punches."""
        path = _write(tmp_path, punch_export_text)

        result = CliRunner().invoke(parse_attendance, [str(path)])

        assert result.exit_code == 0
        assert "ATTENDANCE PARSE SUMMARY" in result.output
        assert "Format:       punch" in result.output
        assert "2026-03-01T09:02:11" in result.output

    def test_json_output(self, tmp_path: Path, summary_export_text: str):
        """JSON output is machine readable."""
        path = _write(tmp_path, summary_export_text)

        result = CliRunner().invoke(parse_attendance, ["--json", str(path)])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["format"] == "summary"
        assert data["total_parsed"] == 5

    def test_no_punches_exits_non_zero(self, tmp_path: Path, fragmented_export_text: str):
        """Undetected text is reported with a failing exit status."""
        path = _write(tmp_path, fragmented_export_text)

        result = CliRunner().invoke(parse_attendance, [str(path)])

        assert result.exit_code == 1
        assert "Could not detect attendance format" in result.output

    def test_diagnostic_json(self, tmp_path: Path, fragmented_export_text: str):
        """Diagnostic mode prints the report with the input file name."""
        path = _write(tmp_path, fragmented_export_text, name="broken.txt")

        result = CliRunner().invoke(parse_attendance, ["--diagnostic", "--json", str(path)])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["file_name"] == "broken.txt"
        assert data["classification"]["guess"] == "unknown"

    def test_diagnostic_file_name_override(self, tmp_path: Path, punch_export_text: str):
        """--file-name replaces the reported name."""
        path = _write(tmp_path, punch_export_text)

        result = CliRunner().invoke(
            parse_attendance, ["--diagnostic", "--file-name", "march.pdf", str(path)]
        )

        assert result.exit_code == 0
        assert "ATTENDANCE DIAGNOSTIC: march.pdf" in result.output

    def test_missing_file(self):
        """Nonexistent paths are rejected by click."""
        result = CliRunner().invoke(parse_attendance, ["/nonexistent/export.txt"])

        assert result.exit_code != 0
