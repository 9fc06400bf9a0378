"""CLI utility for previewing attendance parsing without touching the database."""
import json
from pathlib import Path
from typing import Any

import click

from punch_ingestor.parsing.classifier import FormatClassifier
from punch_ingestor.parsing.diagnostics import DiagnosticAnalyzer
from punch_ingestor.schemas.diagnostics import DiagnosticReport
from punch_ingestor.schemas.punches import ParseResult
from punch_ingestor.utils.config import get_settings

PREVIEW_ROWS = 20


def summarize_result(result: ParseResult) -> dict[str, Any]:
    """Build a JSON-serializable summary of a parse result."""
    codes = list(dict.fromkeys(punch.employee_code for punch in result.punches))
    decision = result.decision
    return {
        "format": result.format,
        "method": decision.method if decision else None,
        "scores": decision.scores if decision else {},
        "signals": decision.signals if decision else [],
        "total_parsed": len(result.punches),
        "employee_codes": codes,
        "parse_errors": result.errors,
        "punches": [punch.model_dump() for punch in result.punches],
    }


def print_summary(result: ParseResult) -> None:
    """Print formatted summary of a parse result."""
    summary = summarize_result(result)

    click.echo("\n" + "=" * 70)
    click.echo("ATTENDANCE PARSE SUMMARY")
    click.echo("=" * 70)

    click.echo("\nDETECTION")
    click.echo("-" * 70)
    click.echo(f"  Format:       {summary['format']}")
    click.echo(f"  Method:       {summary['method'] or 'N/A'}")
    for dialect, score in summary["scores"].items():
        click.echo(f"  Score {dialect + ':':<8}{score}")
    for signal in summary["signals"]:
        click.echo(f"    • {signal}")

    click.echo("\nPUNCHES")
    click.echo("-" * 70)
    click.echo(f"  Total Parsed:     {summary['total_parsed']}")
    click.echo(f"  Employee Codes:   {len(summary['employee_codes'])}")
    for punch in result.punches[:PREVIEW_ROWS]:
        status = f" [{punch.raw_status}]" if punch.raw_status else ""
        click.echo(f"  {punch.employee_code:<12} {punch.punch_datetime}{status}")
    remaining = len(result.punches) - PREVIEW_ROWS
    if remaining > 0:
        click.echo(f"  ... {remaining} more")

    if result.errors:
        click.echo("\n  Errors:")
        for error in result.errors:
            click.echo(f"    • {error}")

    click.echo("\n" + "=" * 70 + "\n")


def print_diagnostic(report: DiagnosticReport) -> None:
    """Print formatted diagnostic report."""
    click.echo("\n" + "=" * 70)
    click.echo(f"ATTENDANCE DIAGNOSTIC: {report.file_name}")
    click.echo("=" * 70)
    click.echo(f"  Characters:       {report.extraction.total_characters:,}")
    click.echo(f"  Lines:            {report.extraction.line_count}")
    click.echo(f"  Dates / Times:    {report.patterns.date_count} / {report.patterns.time_count}")
    click.echo(f"  Employee Headers: {report.patterns.employee_code_count}")
    click.echo(f"  Status Tokens:    {report.patterns.status_count}")
    click.echo(f"  Avg Line Length:  {report.fragmentation.avg_line_length}")
    click.echo(f"\n  Guess: {report.classification.guess}")
    for signal in report.classification.confidence_signals:
        click.echo(f"    • {signal}")
    click.echo("\n" + "=" * 70 + "\n")


@click.command()
@click.argument("text_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--diagnostic",
    is_flag=True,
    help="Print the diagnostic report instead of extracting punches",
)
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    help="Output as JSON instead of formatted text",
)
@click.option(
    "--file-name",
    default=None,
    help="File name reported in diagnostics (defaults to the input file name)",
)
def parse_attendance(
    text_path: str,
    diagnostic: bool,
    output_json: bool,
    file_name: str | None,
) -> None:
    """
    Parse an extracted attendance export and show what would be imported.

    Nothing is written to the database; employee codes are not resolved.

    Examples:

        punch-parse export.txt

        punch-parse --diagnostic export.txt

        punch-parse --json export.txt
    """
    try:
        text = Path(text_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        click.echo(f"Error reading {text_path}: {e}", err=True)
        raise click.Abort()

    if diagnostic:
        settings = get_settings()
        report = DiagnosticAnalyzer(settings.diagnostics).analyze(
            text, file_name or Path(text_path).name
        )
        if output_json:
            click.echo(json.dumps(report.model_dump(), indent=2))
        else:
            print_diagnostic(report)
        return

    result = FormatClassifier().classify(text)
    if output_json:
        click.echo(json.dumps(summarize_result(result), indent=2))
    else:
        print_summary(result)

    if not result.punches:
        raise SystemExit(1)


if __name__ == "__main__":
    parse_attendance()
