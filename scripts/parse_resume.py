#!/usr/bin/env python3
"""
Parse generated resume text and display the extracted structure.

Usage:
    python scripts/parse_resume.py outs/generated/resume.txt
    python scripts/parse_resume.py outs/generated/resume.txt --json
    python scripts/parse_resume.py outs/generated/resume.txt --diagnostics
    python scripts/parse_resume.py outs/generated/resume.txt --config configs/markers.yaml
"""

import json
import os
import time
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from resume_structurer.contexts.intake.assembler import parse_resume_file
from resume_structurer.contexts.intake.config import load_parser_config
from resume_structurer.contexts.intake.exceptions import ParserConfigError
from resume_structurer.contexts.intake.logger import log_parse_result, setup_intake_logger

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

app = typer.Typer(add_completion=False, help="Parse generated resume text.")


def _echo_entries(heading: str, entries, label_key: str) -> None:
    typer.echo(f"\n=== {heading} ({len(entries)}) ===")
    for entry in entries:
        typer.echo(f"  {entry.get(label_key, '[untitled]')}")
        for key, value in entry.fields.items():
            if key != label_key:
                typer.echo(f"    {key}: {value}")
        for detail in entry.details or ():
            typer.echo(f"    - {detail}")


@app.command()
def main(
    resume_file: Path = typer.Argument(..., help="Generated resume text file"),
    as_json: bool = typer.Option(False, "--json", help="Print the tagged result as JSON"),
    show_diagnostics: bool = typer.Option(
        False, "--diagnostics", "-d", help="List every skipped line"
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML file overriding entry markers"
    ),
):
    """Parse a generated resume and display its sections."""
    if not resume_file.exists():
        typer.echo(f"ERROR: File not found: {resume_file}", err=True)
        raise typer.Exit(1)

    try:
        config = load_parser_config(config_path)
    except ParserConfigError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)

    log_dir = LOGS_PATH / f"parse_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
    setup_intake_logger(log_dir, source=str(resume_file))

    start_time = time.time()
    result = parse_resume_file(resume_file, config)
    log_parse_result(result, time.time() - start_time)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        raise typer.Exit(0 if result.success else 2)

    if not result.success:
        typer.secho("Generator returned an error message:", fg=typer.colors.RED, err=True)
        typer.echo(result.error_message)
        raise typer.Exit(2)

    record = result.record

    typer.echo("=== Personal Info ===")
    for key, value in record.personal_info.items():
        typer.echo(f"  {key}: {value}")

    typer.echo("\n=== Summary ===")
    typer.echo(f"  {record.summary}" if record.summary else "  (none)")

    typer.echo("\n=== Key Achievements ===")
    if record.key_achievements.get("title"):
        typer.echo(f"  {record.key_achievements['title']}")
    for detail in record.key_achievements.details or ():
        typer.echo(f"    - {detail}")

    _echo_entries("Experience", record.experience, "title")
    _echo_entries("Education", record.education, "degree")
    _echo_entries("Projects", record.projects, "title")

    typer.echo(f"\n=== Skills ({len(record.skills)}) ===")
    typer.echo(f"  {', '.join(record.skills)}" if record.skills else "  None")

    if result.diagnostics:
        typer.echo(f"\n=== Diagnostics ({len(result.diagnostics)}) ===")
        if show_diagnostics:
            for diagnostic in result.diagnostics:
                typer.echo(f"  ! {diagnostic}")
        else:
            typer.echo("  (use --diagnostics to list them)")

    typer.secho("\n✓ Parsing successful", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
