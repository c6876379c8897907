#!/usr/bin/env python3
"""
Normalize chat-style application intake into clean application records.

Usage:
    python scripts/normalize_applications.py "Applied for zee5 - sdet role - hr said 12 lpa budget"
    python scripts/normalize_applications.py "stripe, notion, figma for the backend engineer role"
    python scripts/normalize_applications.py --file intake.txt
    python scripts/normalize_applications.py --file payload.json --json-input -o out.json
    python scripts/normalize_applications.py --kind status "Stripe: rejected" "Notion | got an offer"
    python scripts/normalize_applications.py --kind rounds -f rounds.json --json-input
"""

import json
from enum import Enum
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv

from prepdesk.contexts.intake import (
    normalize_applications_for_creation,
    normalize_round_updates_input,
    normalize_status_updates_input,
    try_parse_date_input,
)
from prepdesk.contexts.intake.logger import setup_intake_logger
from prepdesk.contexts.intake.tool_inputs import updates_to_dicts
from prepdesk.utils.logger import session_log_dir

load_dotenv()

app = typer.Typer(
    add_completion=False,
    help="Normalize application intake (one batch per run).",
)


class IntakeKind(str, Enum):
    """Which intake payload the entries hold."""

    APPLICATIONS = "applications"
    STATUS = "status"
    ROUNDS = "rounds"


def _read_entries(file: Path, json_input: bool) -> list:
    text = file.read_text(encoding="utf-8")

    if json_input:
        payload = json.loads(text)
        if isinstance(payload, dict):
            payload = payload.get("applications", [payload])
        if not isinstance(payload, list):
            raise ValueError("JSON input must be an array or an object with 'applications'")
        return payload

    return [line for line in text.splitlines() if line.strip()]


def _normalize(kind: IntakeKind, raw_entries: list, reference) -> list[dict]:
    if kind is IntakeKind.APPLICATIONS:
        applications = normalize_applications_for_creation(raw_entries, base_date=reference)
        return [application.to_dict() for application in applications]

    # A single JSON object may be an {"updates": [...]} envelope
    payload = raw_entries[0] if len(raw_entries) == 1 else raw_entries
    if kind is IntakeKind.STATUS:
        return updates_to_dicts(normalize_status_updates_input(payload))
    return updates_to_dicts(normalize_round_updates_input(payload))


@app.command()
def main(
    entries: Optional[List[str]] = typer.Argument(
        None, help="Raw entries (company text, or 'Company: status' with --kind status)"
    ),
    file: Optional[Path] = typer.Option(
        None, "--file", "-f", help="Read entries from a file (one per line)"
    ),
    json_input: bool = typer.Option(
        False, "--json-input", help="Treat --file as a JSON array of entries"
    ),
    kind: IntakeKind = typer.Option(
        IntakeKind.APPLICATIONS, "--kind", "-k", help="Payload type: new applications or tool updates"
    ),
    base_date: Optional[str] = typer.Option(
        None, "--base-date", help="Reference day for relative dates (default: today)"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write JSON here instead of stdout"
    ),
    log_dir: Optional[Path] = typer.Option(
        None, "--log-dir", help="Session log directory (default: LOGS_PATH/intake_<timestamp>)"
    ),
):
    """
    Normalize one intake batch and print the records as JSON.

    Examples:\n

        $ normalize_applications.py " Google "

        $ normalize_applications.py "Google for SDE2 role" "Meta" --base-date 2026-10-19

        $ normalize_applications.py -f payload.json --json-input -o normalized.json

        $ normalize_applications.py --kind status "Stripe: rejected"
    """
    raw_entries: list = list(entries or [])

    if file is not None:
        if not file.exists():
            typer.secho(f"File not found: {file}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)
        try:
            raw_entries.extend(_read_entries(file, json_input))
        except ValueError as e:
            typer.secho(f"Could not read {file}: {e}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)

    if not raw_entries:
        typer.secho("No entries given (pass arguments or --file)", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)

    reference = None
    if base_date:
        reference = try_parse_date_input(base_date)
        if reference is None:
            typer.secho(f"Could not understand --base-date {base_date!r}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)

    log_dir = log_dir or session_log_dir("intake")
    setup_intake_logger(log_dir, source=str(file) if file else "cli")

    records = _normalize(kind, raw_entries, reference)
    document = json.dumps(records, indent=2)

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(document + "\n", encoding="utf-8")
        typer.secho(f"✓ Wrote {len(records)} {kind.value} record(s) to {output}", fg=typer.colors.GREEN)
    else:
        typer.echo(document)


if __name__ == "__main__":
    app()
