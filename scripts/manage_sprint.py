#!/usr/bin/env python3
"""
Command-line interface for interview prep sprints.

Sprints are stored as JSON documents in the persisted shape (camelCase keys).

Commands:
    generate - Generate a sprint for an application and interview date
    complete - Mark a task done (or undone) in a sprint file
    summary  - Show progress and the day-by-day plan of a sprint file
"""

from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from prepdesk.contexts.intake.date_parsing import try_parse_date_input
from prepdesk.contexts.prep import (
    InvalidInterviewDateError,
    InvalidSprintStructureError,
    InvalidTaskPathError,
    RoleType,
    Sprint,
    generate_sprint,
    set_task_completion,
    summarize_progress,
)
from prepdesk.contexts.prep.logger import setup_prep_logger
from prepdesk.utils.logger import session_log_dir
from prepdesk.utils.text_processing import truncate_display
from prepdesk.utils.timestamp import format_timestamp

load_dotenv()

app = typer.Typer(
    add_completion=False,
    help="Generate and track interview prep sprints",
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _setup_logging(log_dir: Optional[Path], action: str) -> None:
    log_dir = log_dir or session_log_dir("sprint")
    setup_prep_logger(log_dir, action=action)


def _load_sprint(sprint_file: Path) -> Sprint:
    if not sprint_file.exists():
        typer.secho(f"Sprint file not found: {sprint_file}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    try:
        return Sprint.from_json(sprint_file.read_text(encoding="utf-8"))
    except InvalidSprintStructureError as e:
        typer.secho(f"Invalid sprint file {sprint_file}:\n{e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def _write_sprint(sprint: Sprint, output: Path) -> None:
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(sprint.to_json() + "\n", encoding="utf-8")


def _print_interview(sprint: Sprint, reference=None) -> None:
    when = format_timestamp(sprint.interview_date, relative=True, reference=reference)
    typer.echo(f"Interview: {format_timestamp(sprint.interview_date)} ({when})")


def _print_plan(sprint: Sprint) -> None:
    for plan in sprint.daily_plans:
        marker = "✓" if plan.completed else "•"
        topics = ", ".join(sorted({task.category for block in plan.blocks for task in block.tasks}))
        typer.echo(
            f"  {marker} Day {plan.day:>2} {format_timestamp(plan.date)}  {plan.focus:<12} "
            f"{truncate_display(topics, 48)}"
        )


@app.command("generate")
def generate_command(
    application_id: str = typer.Argument(..., help="Application identifier"),
    interview_date: str = typer.Argument(
        ..., help="Interview day (e.g., 2026-11-02, 'next friday', 'in 10 days')"
    ),
    role: RoleType = typer.Option(RoleType.SDE, "--role", "-r", help="Role type for the curriculum"),
    today: Optional[str] = typer.Option(
        None, "--today", help="Override the start day (default: today)"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the sprint JSON to this file"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the sprint JSON instead of a summary"),
    log_dir: Optional[Path] = typer.Option(None, "--log-dir", help="Session log directory"),
):
    """
    Generate a prep sprint from today up to the interview.

    Examples:\n

        $ manage_sprint.py generate app-42 2026-10-29 --role SDE

        $ manage_sprint.py generate app-42 "next friday" -r SDET -o sprint.json
    """
    _setup_logging(log_dir, "generate")

    current = None
    if today:
        current = try_parse_date_input(today)
        if current is None:
            typer.secho(f"Could not understand --today {today!r}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)

    try:
        sprint = generate_sprint(application_id, interview_date, role, now=current)
    except InvalidInterviewDateError as e:
        typer.secho(f"✗ {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if output:
        _write_sprint(sprint, output)

    if as_json:
        typer.echo(sprint.to_json())
        return

    typer.secho(
        f"\n{sprint.total_days}-day {sprint.role_type} sprint for {application_id}",
        fg=typer.colors.BLUE,
        bold=True,
    )
    _print_interview(sprint, reference=current)
    _print_plan(sprint)
    if output:
        typer.secho(f"\n✓ Saved to {output}", fg=typer.colors.GREEN)


@app.command("complete")
def complete_command(
    sprint_file: Path = typer.Argument(..., help="Sprint JSON file"),
    day_index: int = typer.Argument(..., help="Zero-based day index"),
    block_index: int = typer.Argument(..., help="Zero-based block index (0 = morning, 1 = evening)"),
    task_index: int = typer.Argument(..., help="Zero-based task index within the block"),
    undo: bool = typer.Option(False, "--undo", help="Mark the task as not done"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the updated sprint here (default: update in place)"
    ),
    log_dir: Optional[Path] = typer.Option(None, "--log-dir", help="Session log directory"),
):
    """
    Mark a task done (or not done with --undo) and save the sprint.

    Examples:\n

        $ manage_sprint.py complete sprint.json 0 0 1

        $ manage_sprint.py complete sprint.json 0 0 1 --undo
    """
    _setup_logging(log_dir, "complete")
    sprint = _load_sprint(sprint_file)

    try:
        updated = set_task_completion(sprint, day_index, block_index, task_index, completed=not undo)
    except InvalidTaskPathError as e:
        typer.secho(f"✗ {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    _write_sprint(updated, output or sprint_file)

    task = updated.daily_plans[day_index].blocks[block_index].tasks[task_index]
    state = "open" if undo else "done"
    typer.secho(f"✓ {task.description} -> {state}", fg=typer.colors.GREEN)

    progress = summarize_progress(updated)
    typer.echo(
        f"Progress: {progress.completed_tasks}/{progress.total_tasks} tasks "
        f"({progress.percent_complete}%), sprint {updated.status}"
    )


@app.command("summary")
def summary_command(
    sprint_file: Path = typer.Argument(..., help="Sprint JSON file"),
):
    """Show progress and the day-by-day plan of a sprint."""
    sprint = _load_sprint(sprint_file)
    progress = summarize_progress(sprint)

    typer.secho(
        f"\n{sprint.role_type} sprint for {sprint.application_id} ({sprint.status})",
        fg=typer.colors.BLUE,
        bold=True,
    )
    _print_interview(sprint)
    typer.echo(
        f"Tasks: {progress.completed_tasks}/{progress.total_tasks} ({progress.percent_complete}%)"
    )
    typer.echo(f"Days:  {progress.completed_days}/{progress.total_days}")
    _print_plan(sprint)


if __name__ == "__main__":
    app()
