"""
FILE: taskbeacon/cli/commands/enrich.py
PURPOSE: Enrichment commands (add, enrich)
"""

from typing import List, Optional

import typer

from ..main import (
    app,
    console,
    error_console,
    load_settings,
    require_terminal,
    EXIT_CANCELLED,
)
from ...core import repository
from ...core.add_flow import AddFlow
from ...core.batch_flow import BatchFlow
from ...core.dispatch import drive, accept_all
from ...core.exceptions import TaskBeaconError, UserAbort
from ...llm import create_provider
from ...tui import run_flow
from ...tui.style import celebrate_add, celebrate_batch


def _run(flow, command: str, yes: bool):
    """Run a flow headless (--yes) or on the terminal; map failures to exit codes."""
    if not yes:
        require_terminal(command)

    try:
        config = load_settings()
        provider = create_provider(config.llm)
        if yes:
            drive(flow, provider, repository, config, choose_key=accept_all)
        else:
            run_flow(flow, provider, repository, config, console=console)
    except UserAbort:
        error_console.print("[yellow]Cancelled[/yellow]")
        raise typer.Exit(EXIT_CANCELLED)
    except TaskBeaconError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if flow.error:
        if yes:
            error_console.print(f"[red]Error:[/red] {flow.error}")
        raise typer.Exit(1)


@app.command()
def add(
    description: List[str] = typer.Argument(..., help="Task description"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Accept the suggestion without asking"),
):
    """
    Create a task, enriched with beacons and metadata by the LLM.

    Example:
        tb add fix the login bug before friday
        tb add "Write blog post about tooling" --yes
    """
    text = " ".join(description).strip()
    if not text:
        error_console.print("[red]Error:[/red] Task description cannot be empty")
        raise typer.Exit(1)

    flow = AddFlow(text)
    _run(flow, "add", yes)

    if yes:
        console.print(
            f"[green]✓ Created task [bold]{flow.created_uuid}[/bold][/green] {celebrate_add()}"
        )


@app.command()
def enrich(
    filter_args: Optional[List[str]] = typer.Argument(
        None, help="Taskwarrior filter (default: pending tasks without a beacon)"
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Accept every suggestion without asking"),
):
    """
    Enrich existing tasks one by one. Descriptions are never changed.

    Example:
        tb enrich
        tb enrich project:work +inbox
        tb enrich --yes
    """
    filter_text = " ".join(filter_args or [])
    flow = BatchFlow(filter_text)
    _run(flow, "enrich", yes)

    if yes:
        if not flow.tasks:
            console.print("[dim]No tasks to enrich[/dim]")
        else:
            console.print(f"[green]{celebrate_batch(flow.processed, flow.skipped)}[/green]")
