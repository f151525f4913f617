"""
FILE: taskbeacon/cli/commands/focus.py
PURPOSE: Balanced focus list command
"""

import json
from dataclasses import asdict

import typer

from ..main import app, console, error_console, load_settings
from ...core import repository
from ...core.constants import PENDING_FILTER
from ...core.exceptions import TaskBeaconError
from ...core.focus import balance_from_config
from ...tui.views import render_focus, format_focus_task


@app.command()
def focus(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Show the top pending tasks per project or focus group, by urgency.

    Example:
        tb focus
        tb focus --json
    """
    try:
        config = load_settings()
        tasks = repository.export(PENDING_FILTER)
    except TaskBeaconError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    view = balance_from_config(tasks, config)

    if json_output:
        data = {
            "groups": [asdict(g) for g in view.groups],
            "tasks": [dict(asdict(e.task), group=e.group) for e in view.entries],
        }
        typer.echo(json.dumps(data, indent=2))
    elif raw:
        for name, group_tasks in view.sections():
            typer.echo(f"--- {name} ---")
            for task in group_tasks:
                typer.echo(format_focus_task(task, view.uses_focus_groups).plain)
    else:
        console.print(render_focus(view))
