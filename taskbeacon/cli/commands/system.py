"""
FILE: taskbeacon/cli/commands/system.py
PURPOSE: System commands (task passthrough, version, help)
"""

import typer

# Import shared objects from main module
# These will be available after main.py imports this module
from ..main import app, console, error_console, __version__
from ...core import repository
from ...core.exceptions import StoreError


@app.command(
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
def task(ctx: typer.Context):
    """
    Run any Taskwarrior command; the exit code is passed through.

    Example:
        tb task project:work list
        tb task 12 done
    """
    try:
        code = repository.passthrough(ctx.args)
    except StoreError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    raise typer.Exit(code)


@app.command()
def version():
    """Show taskbeacon version."""
    console.print(f"taskbeacon v{__version__}")


@app.command()
def help():
    """Show available commands and usage."""
    console.print("\n[bold cyan]taskbeacon[/bold cyan] - LLM task enrichment and balanced focus for Taskwarrior\n")
    console.print(f"[dim]Version {__version__}[/dim]\n")

    console.print("[bold]Usage:[/bold]")
    console.print("  tb [--config PATH] [-v] [command] [options]\n")

    console.print("[bold]Commands:[/bold]")

    commands = [
        ("add", "Create a task with LLM suggestions", 'tb add "Fix login bug" [--yes]'),
        ("enrich", "Enrich tasks that have no beacon", "tb enrich [FILTER...] [--yes]"),
        ("focus", "Balanced list of what to work on", "tb focus [--json] [--raw]"),
        ("task", "Run a Taskwarrior command", "tb task project:work list"),
        ("version", "Show version", "tb version"),
        ("help", "Show this help message", "tb help"),
    ]

    for cmd, desc, example in commands:
        console.print(f"  [green]{cmd:8}[/green] {desc}")
        console.print(f"           [dim]{example}[/dim]\n")

    console.print("[bold]Global Options:[/bold]")
    console.print("  [yellow]--config[/yellow]  Config file (default: ~/.config/taskbeacon/config.yaml)")
    console.print("  [yellow]-v[/yellow]        Debug logging on stderr")
    console.print("  [yellow]--help[/yellow]    Show detailed help for a command\n")

    console.print("[bold]Review keys:[/bold]")
    console.print("  [dim]preview[/dim]  enter/a accept, e edit, s skip (n too in enrich), esc done/cancel, q quit")
    console.print("  [dim]editing[/dim]  tab/shift+tab move, enter save field, esc back to preview")
    console.print("  [dim]saving[/dim]   only ctrl+c cancels; esc and q are ignored while a change is written\n")
