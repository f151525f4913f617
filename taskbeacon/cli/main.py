"""
FILE: taskbeacon/cli/main.py
PURPOSE: Typer-based CLI entry point for taskbeacon
EXPORTS:
  - app (Typer application)
  - main() (entry point)
  - console, error_console (shared rich consoles)
  - load_settings() -> Config
  - require_terminal(command) -> None
  - configure_logging(verbose) -> None
  - add() - Create a task with an LLM suggestion
  - enrich() - Enrich existing tasks in a batch
  - focus() - Show the balanced focus list
  - task() - Pass arguments through to Taskwarrior
  - version() - Show version
  - help() - Show command list and usage
DEPENDENCIES:
  - typer (CLI framework)
  - rich (formatted output, RichHandler logging)
  - taskbeacon.core.config (load_config)
NOTES:
  - Global options: --config PATH, --verbose/-v
  - Error messages go to stderr
  - Exit codes: 0=success, 1=error, 130=cancelled
  - No subcommand prints help
"""

import sys
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from ..core.config import load_config, Config

# Typer app setup
app = typer.Typer(
    name="tb",
    help="Taskwarrior companion: LLM enrichment against your beacons, balanced focus lists",
    add_completion=False,
)

# Rich console for formatted output
console = Console()
error_console = Console(stderr=True)

# Version
__version__ = "0.1.0"

# Exit code for user cancellation (128 + SIGINT)
EXIT_CANCELLED = 130

# Options from the global callback, read by commands
state = {
    "config_path": None,
    "verbose": False,
}


def configure_logging(verbose: bool = False) -> None:
    """Send log records to stderr through rich. WARNING by default, DEBUG with -v."""
    level = logging.DEBUG if verbose else logging.WARNING
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)
    root.addHandler(RichHandler(console=error_console, show_path=False, rich_tracebacks=verbose))
    root.setLevel(level)
    # Request-level chatter from httpx is only useful when debugging
    logging.getLogger("httpx").setLevel(level)


def load_settings() -> Config:
    """Load config honoring the global --config option."""
    return load_config(state["config_path"])


def require_terminal(command: str) -> None:
    """Exit with an error when an interactive command has no terminal."""
    if not sys.stdin.isatty():
        error_console.print(
            f"[red]Error:[/red] '{command}' needs an interactive terminal (use --yes to accept all suggestions)"
        )
        raise typer.Exit(1)


@app.callback(invoke_without_command=True)
def default_command(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, "--config", help="Path to config.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr"),
):
    """
    Global options; prints help when no command is given.
    """
    state["config_path"] = config
    state["verbose"] = verbose
    configure_logging(verbose)

    if ctx.invoked_subcommand is None:
        from .commands.system import help as show_help
        show_help()


# Import command modules to register commands with app
# Commands are decorated with @app.command() in their modules
from .commands import (
    # Enrichment commands
    add,
    enrich,
    # Focus view
    focus,
    # System commands
    task,
    version,
    help,
)


def main():
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
