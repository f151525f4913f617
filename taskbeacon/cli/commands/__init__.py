"""
FILE: taskbeacon/cli/commands/__init__.py
PURPOSE: CLI command modules
"""

# Export all command handlers for easy importing
from .enrich import (
    add,
    enrich,
)
from .focus import (
    focus,
)
from .system import (
    task,
    version,
    help,
)

__all__ = [
    "add",
    "enrich",
    "focus",
    "task",
    "version",
    "help",
]
