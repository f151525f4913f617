"""
FILE: taskbeacon/core/events.py
PURPOSE: Events consumed by the flows and effects they request
EXPORTS:
  - Events: KeyPressed, SuggestionReady, SuggestionFailed, TasksLoaded,
    TaskCreated, TaskModified, StoreFailed
  - Effects: FetchSuggestion, LoadTasks, CreateTask, ModifyTask, Quit
DEPENDENCIES:
  - dataclasses (stdlib)
  - taskbeacon.core.models (Task, TaskDelta, Suggestion)
NOTES:
  - Flows never do I/O: they return effects, a runner executes them and
    feeds the outcome back as exactly one completion event
  - Key names: enter, esc, tab, shift+tab, ctrl+c, backspace, delete,
    left, right, home, end, or one printable character
"""

from dataclasses import dataclass, field
from typing import List

from .models import Task, TaskDelta, Suggestion


# --- Events ---


@dataclass(frozen=True)
class KeyPressed:
    key: str


@dataclass(frozen=True)
class SuggestionReady:
    suggestion: Suggestion


@dataclass(frozen=True)
class SuggestionFailed:
    message: str


@dataclass(frozen=True)
class TasksLoaded:
    tasks: List[Task] = field(default_factory=list)


@dataclass(frozen=True)
class TaskCreated:
    uuid: str


@dataclass(frozen=True)
class TaskModified:
    uuid: str


@dataclass(frozen=True)
class StoreFailed:
    message: str


# --- Effects ---


@dataclass(frozen=True)
class FetchSuggestion:
    """Ask the suggestion service about one description."""

    description: str


@dataclass(frozen=True)
class LoadTasks:
    """Read tasks from the store. Empty filter means untagged pending tasks."""

    filter: str = ""


@dataclass(frozen=True)
class CreateTask:
    task: Task


@dataclass(frozen=True)
class ModifyTask:
    uuid: str
    delta: TaskDelta


@dataclass(frozen=True)
class Quit:
    """The flow is finished; stop reading input."""
