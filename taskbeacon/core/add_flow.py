"""
FILE: taskbeacon/core/add_flow.py
PURPOSE: Single new task workflow: suggest, review, create
EXPORTS:
  - AddFlow (class)
DEPENDENCIES:
  - taskbeacon.core.review (ReviewFlow)
  - taskbeacon.core.service (build_new_task, build_plain_task)
  - taskbeacon.core.events (events and effects)
NOTES:
  - Phases: loading -> preview <-> editing -> committing -> done | error
  - Preview keys: enter/a accept, e edit, s skip suggestion, esc/q/ctrl+c quit
  - Skip creates the task from the original description only
  - Only this flow may change the description
"""

from typing import Optional

from .review import ReviewFlow
from .service import build_new_task, build_plain_task
from .events import (
    FetchSuggestion,
    CreateTask,
    SuggestionReady,
    SuggestionFailed,
    TaskCreated,
    StoreFailed,
)
from .constants import ADD_FIELDS, PHASE_LOADING, PHASE_COMMITTING
from .exceptions import InvalidInputError


class AddFlow(ReviewFlow):
    """Create one task from a free-text description."""

    field_names = ADD_FIELDS

    def __init__(self, description: str):
        super().__init__()
        self.description = description.strip()
        self.created_uuid: Optional[str] = None

    def start(self) -> list:
        self.phase = PHASE_LOADING
        return [FetchSuggestion(self.description)]

    def _preview_key(self, key: str) -> list:
        if key in ("enter", "a"):
            try:
                task = build_new_task(self.suggestion, fallback_description=self.description)
            except InvalidInputError as e:
                return self._fail(str(e))
            return self._commit(task)
        if key == "e":
            return self._begin_edit()
        if key == "s":
            try:
                task = build_plain_task(self.description)
            except InvalidInputError as e:
                return self._fail(str(e))
            return self._commit(task)
        if key in ("esc", "q", "ctrl+c"):
            return self._abort()
        return []

    def _commit(self, task) -> list:
        self.phase = PHASE_COMMITTING
        return [CreateTask(task)]

    def _on_completion(self, event) -> list:
        if self.phase == PHASE_LOADING:
            if isinstance(event, SuggestionReady):
                self._stage(event.suggestion)
                return []
            if isinstance(event, SuggestionFailed):
                return self._fail(event.message)
        elif self.phase == PHASE_COMMITTING:
            if isinstance(event, TaskCreated):
                self.created_uuid = event.uuid
                return self._finish()
            if isinstance(event, StoreFailed):
                return self._fail(event.message)
        return self._unexpected(event)
