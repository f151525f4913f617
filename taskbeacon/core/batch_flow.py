"""
FILE: taskbeacon/core/batch_flow.py
PURPOSE: Enrich existing tasks one at a time, in store order
EXPORTS:
  - BatchFlow (class)
DEPENDENCIES:
  - taskbeacon.core.review (ReviewFlow)
  - taskbeacon.core.service (build_batch_delta)
  - taskbeacon.core.events (events and effects)
NOTES:
  - Phases: loading -> (fetching -> preview <-> editing -> committing)* -> done | error
  - Preview keys: enter/a accept, e edit, s/n skip item, esc finish early,
    q/ctrl+c quit
  - One request in flight at a time: the next item is fetched only after the
    current one is committed or skipped
  - Any failure stops the batch; earlier commits stay (no rollback)
  - Description is never edited or sent; project only fills an empty one
"""

from typing import List, Optional

from .models import Task
from .review import ReviewFlow
from .service import build_batch_delta
from .events import (
    FetchSuggestion,
    LoadTasks,
    ModifyTask,
    TasksLoaded,
    SuggestionReady,
    SuggestionFailed,
    TaskModified,
    StoreFailed,
)
from .constants import (
    ENRICH_FIELDS,
    PHASE_LOADING,
    PHASE_FETCHING,
    PHASE_COMMITTING,
)


class BatchFlow(ReviewFlow):
    """Walk a list of tasks and apply accepted suggestions as modifications."""

    field_names = ENRICH_FIELDS

    def __init__(self, filter_text: str = ""):
        super().__init__()
        self.filter = filter_text.strip()
        self.tasks: List[Task] = []
        self.index = 0
        self.processed = 0
        self.skipped = 0

    @property
    def current(self) -> Optional[Task]:
        if 0 <= self.index < len(self.tasks):
            return self.tasks[self.index]
        return None

    def start(self) -> list:
        self.phase = PHASE_LOADING
        return [LoadTasks(self.filter)]

    def _fetch_current(self) -> list:
        self.phase = PHASE_FETCHING
        self.suggestion = None
        return [FetchSuggestion(self.current.description)]

    def _advance(self) -> list:
        self.index += 1
        if self.current is None:
            return self._finish()
        return self._fetch_current()

    def _preview_key(self, key: str) -> list:
        if key in ("enter", "a"):
            task = self.current
            delta = build_batch_delta(task, self.suggestion)
            self.phase = PHASE_COMMITTING
            return [ModifyTask(task.uuid, delta)]
        if key == "e":
            return self._begin_edit()
        if key in ("s", "n"):
            self.skipped += 1
            return self._advance()
        if key == "esc":
            return self._finish()
        if key in ("q", "ctrl+c"):
            return self._abort()
        return []

    def _on_completion(self, event) -> list:
        if self.phase == PHASE_LOADING:
            if isinstance(event, TasksLoaded):
                self.tasks = list(event.tasks)
                self.index = 0
                if not self.tasks:
                    return self._finish()
                return self._fetch_current()
            if isinstance(event, StoreFailed):
                return self._fail(event.message)
        elif self.phase == PHASE_FETCHING:
            if isinstance(event, SuggestionReady):
                self._stage(event.suggestion)
                return []
            if isinstance(event, SuggestionFailed):
                return self._fail(event.message)
        elif self.phase == PHASE_COMMITTING:
            if isinstance(event, TaskModified):
                self.processed += 1
                return self._advance()
            if isinstance(event, StoreFailed):
                return self._fail(event.message)
        return self._unexpected(event)
