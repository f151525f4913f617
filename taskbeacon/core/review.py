"""
FILE: taskbeacon/core/review.py
PURPOSE: Shared state machine for reviewing a suggestion (preview and field editing)
EXPORTS:
  - ReviewFlow (base class for AddFlow and BatchFlow)
DEPENDENCIES:
  - taskbeacon.core.fields (FieldSet)
  - taskbeacon.core.service (field_text, apply_field_text)
  - taskbeacon.core.events (KeyPressed, Quit)
  - taskbeacon.core.constants (phases)
NOTES:
  - handle(event) is the whole transition function: it mutates the flow and
    returns effects, and never touches the store or the network
  - Once closed (quit, done, error acknowledged) every event is ignored,
    so results of abandoned requests have no effect
  - Subclasses implement start(), _preview_key() and _on_completion()
"""

import logging
from typing import List, Optional, Sequence

from .fields import FieldSet
from .models import Suggestion
from .service import field_text, apply_field_text
from .events import KeyPressed, Quit
from .constants import (
    ADD_FIELDS,
    PHASE_LOADING,
    PHASE_FETCHING,
    PHASE_PREVIEW,
    PHASE_EDITING,
    PHASE_COMMITTING,
    PHASE_DONE,
    PHASE_ERROR,
)


logger = logging.getLogger(__name__)


class ReviewFlow:
    """
    Base review workflow.

    Owns one FieldSet and the staged Suggestion. Preview handling differs per
    flow; editing is identical in both (tab / shift+tab move focus, enter
    confirms the focused field and advances, esc drops unconfirmed text and
    goes back to the preview).
    """

    field_names: Sequence[str] = ADD_FIELDS

    def __init__(self):
        self.phase = PHASE_LOADING
        self.fields = FieldSet(self.field_names)
        self.suggestion: Optional[Suggestion] = None
        self.error: Optional[str] = None
        self.aborted = False
        self.closed = False

    # --- Public interface ---

    def start(self) -> list:
        raise NotImplementedError

    def handle(self, event) -> list:
        """
        Feed one input or completion event to the flow.

        Returns:
            Effects to execute, in order (possibly empty)
        """
        if self.closed:
            logger.debug("Ignoring %s after close", type(event).__name__)
            return []
        if isinstance(event, KeyPressed):
            return self._on_key(event.key)
        return self._on_completion(event)

    # --- Transitions shared by subclasses ---

    def _close(self) -> list:
        self.closed = True
        return [Quit()]

    def _abort(self) -> list:
        logger.debug("Flow aborted by user in phase %s", self.phase)
        self.aborted = True
        return self._close()

    def _fail(self, message: str) -> list:
        """Enter Error. The flow stays open until the next key."""
        logger.info("Flow failed: %s", message)
        self.phase = PHASE_ERROR
        self.error = message
        return []

    def _finish(self) -> list:
        self.phase = PHASE_DONE
        return self._close()

    def _stage(self, suggestion: Suggestion) -> None:
        """Hold a suggestion for review and load it into the fields."""
        self.suggestion = suggestion
        self._populate_fields()
        self.phase = PHASE_PREVIEW

    def _populate_fields(self) -> None:
        for i, name in enumerate(self.fields.names):
            self.fields.set_value(i, field_text(self.suggestion, name))
        self.fields.focus(0)

    def _begin_edit(self) -> list:
        self._populate_fields()
        self.phase = PHASE_EDITING
        return []

    # --- Key handling ---

    def _on_key(self, key: str) -> list:
        if self.phase in (PHASE_ERROR, PHASE_DONE):
            return self._close()
        if self.phase == PHASE_EDITING:
            return self._edit_key(key)
        if self.phase == PHASE_PREVIEW:
            return self._preview_key(key)
        if self.phase in (PHASE_LOADING, PHASE_FETCHING):
            if key in ("esc", "ctrl+c"):
                return self._abort()
            return []
        if self.phase == PHASE_COMMITTING and key == "ctrl+c":
            return self._abort()
        return []

    def _preview_key(self, key: str) -> list:
        raise NotImplementedError

    def _edit_key(self, key: str) -> list:
        fields = self.fields

        if key == "ctrl+c":
            return self._abort()
        if key == "esc":
            self._populate_fields()
            self.phase = PHASE_PREVIEW
            return []
        if key == "tab":
            fields.focus_next()
        elif key == "shift+tab":
            fields.focus_prev()
        elif key == "enter":
            was_last = fields.is_last()
            apply_field_text(self.suggestion, fields.focused.name, fields.focused.value)
            fields.focus_next()
            if was_last:
                self.phase = PHASE_PREVIEW
        elif key == "backspace":
            fields.backspace()
        elif key == "delete":
            fields.delete()
        elif key == "left":
            fields.move_cursor(-1)
        elif key == "right":
            fields.move_cursor(1)
        elif key == "home":
            fields.cursor_home()
        elif key == "end":
            fields.cursor_end()
        elif len(key) == 1 and key.isprintable():
            fields.insert_text(key)
        return []

    # --- Completion events ---

    def _on_completion(self, event) -> list:
        raise NotImplementedError

    def _unexpected(self, event) -> List:
        logger.debug("Ignoring %s in phase %s", type(event).__name__, self.phase)
        return []
