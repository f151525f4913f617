"""
FILE: taskbeacon/core/fields.py
PURPOSE: Ordered set of editable text fields with cursor and focus
EXPORTS:
  - Field (dataclass)
  - FieldSet (class)
DEPENDENCIES:
  - dataclasses (stdlib)
  - typing (stdlib)
NOTES:
  - Exactly one field is focused at any time
  - Focus moves cyclically: (i +/- 1 + n) mod n
  - Indices passed in are taken modulo the field count, so no call fails
  - Line editing (insert, backspace, cursor moves) acts on the focused field
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Sequence


@dataclass
class Field:
    """One named text input."""

    name: str
    value: str = ""
    cursor: int = 0
    focused: bool = False


class FieldSet:
    """
    Editable fields shared by the add and enrich screens.

    Created once per flow, repopulated from a Suggestion when a preview loads,
    mutated by keystrokes while editing, and read back on save.
    """

    def __init__(self, names: Sequence[str]):
        if not names:
            raise ValueError("FieldSet needs at least one field")
        self._fields: List[Field] = [Field(name=name) for name in names]
        self._focus = 0
        self._fields[0].focused = True

    def __len__(self) -> int:
        return len(self._fields)

    def __iter__(self) -> Iterator[Field]:
        return iter(self._fields)

    @property
    def names(self) -> List[str]:
        return [f.name for f in self._fields]

    @property
    def focus_index(self) -> int:
        return self._focus

    @property
    def focused(self) -> Field:
        return self._fields[self._focus]

    def _index(self, i: int) -> int:
        return i % len(self._fields)

    def focus(self, i: int) -> None:
        """Move focus to field i (modulo field count)."""
        self._fields[self._focus].focused = False
        self._focus = self._index(i)
        self._fields[self._focus].focused = True

    def focus_next(self) -> None:
        n = len(self._fields)
        self.focus((self._focus + 1 + n) % n)

    def focus_prev(self) -> None:
        n = len(self._fields)
        self.focus((self._focus - 1 + n) % n)

    def is_last(self) -> bool:
        return self._focus == len(self._fields) - 1

    def set_value(self, i: int, text: str) -> None:
        """Replace a field's text and put its cursor at the end."""
        f = self._fields[self._index(i)]
        f.value = text or ""
        f.cursor = len(f.value)

    def value_of(self, i: int) -> str:
        return self._fields[self._index(i)].value

    def index_of(self, name: str) -> int:
        """Position of the named field, or -1 when it is not part of this set."""
        for i, f in enumerate(self._fields):
            if f.name == name:
                return i
        return -1

    def values(self) -> Dict[str, str]:
        return {f.name: f.value for f in self._fields}

    # --- Line editing on the focused field ---

    def insert_text(self, text: str) -> None:
        f = self.focused
        f.value = f.value[: f.cursor] + text + f.value[f.cursor:]
        f.cursor += len(text)

    def backspace(self) -> None:
        f = self.focused
        if f.cursor > 0:
            f.value = f.value[: f.cursor - 1] + f.value[f.cursor:]
            f.cursor -= 1

    def delete(self) -> None:
        f = self.focused
        if f.cursor < len(f.value):
            f.value = f.value[: f.cursor] + f.value[f.cursor + 1:]

    def move_cursor(self, delta: int) -> None:
        f = self.focused
        f.cursor = max(0, min(len(f.value), f.cursor + delta))

    def cursor_home(self) -> None:
        self.focused.cursor = 0

    def cursor_end(self) -> None:
        f = self.focused
        f.cursor = len(f.value)
