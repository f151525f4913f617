"""
FILE: taskbeacon/tui/keys.py
PURPOSE: Raw-mode keyboard input translated to flow key names
EXPORTS:
  - KeyReader (context manager)
  - normalize_key(key_press) -> Optional[str]
DEPENDENCIES:
  - prompt_toolkit (create_input, Keys)
NOTES:
  - Reads never block; the runner polls between redraws
  - A lone escape is only reported after flush_keys(), i.e. on the next
    poll with no further bytes (otherwise it could start an arrow sequence)
"""

from typing import List, Optional

from prompt_toolkit.input import create_input
from prompt_toolkit.keys import Keys


_KEY_NAMES = {
    Keys.ControlC: "ctrl+c",
    Keys.Escape: "esc",
    Keys.ControlM: "enter",
    Keys.ControlJ: "enter",
    Keys.ControlI: "tab",
    Keys.BackTab: "shift+tab",
    Keys.ControlH: "backspace",
    Keys.Delete: "delete",
    Keys.Left: "left",
    Keys.Right: "right",
    Keys.Home: "home",
    Keys.End: "end",
    Keys.ControlA: "home",
    Keys.ControlE: "end",
}


def normalize_key(key_press) -> Optional[str]:
    """
    Map a prompt_toolkit KeyPress to a key name.

    Returns:
        "enter", "esc", "tab", ... for known special keys, the character
        itself for printable input, None for anything else
    """
    key = key_press.key
    if key in _KEY_NAMES:
        return _KEY_NAMES[key]
    if isinstance(key, Keys):
        return None
    if isinstance(key, str) and len(key) == 1 and key.isprintable():
        return key
    return None


class KeyReader:
    """
    Non-blocking key source for a Live screen.

    Usage:
        with KeyReader() as reader:
            for key in reader.read():
                ...
    """

    def __init__(self, input_=None):
        self._input = input_ or create_input()
        self._raw_mode = None

    def __enter__(self) -> "KeyReader":
        self._raw_mode = self._input.raw_mode()
        self._raw_mode.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._raw_mode is not None:
            self._raw_mode.__exit__(exc_type, exc, tb)
            self._raw_mode = None

    def read(self) -> List[str]:
        """Return the keys typed since the last call (possibly none)."""
        presses = self._input.read_keys()
        if not presses:
            presses = self._input.flush_keys()
        names = []
        for press in presses:
            name = normalize_key(press)
            if name:
                names.append(name)
        return names
