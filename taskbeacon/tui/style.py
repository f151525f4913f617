"""
FILE: taskbeacon/tui/style.py
PURPOSE: Colors, label styles and small celebration messages for the terminal UI
EXPORTS:
  - Style constants (PRIMARY, SECONDARY, MUTED, SUCCESS, WARNING, ERROR, ...)
  - celebrate_add() -> str
  - celebrate_batch(processed, skipped) -> str
  - blocks_hint(n) -> str
DEPENDENCIES:
  - random (for variety)
NOTES:
  - Styles are rich style strings, usable in Text.append and markup
  - Subtle, not overwhelming
"""

import random


# Colors
PRIMARY = "cyan"
SECONDARY = "magenta"
MUTED = "grey50"
SUCCESS = "bright_green"
WARNING = "dark_orange"
ERROR = "red"

# Text styles
TITLE = f"bold {PRIMARY}"
SUBTITLE = f"italic {MUTED}"
LABEL = f"bold {SECONDARY}"
LABEL_SELECTED = f"bold {PRIMARY}"
VALUE = "bright_white"
HELP = MUTED

# Tag chips
BEACON_CHIP = f"black on {PRIMARY}"
DIRECTION_CHIP = f"black on {SECONDARY}"
WASTE_CHIP = f"bold bright_white on {ERROR}"

LABEL_WIDTH = 14

# Priority letter colors in the focus list
PRIORITY_COLORS = {
    "H": "red",
    "M": "yellow",
    "L": "blue",
}

# Add celebrations (new task created)
ADD_CELEBRATIONS = [
    "✓ *noted* ✓",
    "+ *added* +",
    "○ *logged* ○",
    "✦ *captured* ✦",
]

# Batch celebrations
BATCH_CELEBRATIONS = [
    "⚡ *zippy* ⚡",
    "✨ *tidy* ✨",
    "➜ *sorted* ➜",
    "★ *aligned* ★",
]


def celebrate_add() -> str:
    """
    Return a random celebration for adding a task.

    Example:
        "✓ *noted* ✓"
    """
    return random.choice(ADD_CELEBRATIONS)


def celebrate_batch(processed: int, skipped: int) -> str:
    """
    Return a summary line for a finished batch.

    Example:
        "⚡ *zippy* ⚡ Enriched 5 tasks, skipped 2"
    """
    noun = "task" if processed == 1 else "tasks"
    if processed == 0:
        return f"Nothing enriched, skipped {skipped}"
    celebration = random.choice(BATCH_CELEBRATIONS)
    return f"{celebration} Enriched {processed} {noun}, skipped {skipped}"


def blocks_hint(n: int) -> str:
    """Describe how much a blocking count matters."""
    if n <= 0:
        return "not blocking"
    if n >= 6:
        return "critical blocker"
    if n >= 3:
        return "significant blocker"
    return "minor blocker"
