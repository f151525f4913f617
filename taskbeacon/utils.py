"""
FILE: taskbeacon/utils.py
PURPOSE: Shared text utilities for core, llm and tui layers
EXPORTS:
  - extract_json_object(text) -> Optional[dict]
  - split_tags(text) -> List[str]
  - parse_leading_int(text) -> int
  - unique(items) -> List[str]
  - truncate(text, max_len, suffix) -> str
DEPENDENCIES:
  - json (stdlib)
  - re (stdlib)
NOTES:
  - extract_json_object tolerates commentary and code fences around the object
  - parse_leading_int never raises; malformed numeric input becomes 0
"""

import json
import re
from typing import Iterable, List, Optional


_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def extract_json_object(text: str) -> Optional[dict]:
    """
    Decode the JSON object that starts at the first '{' in free text.

    Args:
        text: Raw model output, possibly wrapped in prose or ```json fences

    Returns:
        The object as a dict, or None if there is no '{' or the object
        starting there does not decode

    Notes:
        Only the first '{' is tried. A broken object is never rescued by
        decoding one of the objects nested inside it.
    """
    if not text:
        return None

    start_idx = text.find("{")
    if start_idx == -1:
        return None

    try:
        parsed, _ = json.JSONDecoder().raw_decode(text, start_idx)
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, dict) else None


def split_tags(text: str) -> List[str]:
    """Split whitespace-separated tags, dropping empties and duplicates."""
    if not text:
        return []
    return unique(text.split())


def parse_leading_int(text) -> int:
    """
    Parse the leading integer of a text value.

    "3" -> 3, " 4 blockers" -> 4, "" -> 0, "abc" -> 0, "-2" -> -2
    """
    if text is None:
        return 0
    match = _LEADING_INT.match(str(text))
    if not match:
        return 0
    return int(match.group(1))


def unique(items: Iterable[str]) -> List[str]:
    """Drop duplicates and blanks while keeping first-seen order."""
    seen = set()
    result = []
    for item in items:
        item = item.strip()
        if item and item not in seen:
            seen.add(item)
            result.append(item)
    return result


def truncate(text: str, max_len: int, suffix: str = "...") -> str:
    """Cut text to max_len characters, suffix included."""
    if len(text) <= max_len:
        return text
    return text[: max_len - len(suffix)] + suffix
