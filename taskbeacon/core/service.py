"""
FILE: taskbeacon/core/service.py
PURPOSE: Business rules shared by the add and enrich flows
EXPORTS:
  - suggestion_tags(suggestion) -> List[str]
  - build_new_task(suggestion, fallback_description) -> Task
  - build_plain_task(description) -> Task
  - build_batch_delta(task, suggestion) -> TaskDelta
  - field_text(suggestion, field_name) -> str
  - apply_field_text(suggestion, field_name, text) -> None
  - filter_untagged(tasks) -> List[Task]
DEPENDENCIES:
  - taskbeacon.core.models (Task, TaskDelta, Suggestion)
  - taskbeacon.core.constants (field names, WASTE_TAG)
  - taskbeacon.core.exceptions (InvalidInputError)
  - taskbeacon.utils (split_tags, parse_leading_int, unique)
NOTES:
  - No I/O here: flows call these to build what the store should persist
  - Batch deltas never carry a description and only fill an empty project
  - Malformed Blocks text is coerced to 0, never rejected
"""

from typing import List

from .models import Task, TaskDelta, Suggestion
from .constants import (
    WASTE_TAG,
    FIELD_DESCRIPTION,
    FIELD_BEACONS,
    FIELD_DIRECTIONS,
    FIELD_PROJECT,
    FIELD_PRIORITY,
    FIELD_DUE,
    FIELD_SCHEDULED,
    FIELD_EFFORT,
    FIELD_IMPACT,
    FIELD_ESTIMATE,
    FIELD_FUN,
    FIELD_BLOCKS,
)
from .exceptions import InvalidInputError
from ..utils import split_tags, parse_leading_int, unique


# Plain text fields map straight onto Suggestion attributes
_TEXT_ATTRS = {
    FIELD_DESCRIPTION: "description",
    FIELD_PROJECT: "project",
    FIELD_PRIORITY: "priority",
    FIELD_DUE: "due",
    FIELD_SCHEDULED: "scheduled",
    FIELD_EFFORT: "effort",
    FIELD_IMPACT: "impact",
    FIELD_ESTIMATE: "estimate",
    FIELD_FUN: "fun",
}

_TAG_ATTRS = {
    FIELD_BEACONS: "beacons",
    FIELD_DIRECTIONS: "directions",
}


def suggestion_tags(suggestion: Suggestion) -> List[str]:
    """
    Tags a committed suggestion puts on the task.

    Returns:
        Beacon tags, then direction tags, then 'waste' when the suggestion
        is flagged as not goal-aligned; duplicates removed.
    """
    tags = list(suggestion.beacons) + list(suggestion.directions)
    if suggestion.is_waste:
        tags.append(WASTE_TAG)
    return unique(tags)


def build_new_task(suggestion: Suggestion, fallback_description: str = "") -> Task:
    """
    Build the task the add flow creates when a suggestion is accepted.

    Args:
        suggestion: Accepted (possibly edited) suggestion
        fallback_description: Used when the suggestion has no description

    Raises:
        InvalidInputError: If both descriptions are empty
    """
    description = suggestion.description.strip() or fallback_description.strip()
    if not description:
        raise InvalidInputError("Task description cannot be empty")

    return Task(
        description=description,
        project=suggestion.project.strip() or None,
        priority=suggestion.priority,
        due=suggestion.due,
        scheduled=suggestion.scheduled,
        tags=suggestion_tags(suggestion),
        effort=suggestion.effort,
        impact=suggestion.impact,
        estimate=suggestion.estimate,
        fun=suggestion.fun,
        blocks=max(0, suggestion.blocks),
    )


def build_plain_task(description: str) -> Task:
    """Build the un-enriched task used when the user skips the suggestion."""
    description = description.strip()
    if not description:
        raise InvalidInputError("Task description cannot be empty")
    return Task(description=description)


def build_batch_delta(task: Task, suggestion: Suggestion) -> TaskDelta:
    """
    Build the modification the enrich flow applies to an existing task.

    Args:
        task: Task as exported by the store
        suggestion: Accepted (possibly edited) suggestion

    Returns:
        TaskDelta without description; project set only when the task has none
    """
    project = None
    if not task.project and suggestion.project.strip():
        project = suggestion.project.strip()

    return TaskDelta(
        project=project,
        priority=suggestion.priority,
        due=suggestion.due,
        scheduled=suggestion.scheduled,
        effort=suggestion.effort,
        impact=suggestion.impact,
        estimate=suggestion.estimate,
        fun=suggestion.fun,
        blocks=max(0, suggestion.blocks),
        tags=suggestion_tags(suggestion),
    )


def field_text(suggestion: Suggestion, field_name: str) -> str:
    """Render one Suggestion attribute as editable text."""
    if field_name in _TEXT_ATTRS:
        return getattr(suggestion, _TEXT_ATTRS[field_name])
    if field_name in _TAG_ATTRS:
        return " ".join(getattr(suggestion, _TAG_ATTRS[field_name]))
    if field_name == FIELD_BLOCKS:
        return str(suggestion.blocks)
    raise InvalidInputError(f"Unknown field '{field_name}'")


def apply_field_text(suggestion: Suggestion, field_name: str, text: str) -> None:
    """Write edited text back into the staged Suggestion."""
    text = text or ""
    if field_name in _TEXT_ATTRS:
        setattr(suggestion, _TEXT_ATTRS[field_name], text.strip())
    elif field_name in _TAG_ATTRS:
        setattr(suggestion, _TAG_ATTRS[field_name], split_tags(text))
    elif field_name == FIELD_BLOCKS:
        suggestion.blocks = parse_leading_int(text)
    else:
        raise InvalidInputError(f"Unknown field '{field_name}'")


def filter_untagged(tasks: List[Task]) -> List[Task]:
    """Keep pending tasks without any beacon tag, in their original order."""
    return [t for t in tasks if t.status == "pending" and not t.has_beacon()]
