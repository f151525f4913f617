"""
FILE: taskbeacon/core/models.py
PURPOSE: Domain models for tasks, suggestions and the goal catalog
EXPORTS:
  - Task (dataclass)
  - TaskDelta (dataclass)
  - Suggestion (dataclass)
  - Direction, Beacon, ProjectRule, FocusGroup (frozen dataclasses)
DEPENDENCIES:
  - dataclasses (stdlib)
  - typing (stdlib)
  - taskbeacon.utils (tag splitting, integer parsing)
NOTES:
  - Task.from_export() converts one Taskwarrior export object
  - Suggestion.from_dict() coerces loosely typed model output
  - Catalog and rule models are immutable once loaded from config
  - TaskDelta has no description field, so modifies never touch it
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..utils import split_tags, parse_leading_int, unique
from .constants import BEACON_TAG_PREFIX


def _tag_list(value) -> List[str]:
    """Accept a list of tags or a space-separated string."""
    if value is None:
        return []
    if isinstance(value, str):
        return split_tags(value)
    if isinstance(value, (list, tuple)):
        return unique(str(v) for v in value if v is not None)
    return []


def _text(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


@dataclass
class Task:
    """A Taskwarrior task as seen through `task export`."""

    id: int = 0
    uuid: str = ""
    description: str = ""
    project: Optional[str] = None
    priority: str = ""
    due: str = ""
    scheduled: str = ""
    tags: List[str] = field(default_factory=list)
    effort: str = ""
    impact: str = ""
    estimate: str = ""
    fun: str = ""
    blocks: int = 0
    urgency: float = 0.0
    status: str = "pending"

    @classmethod
    def from_export(cls, data: dict) -> "Task":
        """Convert a Taskwarrior export object to a Task."""
        try:
            urgency = float(data.get("urgency") or 0.0)
        except (TypeError, ValueError):
            urgency = 0.0

        return cls(
            id=int(data.get("id") or 0),
            uuid=_text(data.get("uuid")),
            description=_text(data.get("description")),
            project=_text(data.get("project")) or None,
            priority=_text(data.get("priority")),
            due=_text(data.get("due")),
            scheduled=_text(data.get("scheduled")),
            tags=_tag_list(data.get("tags")),
            effort=_text(data.get("effort")),
            impact=_text(data.get("impact")),
            estimate=_text(data.get("est")),
            fun=_text(data.get("fun")),
            blocks=max(0, parse_leading_int(data.get("blocks"))),
            urgency=urgency,
            status=_text(data.get("status")) or "pending",
        )

    def has_beacon(self) -> bool:
        """True when the task already carries a goal tag."""
        return any(tag.startswith(BEACON_TAG_PREFIX) for tag in self.tags)


@dataclass
class TaskDelta:
    """
    Attribute changes for an existing task.

    project=None leaves the stored project untouched; empty strings are not sent.
    """

    project: Optional[str] = None
    priority: str = ""
    due: str = ""
    scheduled: str = ""
    effort: str = ""
    impact: str = ""
    estimate: str = ""
    fun: str = ""
    blocks: int = 0
    tags: List[str] = field(default_factory=list)


@dataclass
class Suggestion:
    """Structured enrichment suggested by the text-generation service."""

    description: str = ""
    beacons: List[str] = field(default_factory=list)
    directions: List[str] = field(default_factory=list)
    project: str = ""
    priority: str = ""
    due: str = ""
    scheduled: str = ""
    effort: str = ""
    impact: str = ""
    estimate: str = ""
    fun: str = ""
    blocks: int = 0
    is_waste: bool = False
    reasoning: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Suggestion":
        """Build a Suggestion from parsed model JSON, tolerating loose types."""
        is_waste = data.get("is_waste", False)
        if isinstance(is_waste, str):
            is_waste = is_waste.strip().lower() in ("true", "yes", "1")

        return cls(
            description=_text(data.get("description")),
            beacons=_tag_list(data.get("beacons")),
            directions=_tag_list(data.get("directions")),
            project=_text(data.get("project")),
            priority=_text(data.get("priority")).upper(),
            due=_text(data.get("due")),
            scheduled=_text(data.get("scheduled")),
            effort=_text(data.get("effort")).upper(),
            impact=_text(data.get("impact")).upper(),
            estimate=_text(data.get("estimate")),
            fun=_text(data.get("fun")).upper(),
            blocks=parse_leading_int(data.get("blocks")),
            is_waste=bool(is_waste),
            reasoning=_text(data.get("reasoning")),
        )


@dataclass(frozen=True)
class Direction:
    """A sub-goal contributing to a beacon."""

    name: str
    tag: str
    description: str = ""


@dataclass(frozen=True)
class Beacon:
    """A top-level life goal with its directions."""

    name: str
    tag: str
    description: str = ""
    directions: Tuple[Direction, ...] = ()


@dataclass(frozen=True)
class ProjectRule:
    """A known project with keyword hints and an optional focus quota."""

    name: str
    keywords: Tuple[str, ...] = ()
    quota: int = 0


@dataclass(frozen=True)
class FocusGroup:
    """A named bucket of projects matched by include/exclude patterns."""

    name: str
    patterns: Tuple[str, ...] = ()
    quota: int = 0
