"""
FILE: taskbeacon/core/focus.py
PURPOSE: Balanced cross-project focus list with per-group quotas
EXPORTS:
  - match_pattern(pattern, project) -> bool
  - resolve_group(project, focus_groups) -> Optional[str]
  - GroupSummary, FocusEntry, FocusView (dataclasses)
  - rule_quota(rules, name, default_quota) -> int
  - balance(tasks, focus_groups, projects, default_quota, quota_for) -> FocusView
  - balance_from_config(tasks, config) -> FocusView
DEPENDENCIES:
  - taskbeacon.core.models (Task, FocusGroup, ProjectRule)
  - taskbeacon.core.constants (NO_PROJECT, DEFAULT_QUOTA)
NOTES:
  - Pure and re-entrant: no state survives between calls
  - With focus groups configured, unmatched tasks are dropped entirely
  - Final order is by urgency across groups; a group can show up in more
    than one run when urgencies interleave
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .models import Task, FocusGroup, ProjectRule
from .constants import NO_PROJECT, DEFAULT_QUOTA


logger = logging.getLogger(__name__)


def match_pattern(pattern: str, project: str) -> bool:
    """
    Match a project name against a focus pattern.

    '*' matches everything, a trailing '*' is a prefix match,
    anything else must be equal. No other glob characters are special.

    Examples:
        match_pattern("er.*", "er.sre")  -> True
        match_pattern("er.*", "errr")    -> False
        match_pattern("personal", "personal2") -> False
    """
    if pattern == "*":
        return True
    if pattern.endswith("*"):
        return project.startswith(pattern[:-1])
    return pattern == project


def resolve_group(project: str, focus_groups: Sequence[FocusGroup]) -> Optional[str]:
    """
    Find the focus group a project belongs to.

    Groups are checked in configured order and the first match wins.
    A '!pattern' that matches the project skips the whole group, even
    if one of its include patterns would also match.

    Returns:
        Group name, or None when no group takes the project
    """
    for group in focus_groups:
        excluded = any(
            match_pattern(p[1:], project)
            for p in group.patterns
            if p.startswith("!")
        )
        if excluded:
            continue

        for pattern in group.patterns:
            if pattern and not pattern.startswith("!") and match_pattern(pattern, project):
                return group.name

    return None


@dataclass
class GroupSummary:
    """Per-group counts shown in the focus header."""

    name: str
    selected: int
    total: int
    quota: int


@dataclass
class FocusEntry:
    """A selected task and the group it was drawn from."""

    task: Task
    group: str


@dataclass
class FocusView:
    """Result of balancing: selected tasks in display order plus group counts."""

    entries: List[FocusEntry] = field(default_factory=list)
    groups: List[GroupSummary] = field(default_factory=list)
    uses_focus_groups: bool = False

    @property
    def tasks(self) -> List[Task]:
        return [e.task for e in self.entries]

    @property
    def total_selected(self) -> int:
        return len(self.entries)

    def sections(self) -> List[Tuple[str, List[Task]]]:
        """Split the display order into contiguous runs of the same group."""
        runs: List[Tuple[str, List[Task]]] = []
        for entry in self.entries:
            if runs and runs[-1][0] == entry.group:
                runs[-1][1].append(entry.task)
            else:
                runs.append((entry.group, [entry.task]))
        return runs


def _by_urgency(tasks: List[Task]) -> List[Task]:
    # sorted() is stable: equal urgencies keep store order
    return sorted(tasks, key=lambda t: -t.urgency)


def rule_quota(rules, name: str, default_quota: int = DEFAULT_QUOTA) -> int:
    """Quota of the named rule, or default_quota when unset or not positive."""
    for rule in rules:
        if rule.name == name and rule.quota > 0:
            return rule.quota
    return default_quota


def balance(
    tasks: Sequence[Task],
    focus_groups: Sequence[FocusGroup] = (),
    projects: Sequence[ProjectRule] = (),
    default_quota: int = DEFAULT_QUOTA,
    quota_for: Optional[Callable[[str], int]] = None,
) -> FocusView:
    """
    Build the balanced focus list.

    Args:
        tasks: Pending tasks, in store order
        focus_groups: Pattern rules; when empty, each project is its own group
        projects: Per-project quota rules (used when no focus groups exist)
        default_quota: Quota for groups without a positive explicit quota
        quota_for: Group name -> quota; overrides the rule lookup when given

    Returns:
        FocusView with at most `quota` highest-urgency tasks per group,
        merged and sorted by descending urgency
    """
    uses_groups = len(focus_groups) > 0
    if default_quota <= 0:
        default_quota = DEFAULT_QUOTA

    # Partition, keeping first-seen group order for determinism
    groups: Dict[str, List[Task]] = {}
    for task in tasks:
        project = task.project or NO_PROJECT
        if uses_groups:
            group_name = resolve_group(project, focus_groups)
            if group_name is None:
                logger.debug("Task %s (%s) matches no focus group", task.id, project)
                continue
        else:
            group_name = project
        groups.setdefault(group_name, []).append(task)

    rules = focus_groups if uses_groups else projects
    entries: List[FocusEntry] = []
    summaries: List[GroupSummary] = []

    for name in sorted(groups):
        ranked = _by_urgency(groups[name])
        if quota_for is not None:
            quota = quota_for(name)
        else:
            quota = rule_quota(rules, name, default_quota)
        chosen = ranked[:quota]
        entries.extend(FocusEntry(task=t, group=name) for t in chosen)
        summaries.append(
            GroupSummary(name=name, selected=len(chosen), total=len(ranked), quota=quota)
        )

    entries.sort(key=lambda e: -e.task.urgency)

    return FocusView(entries=entries, groups=summaries, uses_focus_groups=uses_groups)


def balance_from_config(tasks: Sequence[Task], config) -> FocusView:
    """Balance using the rules and quotas of a loaded Config."""
    return balance(
        tasks,
        focus_groups=config.focus_group_rules(),
        projects=config.project_rules(),
        default_quota=config.default_quota,
        quota_for=config.quota_for,
    )
