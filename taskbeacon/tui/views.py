"""
FILE: taskbeacon/tui/views.py
PURPOSE: Rich renderables for the add, enrich and focus screens
EXPORTS:
  - render_flow(flow) -> RenderableType
  - render_preview(flow) -> RenderableType
  - render_editing(flow) -> RenderableType
  - render_focus(view) -> Text
  - format_focus_task(task, show_project) -> Text
DEPENDENCIES:
  - rich (Text, Panel, Group, Spinner)
  - taskbeacon.core (flows, focus view, constants)
  - taskbeacon.tui.style (colors and hints)
NOTES:
  - Pure functions of flow state; nothing here reads input or mutates flows
  - Batch previews mark the description "(unchanged)" and an existing
    project "(preserved)", matching what the commit will do
"""

from rich.console import Group
from rich.panel import Panel
from rich.spinner import Spinner
from rich.text import Text

from ..core.batch_flow import BatchFlow
from ..core.focus import FocusView
from ..core.models import Task
from ..core.constants import (
    PHASE_LOADING,
    PHASE_FETCHING,
    PHASE_PREVIEW,
    PHASE_EDITING,
    PHASE_COMMITTING,
    PHASE_DONE,
    PHASE_ERROR,
    EFFORT_HINT,
    IMPACT_HINT,
    FUN_HINT,
)
from ..utils import truncate
from . import style


NONE_TEXT = "--"


def _label(name: str, selected: bool = False) -> Text:
    text = Text(f"{name}:".ljust(style.LABEL_WIDTH), style=style.LABEL_SELECTED if selected else style.LABEL)
    text.append(" ")
    return text


def _value_or_none(text: Text, value: str) -> None:
    if value:
        text.append(value, style=style.VALUE)
    else:
        text.append(NONE_TEXT, style=style.MUTED)


def _uda(text: Text, value: str, hint: str) -> None:
    _value_or_none(text, value)
    if value:
        text.append(f" ({hint})", style=style.MUTED)


def _chips(text: Text, tags, chip_style: str) -> None:
    if not tags:
        text.append("none", style=style.MUTED)
        return
    for i, tag in enumerate(tags):
        if i:
            text.append(" ")
        text.append(f" {tag} ", style=chip_style)


def _help(line: str) -> Text:
    return Text(line, style=style.HELP)


def _title(flow) -> str:
    if isinstance(flow, BatchFlow):
        position = f" ({flow.index + 1}/{len(flow.tasks)})" if flow.tasks else ""
        return f"tb enrich{position}"
    return "tb add"


# --- Waiting screens ---


def render_waiting(flow) -> Group:
    if flow.phase == PHASE_COMMITTING:
        message = "Saving to Taskwarrior..."
    elif isinstance(flow, BatchFlow) and flow.phase == PHASE_LOADING:
        message = "Loading tasks..."
    else:
        message = "Analyzing task with LLM..."

    parts = [Spinner("dots", text=Text(f" {message}", style=style.PRIMARY))]
    if isinstance(flow, BatchFlow):
        if flow.current is not None:
            parts.append(Text(f"\n{_title(flow)}", style=style.TITLE))
            parts.append(Text(flow.current.description, style=style.SUBTITLE))
    else:
        parts.append(Text(f"\n{flow.description}", style=style.SUBTITLE))

    parts.append(Text(""))
    if flow.phase == PHASE_COMMITTING:
        parts.append(_help("[ctrl+c] Cancel  (esc and q are ignored while saving)"))
    else:
        parts.append(_help("[esc] Cancel"))
    return Group(*parts)


# --- Preview ---


def render_preview(flow) -> Group:
    s = flow.suggestion
    batch = isinstance(flow, BatchFlow)
    header = Text()

    if batch:
        task = flow.current
        header.append_text(_label("Task"))
        header.append(task.description, style=style.SUBTITLE)
        if task.project:
            header.append("\n")
            header.append_text(_label("Project"))
            header.append(task.project, style=style.VALUE)
    else:
        header.append_text(_label("Original"))
        header.append(flow.description, style=style.SUBTITLE)

    parts = [Text(_title(flow), style=style.TITLE), header]

    if s.is_waste:
        banner = Text()
        banner.append(" WASTE ", style=style.WASTE_CHIP)
        banner.append(" This task doesn't align with any beacon", style=style.SUBTITLE)
        parts.append(Text(""))
        parts.append(banner)

    body = Text()
    body.append_text(_label("Description"))
    if batch:
        body.append("(unchanged)", style=style.MUTED)
    else:
        _value_or_none(body, s.description)
    body.append("\n")

    body.append_text(_label("Beacons"))
    _chips(body, s.beacons, style.BEACON_CHIP)
    body.append("\n")
    body.append_text(_label("Directions"))
    _chips(body, s.directions, style.DIRECTION_CHIP)
    body.append("\n")

    body.append_text(_label("Project"))
    if batch and flow.current.project:
        body.append(flow.current.project, style=style.VALUE)
        body.append(" (preserved)", style=style.MUTED)
    else:
        _value_or_none(body, s.project)
    body.append("\n")

    body.append_text(_label("Priority"))
    _value_or_none(body, s.priority)
    body.append("\n")
    body.append_text(_label("Due"))
    _value_or_none(body, s.due)
    body.append(" (hard deadline)", style=style.MUTED)
    body.append("\n")
    body.append_text(_label("Scheduled"))
    _value_or_none(body, s.scheduled)
    body.append(" (soft due date)", style=style.MUTED)
    body.append("\n")

    body.append_text(_label("Effort"))
    _uda(body, s.effort, EFFORT_HINT)
    body.append("\n")
    body.append_text(_label("Impact"))
    _uda(body, s.impact, IMPACT_HINT)
    body.append("\n")
    body.append_text(_label("Estimate"))
    _value_or_none(body, s.estimate)
    body.append("\n")
    body.append_text(_label("Fun"))
    _uda(body, s.fun, FUN_HINT)
    body.append("\n")
    body.append_text(_label("Blocks"))
    if s.blocks > 0:
        body.append(str(s.blocks), style=style.VALUE)
        body.append(f" ({style.blocks_hint(s.blocks)})", style=style.MUTED)
    else:
        body.append(f"0 ({style.blocks_hint(0)})", style=style.MUTED)

    if s.reasoning:
        body.append("\n\n")
        body.append(s.reasoning, style=style.SUBTITLE)

    parts.append(Panel(body, border_style=style.PRIMARY, padding=(1, 2)))

    if batch:
        parts.append(_help("[enter/a] Accept  [e] Edit  [s/n] Skip  [esc] Done  [q] Quit"))
    else:
        parts.append(_help("[enter/a] Accept  [e] Edit  [s] Skip LLM  [esc/q] Cancel"))
    return Group(*parts)


# --- Editing ---


def _field_value(field) -> Text:
    """Field text, with a block cursor on the focused field."""
    if not field.focused:
        return Text(field.value, style=style.VALUE)
    value = field.value
    text = Text(value[: field.cursor], style=style.VALUE)
    under = value[field.cursor: field.cursor + 1] or " "
    text.append(under, style="reverse")
    text.append(value[field.cursor + 1:], style=style.VALUE)
    return text


def render_editing(flow) -> Group:
    batch = isinstance(flow, BatchFlow)
    parts = [Text(f"{_title(flow)} - Edit Mode", style=style.TITLE)]
    if batch:
        task_line = _label("Task")
        task_line.append(flow.current.description, style=style.SUBTITLE)
        parts.append(task_line)
    parts.append(Text(""))

    for field in flow.fields:
        line = _label(field.name, selected=field.focused)
        line.append_text(_field_value(field))
        parts.append(line)

    parts.append(Text(""))
    parts.append(_help("[tab] Next field  [shift+tab] Previous  [enter] Save field  [esc] Back"))
    return Group(*parts)


# --- Terminal screens ---


def render_done(flow) -> Text:
    if isinstance(flow, BatchFlow):
        text = Text("Batch enrichment complete!", style=f"bold {style.SUCCESS}")
        text.append(f"\n  Processed: {flow.processed}  Skipped: {flow.skipped}", style=style.VALUE)
        return text
    return Text(f"Task added successfully! {style.celebrate_add()}", style=f"bold {style.SUCCESS}")


def render_error(flow) -> Group:
    parts = [Text(f"Error: {flow.error}", style=f"bold {style.ERROR}")]
    if isinstance(flow, BatchFlow) and (flow.processed or flow.skipped):
        parts.append(Text(
            f"Processed: {flow.processed}  Skipped: {flow.skipped} (earlier changes were kept)",
            style=style.MUTED,
        ))
    parts.append(Text(""))
    parts.append(_help("Press any key to exit"))
    return Group(*parts)


def render_flow(flow):
    """Pick the screen for the flow's current phase."""
    if flow.phase in (PHASE_LOADING, PHASE_FETCHING, PHASE_COMMITTING):
        return render_waiting(flow)
    if flow.phase == PHASE_PREVIEW:
        return render_preview(flow)
    if flow.phase == PHASE_EDITING:
        return render_editing(flow)
    if flow.phase == PHASE_DONE:
        return render_done(flow)
    if flow.phase == PHASE_ERROR:
        return render_error(flow)
    return Text("")


# --- Focus view ---


def format_focus_task(task: Task, show_project: bool) -> Text:
    """
    One focus line: id, urgency, priority, blocks badge, [project], description, date.

    Example:
        "12   9.3    H  B2 Fix login bug due:2025-01-10"
    """
    line = Text()
    line.append(f"{task.id:<4}", style="grey50")
    line.append(" ")
    line.append(f"{task.urgency:<6.1f}", style="yellow")
    line.append(" ")
    priority = task.priority if task.priority in style.PRIORITY_COLORS else " "
    line.append(f"{priority:<2}", style=style.PRIORITY_COLORS.get(priority, ""))
    line.append(" ")
    if task.blocks > 0:
        line.append(f"B{task.blocks}", style="magenta")
    else:
        line.append("  ")
    line.append(" ")

    if show_project and task.project:
        project = task.project
        if len(project) > 14:
            project = project[:14] + ".."
        line.append(f"{project:<16}", style=style.PRIMARY)
        line.append(" ")

    max_len = 35 if show_project else 50
    line.append(truncate(task.description, max_len))

    if task.due:
        line.append(f"  due:{task.due}", style="red")
    elif task.scheduled:
        line.append(f"  sched:{task.scheduled}", style=style.PRIMARY)
    return line


def render_focus(view: FocusView) -> Text:
    """Render the balanced focus list with its group summary."""
    text = Text("tb focus - Balanced Task List", style=style.TITLE)
    text.append("\n\n")

    text.append_text(_label("Groups" if view.uses_focus_groups else "Projects"))
    summary = ", ".join(f"{g.name}: {g.selected}/{g.total}" for g in view.groups)
    text.append(summary or NONE_TEXT, style=style.MUTED)
    text.append("\n")
    text.append_text(_label("Total focus"))
    text.append(f"{view.total_selected} tasks", style=style.VALUE)
    text.append("\n")

    sections = view.sections()
    for group_name, tasks in sections:
        text.append("\n")
        text.append(f"─── {group_name} ───", style=style.SUBTITLE)
        text.append("\n")
        for task in tasks:
            text.append_text(format_focus_task(task, view.uses_focus_groups))
            text.append("\n")

    if not sections:
        text.append("\n  No pending tasks found\n", style=style.MUTED)

    return text
