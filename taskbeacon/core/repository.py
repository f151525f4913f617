"""
FILE: taskbeacon/core/repository.py
PURPOSE: Task store operations through the Taskwarrior `task` command
EXPORTS:
  - export(filter_text) -> List[Task]
  - untagged_pending() -> List[Task]
  - create_task(task) -> str (uuid)
  - modify_task(uuid, delta) -> None
  - passthrough(args) -> int
  - add_args(task) -> List[str]
  - modify_args(uuid, delta) -> List[str]
DEPENDENCIES:
  - subprocess (runs `task`)
  - json (parses `task export`)
  - shlex (splits filter text)
  - taskbeacon.core.models (Task, TaskDelta)
  - taskbeacon.core.service (filter_untagged)
  - taskbeacon.core.exceptions (StoreError)
NOTES:
  - TASK_BIN can be monkeypatched (tests, alternative installs)
  - Empty attributes are never sent, so modify only touches what is set
  - modify_args has no description argument: synced descriptions stay intact
  - Returns domain objects (Task), never raw dicts
"""

import json
import logging
import shlex
import subprocess
from typing import List

from .models import Task, TaskDelta
from .service import filter_untagged
from .constants import PENDING_FILTER
from .exceptions import StoreError


logger = logging.getLogger(__name__)

# Taskwarrior executable
TASK_BIN = "task"
TIMEOUT = 30


def _run(command: str, args: List[str]) -> subprocess.CompletedProcess:
    """
    Run `task` with arguments and return the completed process.

    Args:
        command: Subcommand named in error messages ("add", "modify", "export")
        args: Full argument list after the binary

    Raises:
        StoreError: If the binary is missing, times out, or exits non-zero
    """
    cmd = [TASK_BIN] + args
    logger.debug("Running %s", " ".join(shlex.quote(a) for a in cmd))
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            timeout=TIMEOUT,
        )
    except FileNotFoundError:
        raise StoreError(f"Taskwarrior not found: '{TASK_BIN}' is not on PATH")
    except subprocess.TimeoutExpired:
        raise StoreError(f"task {command} timed out after {TIMEOUT}s")

    if result.returncode != 0:
        raise StoreError(
            f"task {command} failed (exit {result.returncode})",
            stderr=result.stderr or "",
        )
    return result


def _attribute_args(
    project, priority, due, scheduled, effort, impact, estimate, fun, blocks, tags
) -> List[str]:
    args = []
    if project:
        args.append(f"project:{project}")
    if priority:
        args.append(f"priority:{priority}")
    if due:
        args.append(f"due:{due}")
    if scheduled:
        args.append(f"scheduled:{scheduled}")
    # Custom UDAs
    if effort:
        args.append(f"effort:{effort}")
    if impact:
        args.append(f"impact:{impact}")
    if estimate:
        args.append(f"est:{estimate}")
    if fun:
        args.append(f"fun:{fun}")
    if blocks and blocks > 0:
        args.append(f"blocks:{blocks}")
    for tag in tags:
        args.append(f"+{tag}")
    return args


def add_args(task: Task) -> List[str]:
    """Build `task add` arguments for a new task."""
    return ["add", task.description] + _attribute_args(
        task.project,
        task.priority,
        task.due,
        task.scheduled,
        task.effort,
        task.impact,
        task.estimate,
        task.fun,
        task.blocks,
        task.tags,
    )


def modify_args(uuid: str, delta: TaskDelta) -> List[str]:
    """Build `task <uuid> modify` arguments. Never includes a description."""
    return [uuid, "modify"] + _attribute_args(
        delta.project,
        delta.priority,
        delta.due,
        delta.scheduled,
        delta.effort,
        delta.impact,
        delta.estimate,
        delta.fun,
        delta.blocks,
        delta.tags,
    )


def _parse_export(stdout: str) -> List[Task]:
    if not stdout.strip():
        return []
    try:
        data = json.loads(stdout)
    except json.JSONDecodeError as e:
        raise StoreError(f"failed to parse task export: {e}")
    if not isinstance(data, list):
        raise StoreError("task export did not return a list")
    return [Task.from_export(item) for item in data if isinstance(item, dict)]


def export(filter_text: str = "") -> List[Task]:
    """
    Export tasks matching a Taskwarrior filter.

    Args:
        filter_text: Filter such as "project:work +next" (empty = all tasks)

    Returns:
        Tasks in the order Taskwarrior returns them
    """
    args = shlex.split(filter_text) if filter_text else []
    result = _run("export", args + ["export"])
    tasks = _parse_export(result.stdout)
    logger.debug("Exported %d task(s) for filter %r", len(tasks), filter_text)
    return tasks


def untagged_pending() -> List[Task]:
    """Pending tasks that carry no beacon tag (targets for batch enrichment)."""
    return filter_untagged(export(PENDING_FILTER))


def _latest_uuid() -> str:
    tasks = _parse_export(_run("export", ["+LATEST", "export"]).stdout)
    if not tasks:
        raise StoreError("task was added but +LATEST returned nothing")
    return tasks[0].uuid


def create_task(task: Task) -> str:
    """
    Add a task and return its UUID.

    Raises:
        StoreError: If `task add` fails or the new UUID cannot be read back
    """
    _run("add", add_args(task))
    uuid = _latest_uuid()
    logger.info("Created task %s", uuid)
    return uuid


def modify_task(uuid: str, delta: TaskDelta) -> None:
    """Apply a delta to an existing task."""
    if not uuid:
        raise StoreError("cannot modify a task without a UUID")
    _run("modify", modify_args(uuid, delta))
    logger.info("Modified task %s", uuid)


def passthrough(args: List[str]) -> int:
    """
    Run an arbitrary task command attached to the terminal.

    Returns:
        The command's exit code
    """
    try:
        return subprocess.run([TASK_BIN] + list(args)).returncode
    except FileNotFoundError:
        raise StoreError(f"Taskwarrior not found: '{TASK_BIN}' is not on PATH")
