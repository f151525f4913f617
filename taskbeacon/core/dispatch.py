"""
FILE: taskbeacon/core/dispatch.py
PURPOSE: Execute flow effects against the suggestion provider and task store
EXPORTS:
  - execute(effect, provider, store, config) -> event
  - drive(flow, provider, store, config, choose_key) -> flow
  - accept_all(flow) -> Optional[str]
DEPENDENCIES:
  - taskbeacon.core.events (events and effects)
  - taskbeacon.core.exceptions (ProviderError, StoreError)
NOTES:
  - store is anything with export/untagged_pending/create_task/modify_task
    (the repository module in production, a fake in tests)
  - ProviderError and StoreError become failure events, never escape
  - drive() is synchronous and used for --yes mode and tests;
    the terminal runner executes the same effects on a worker thread
"""

import logging
from collections import deque
from typing import Callable, Optional

from .events import (
    KeyPressed,
    FetchSuggestion,
    LoadTasks,
    CreateTask,
    ModifyTask,
    Quit,
    SuggestionReady,
    SuggestionFailed,
    TasksLoaded,
    TaskCreated,
    TaskModified,
    StoreFailed,
)
from .exceptions import ProviderError, StoreError
from .constants import PHASE_PREVIEW, PHASE_ERROR


logger = logging.getLogger(__name__)


def execute(effect, provider, store, config=None):
    """
    Run one effect and return the completion event for it.

    Returns:
        Event to feed back into the flow, or None for Quit

    Raises:
        ValueError: If the effect type is unknown
    """
    if isinstance(effect, FetchSuggestion):
        beacons = config.goal_catalog() if config is not None else ()
        projects = config.project_rules() if config is not None else ()
        try:
            suggestion = provider.enrich(effect.description, beacons, projects)
        except ProviderError as e:
            return SuggestionFailed(str(e))
        return SuggestionReady(suggestion)

    if isinstance(effect, LoadTasks):
        try:
            if effect.filter:
                tasks = store.export(effect.filter)
            else:
                tasks = store.untagged_pending()
        except StoreError as e:
            return StoreFailed(str(e))
        return TasksLoaded(tasks)

    if isinstance(effect, CreateTask):
        try:
            uuid = store.create_task(effect.task)
        except StoreError as e:
            return StoreFailed(str(e))
        return TaskCreated(uuid)

    if isinstance(effect, ModifyTask):
        try:
            store.modify_task(effect.uuid, effect.delta)
        except StoreError as e:
            return StoreFailed(str(e))
        return TaskModified(effect.uuid)

    if isinstance(effect, Quit):
        return None

    raise ValueError(f"Unknown effect: {effect!r}")


def accept_all(flow) -> Optional[str]:
    """Key chooser for --yes: accept every preview, leave on error."""
    if flow.phase == PHASE_PREVIEW:
        return "a"
    if flow.phase == PHASE_ERROR:
        return "q"
    return None


def drive(
    flow,
    provider,
    store,
    config=None,
    choose_key: Optional[Callable] = None,
):
    """
    Run a flow to completion without a terminal.

    Effects are executed one at a time in the order returned. When nothing
    is outstanding, choose_key(flow) supplies the next key; None stops.

    Returns:
        The flow, for inspection of its final phase and counters
    """
    pending = deque(flow.start())

    while not flow.closed:
        if pending:
            effect = pending.popleft()
            event = execute(effect, provider, store, config)
            if event is None:
                break
            pending.extend(flow.handle(event))
            continue

        key = choose_key(flow) if choose_key is not None else None
        if key is None:
            logger.debug("No more keys, stopping in phase %s", flow.phase)
            break
        pending.extend(flow.handle(KeyPressed(key)))

    return flow
