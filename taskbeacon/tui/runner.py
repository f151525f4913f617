"""
FILE: taskbeacon/tui/runner.py
PURPOSE: Run a flow interactively on a rich Live screen
EXPORTS:
  - run_flow(flow, provider, store, config) -> flow
DEPENDENCIES:
  - rich (Console, Live, Text)
  - threading, queue (daemon worker per effect, completion queue)
  - taskbeacon.core.dispatch (execute)
  - taskbeacon.tui.keys (KeyReader)
  - taskbeacon.tui.views (render_flow)
NOTES:
  - At most one effect is in flight; the next one starts only after the
    previous completion event has been handled
  - Workers are daemon threads, so quitting never waits on a slow request;
    the abandoned result is never delivered
  - Raises UserAbort after the screen is closed if the user quit
"""

import logging
import queue
import threading
import time
from collections import deque

from rich.console import Console
from rich.live import Live
from rich.text import Text

from ..core.dispatch import execute
from ..core.events import KeyPressed, Quit
from ..core.exceptions import UserAbort
from .keys import KeyReader
from .views import render_flow
from . import style


logger = logging.getLogger(__name__)

REFRESH_PER_SECOND = 20
POLL_INTERVAL = 0.03
WORKER_NAME = "taskbeacon-effect"


def _start_worker(effect, provider, store, config, results: queue.Queue) -> threading.Thread:
    """Execute one effect on a daemon thread and post (event, error) to results."""

    def work():
        try:
            results.put((execute(effect, provider, store, config), None))
        except Exception as e:
            # Unexpected failures are re-raised on the screen thread
            results.put((None, e))

    worker = threading.Thread(target=work, name=WORKER_NAME, daemon=True)
    worker.start()
    return worker


def run_flow(flow, provider, store, config=None, console=None, reader=None):
    """
    Drive a flow with keyboard input until it closes.

    Args:
        flow: AddFlow or BatchFlow (not started yet)
        provider: SuggestionProvider
        store: Task store (the repository module or a stand-in)
        config: Config passed to the provider as catalog context
        console: Console to draw on (default: new stdout console)
        reader: Key source with read() -> list of key names (default: KeyReader)

    Returns:
        The finished flow

    Raises:
        UserAbort: If the user quit before the flow finished
    """
    console = console or Console()
    results = queue.Queue()
    pending = deque(flow.start())
    in_flight = False

    with (reader or KeyReader()) as keys, Live(
        render_flow(flow), console=console, refresh_per_second=REFRESH_PER_SECOND
    ) as live:
        while not flow.closed:
            if not in_flight and pending:
                effect = pending.popleft()
                if isinstance(effect, Quit):
                    break
                logger.debug("Starting %s", type(effect).__name__)
                _start_worker(effect, provider, store, config, results)
                in_flight = True

            if in_flight:
                try:
                    event, error = results.get_nowait()
                except queue.Empty:
                    pass
                else:
                    in_flight = False
                    if error is not None:
                        raise error
                    if event is not None:
                        pending.extend(flow.handle(event))
                    live.update(render_flow(flow))
                    continue

            for key in keys.read():
                pending.extend(flow.handle(KeyPressed(key)))
                if flow.closed:
                    break

            live.update(render_flow(flow))
            time.sleep(POLL_INTERVAL)

        if flow.aborted:
            live.update(Text("Cancelled", style=style.MUTED))
        else:
            live.update(render_flow(flow))

    if flow.aborted:
        if in_flight:
            logger.debug("Abandoning in-flight request")
        raise UserAbort()
    return flow
