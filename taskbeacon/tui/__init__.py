"""
FILE: taskbeacon/tui/__init__.py
PURPOSE: Terminal surface for the add and enrich flows and the focus view
EXPORTS:
  - run_flow() (from tui.runner)
  - render_focus() (from tui.views)
DEPENDENCIES:
  - prompt_toolkit (raw keyboard input)
  - rich (Live screen and renderables)
NOTES:
  - Flows stay terminal-agnostic; everything that draws or reads keys is here
"""

from .runner import run_flow
from .views import render_focus

__all__ = ["run_flow", "render_focus"]
