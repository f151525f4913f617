"""
FILE: taskbeacon/llm/claude_cli.py
PURPOSE: Suggestion backend that shells out to the local Claude CLI
EXPORTS:
  - ClaudeCLIProvider
  - find_claude() -> Optional[str]
DEPENDENCIES:
  - subprocess, shutil (stdlib)
  - taskbeacon.llm.base (SuggestionProvider)
NOTES:
  - Runs: claude -p --model <model>, prompt piped on stdin
  - No API key needed; uses whatever login the CLI already has
  - Binary lookup happens per call so PATH changes are picked up
"""

import logging
import os
import shutil
import subprocess
from typing import Optional

from .base import SuggestionProvider
from ..core.exceptions import ProviderError
from ..core.constants import PROVIDER_CLAUDE_CLI, PROVIDER_MODELS


logger = logging.getLogger(__name__)

CLAUDE_BIN = "claude"
TIMEOUT = 120


def find_claude() -> Optional[str]:
    """
    Locate the claude executable.

    Checks PATH via shutil.which first, then each PATH directory by hand
    (PATH set in a shell profile is not always inherited by subprocesses).
    """
    claude_path = shutil.which(CLAUDE_BIN)
    if claude_path:
        return claude_path

    for path_dir in os.environ.get("PATH", "").split(os.pathsep):
        potential_path = os.path.join(path_dir, CLAUDE_BIN)
        if os.path.exists(potential_path):
            return potential_path
    return None


class ClaudeCLIProvider(SuggestionProvider):
    name = PROVIDER_CLAUDE_CLI

    def __init__(self, model: str = ""):
        self.model = model or PROVIDER_MODELS[PROVIDER_CLAUDE_CLI]

    def complete(self, prompt: str) -> str:
        claude_path = find_claude()
        if not claude_path:
            raise ProviderError("claude CLI not found on PATH", self.name)

        cmd = [claude_path, "-p", "--model", self.model]
        try:
            result = subprocess.run(
                cmd,
                input=prompt,
                capture_output=True,
                text=True,
                encoding="utf-8",
                timeout=TIMEOUT,
            )
        except subprocess.TimeoutExpired:
            raise ProviderError(f"claude CLI timed out after {TIMEOUT}s", self.name)
        except OSError as e:
            raise ProviderError(f"failed to run claude CLI: {e}", self.name)

        if result.returncode != 0:
            detail = (result.stderr or "").strip()[:200]
            raise ProviderError(
                f"claude CLI failed (exit {result.returncode}): {detail}", self.name
            )

        output = result.stdout.strip()
        if not output:
            raise ProviderError("empty response from claude CLI", self.name)
        logger.debug("claude CLI returned %d characters", len(output))
        return output
