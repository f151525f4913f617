"""
FILE: taskbeacon/llm/base.py
PURPOSE: Common SuggestionProvider behavior shared by every backend
EXPORTS:
  - SuggestionProvider (base class)
DEPENDENCIES:
  - taskbeacon.llm.prompt (build_prompt, parse_suggestion_response)
NOTES:
  - Backends only implement complete(prompt) -> raw text
  - Every failure surfaces as ProviderError
"""

import logging
from typing import Sequence

from .prompt import build_prompt, parse_suggestion_response
from ..core.models import Suggestion


logger = logging.getLogger(__name__)


class SuggestionProvider:
    """Turns a task description into a Suggestion via a text-generation backend."""

    name = "base"

    def enrich(self, description: str, beacons: Sequence = (), projects: Sequence = ()) -> Suggestion:
        prompt = build_prompt(description, beacons, projects)
        logger.debug("Requesting suggestion from %s for %r", self.name, description)
        text = self.complete(prompt)
        suggestion = parse_suggestion_response(text)
        logger.debug("Suggestion from %s: %s", self.name, suggestion)
        return suggestion

    def complete(self, prompt: str) -> str:
        """Send the prompt and return the raw reply text."""
        raise NotImplementedError
