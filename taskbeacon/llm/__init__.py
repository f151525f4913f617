"""
FILE: taskbeacon/llm/__init__.py
PURPOSE: Suggestion backends and the factory that picks one from config
EXPORTS:
  - create_provider(settings) -> SuggestionProvider
  - SuggestionProvider, build_prompt, parse_suggestion_response
DEPENDENCIES:
  - taskbeacon.llm.http_providers (httpx backends)
  - taskbeacon.llm.claude_cli (local CLI backend)
  - taskbeacon.core.exceptions (ConfigError)
NOTES:
  - Unknown provider names are a configuration problem (ConfigError)
  - A missing API key is a ProviderError raised by the backend itself
"""

from .base import SuggestionProvider
from .prompt import build_prompt, parse_suggestion_response
from .http_providers import AnthropicProvider, OpenAIProvider, OllamaProvider
from .claude_cli import ClaudeCLIProvider
from ..core.exceptions import ConfigError
from ..core.constants import (
    PROVIDER_ANTHROPIC,
    PROVIDER_OPENAI,
    PROVIDER_OLLAMA,
    PROVIDER_CLAUDE_CLI,
)


def create_provider(settings) -> SuggestionProvider:
    """Build the backend named by LLMSettings.provider."""
    provider = (settings.provider or "").lower()

    if provider == PROVIDER_ANTHROPIC:
        return AnthropicProvider(settings.api_key(), model=settings.model)
    if provider == PROVIDER_OPENAI:
        return OpenAIProvider(settings.api_key(), model=settings.model, base_url=settings.base_url)
    if provider == PROVIDER_OLLAMA:
        return OllamaProvider(base_url=settings.base_url, model=settings.model)
    if provider == PROVIDER_CLAUDE_CLI:
        return ClaudeCLIProvider(model=settings.model)

    raise ConfigError(f"unknown LLM provider '{settings.provider}'")


__all__ = [
    "create_provider",
    "SuggestionProvider",
    "build_prompt",
    "parse_suggestion_response",
    "AnthropicProvider",
    "OpenAIProvider",
    "OllamaProvider",
    "ClaudeCLIProvider",
]
