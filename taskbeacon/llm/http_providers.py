"""
FILE: taskbeacon/llm/http_providers.py
PURPOSE: HTTP suggestion backends (Anthropic, OpenAI, Ollama)
EXPORTS:
  - HTTPProvider (base class)
  - AnthropicProvider
  - OpenAIProvider
  - OllamaProvider
DEPENDENCIES:
  - httpx (HTTP client)
  - taskbeacon.llm.base (SuggestionProvider)
  - taskbeacon.core.exceptions (ProviderError)
NOTES:
  - Pass client=httpx.Client(transport=httpx.MockTransport(...)) in tests
  - Transport errors, HTTP errors, API-reported errors, empty replies and
    bodies of the wrong shape all raise ProviderError
  - Hosted backends need an API key at construction time
"""

import logging
from typing import Optional

import httpx

from .base import SuggestionProvider
from ..core.exceptions import ProviderError
from ..core.constants import (
    PROVIDER_ANTHROPIC,
    PROVIDER_OPENAI,
    PROVIDER_OLLAMA,
    PROVIDER_MODELS,
    DEFAULT_OLLAMA_URL,
    REQUEST_TIMEOUT,
)


logger = logging.getLogger(__name__)

ANTHROPIC_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"
OPENAI_URL = "https://api.openai.com/v1/chat/completions"
MAX_TOKENS = 1024


def _error_message(data) -> Optional[str]:
    """Pull an API-reported error out of a decoded body, if there is one."""
    if not isinstance(data, dict):
        return None
    error = data.get("error")
    if isinstance(error, dict):
        return str(error.get("message") or error)
    if isinstance(error, str) and error:
        return error
    return None


class HTTPProvider(SuggestionProvider):
    """Shared request/response handling for JSON-over-HTTP backends."""

    def __init__(self, model: str = "", client: Optional[httpx.Client] = None,
                 timeout: float = REQUEST_TIMEOUT):
        self.model = model or PROVIDER_MODELS.get(self.name, "")
        self._client = client or httpx.Client(timeout=timeout)

    def _post(self, url: str, payload: dict, headers: Optional[dict] = None) -> dict:
        try:
            response = self._client.post(url, json=payload, headers=headers or {})
        except httpx.HTTPError as e:
            raise ProviderError(f"failed to send request: {e}", self.name)

        try:
            data = response.json()
        except ValueError:
            data = None

        if response.is_error:
            message = _error_message(data) or response.text[:200]
            raise ProviderError(
                f"API error ({response.status_code}): {message}", self.name
            )
        if not isinstance(data, dict):
            raise ProviderError("failed to parse response", self.name)

        message = _error_message(data)
        if message:
            raise ProviderError(f"API error: {message}", self.name)
        return data


class AnthropicProvider(HTTPProvider):
    name = PROVIDER_ANTHROPIC

    def __init__(self, api_key: str, model: str = "", client: Optional[httpx.Client] = None):
        if not api_key:
            raise ProviderError("Anthropic API key is not set", self.name)
        super().__init__(model, client)
        self.api_key = api_key

    def complete(self, prompt: str) -> str:
        data = self._post(
            ANTHROPIC_URL,
            {
                "model": self.model,
                "max_tokens": MAX_TOKENS,
                "messages": [{"role": "user", "content": prompt}],
            },
            headers={
                "x-api-key": self.api_key,
                "anthropic-version": ANTHROPIC_VERSION,
            },
        )
        content = data.get("content") or []
        if not isinstance(content, list):
            raise ProviderError("failed to parse response", self.name)
        if not content or not isinstance(content[0], dict):
            raise ProviderError("empty response from API", self.name)
        text = content[0].get("text", "")
        if not isinstance(text, str):
            raise ProviderError("failed to parse response", self.name)
        return text


class OpenAIProvider(HTTPProvider):
    name = PROVIDER_OPENAI

    def __init__(self, api_key: str, model: str = "", client: Optional[httpx.Client] = None,
                 base_url: str = ""):
        if not api_key:
            raise ProviderError("OpenAI API key is not set", self.name)
        super().__init__(model, client)
        self.api_key = api_key
        self.url = base_url.rstrip("/") + "/v1/chat/completions" if base_url else OPENAI_URL

    def complete(self, prompt: str) -> str:
        data = self._post(
            self.url,
            {
                "model": self.model,
                "messages": [
                    {
                        "role": "system",
                        "content": "You are a task enrichment assistant. Respond only with valid JSON.",
                    },
                    {"role": "user", "content": prompt},
                ],
            },
            headers={"Authorization": f"Bearer {self.api_key}"},
        )
        choices = data.get("choices") or []
        if not isinstance(choices, list):
            raise ProviderError("failed to parse response", self.name)
        if not choices:
            raise ProviderError("empty response from API", self.name)
        message = choices[0].get("message") if isinstance(choices[0], dict) else None
        if not isinstance(message, dict):
            raise ProviderError("failed to parse response", self.name)
        text = message.get("content") or ""
        if not isinstance(text, str):
            raise ProviderError("failed to parse response", self.name)
        return text


class OllamaProvider(HTTPProvider):
    name = PROVIDER_OLLAMA

    def __init__(self, base_url: str = "", model: str = "", client: Optional[httpx.Client] = None):
        super().__init__(model, client)
        self.base_url = (base_url or DEFAULT_OLLAMA_URL).rstrip("/")

    def complete(self, prompt: str) -> str:
        data = self._post(
            f"{self.base_url}/api/generate",
            {
                "model": self.model,
                "prompt": prompt,
                "stream": False,
                "format": "json",
            },
        )
        text = data.get("response") or ""
        if not isinstance(text, str):
            raise ProviderError("failed to parse response", self.name)
        if not text.strip():
            raise ProviderError("empty response from API", self.name)
        return text
