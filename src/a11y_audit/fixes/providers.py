"""LLM provider interfaces for fix suggestions."""

import logging
import os
from abc import ABC, abstractmethod
from typing import Any

import httpx


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class ProviderError(Exception):
    """The provider could not produce a completion."""


class LLMProvider(ABC):
    """Base class for LLM providers."""

    name: str
    env_var: str

    def __init__(
        self,
        api_key: str | None,
        model: str,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.Client | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._client = client

    def is_configured(self) -> bool:
        """Check if the provider is properly configured."""
        return bool(self.api_key)

    def complete(self, prompt: str) -> str:
        """Send a single-turn prompt and return the response text."""
        if not self.is_configured():
            raise ProviderError(f"{self.env_var} not set")

        url, headers, body = self._build_request(prompt)
        try:
            if self._client is not None:
                data = self._post(self._client, url, headers, body)
            else:
                with httpx.Client(timeout=self.timeout) as client:
                    data = self._post(client, url, headers, body)
            return self._extract_text(data)
        except httpx.TimeoutException as e:
            raise ProviderError(f"{self.name} timed out after {self.timeout}s") from e
        except httpx.HTTPStatusError as e:
            raise ProviderError(f"{self.name} returned HTTP {e.response.status_code}") from e
        except httpx.RequestError as e:
            raise ProviderError(f"{self.name} request failed: {e}") from e
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise ProviderError(f"{self.name} returned an unexpected response: {e}") from e

    @staticmethod
    def _post(client: httpx.Client, url: str, headers: dict[str, str], body: dict[str, Any]) -> Any:
        resp = client.post(url, headers=headers, json=body)
        resp.raise_for_status()
        return resp.json()

    @abstractmethod
    def _build_request(self, prompt: str) -> tuple[str, dict[str, str], dict[str, Any]]:
        """Return (url, headers, json body) for the completion call."""

    @abstractmethod
    def _extract_text(self, data: Any) -> str:
        """Pull the completion text out of the decoded response."""


class GoogleProvider(LLMProvider):
    """Google Gemini provider."""

    name = "Google"
    env_var = "GEMINI_API_KEY"

    def __init__(self, api_key: str | None = None, model: str = "gemini-2.5-flash", **kwargs: Any):
        api_key = api_key or os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
        super().__init__(api_key, model, **kwargs)

    def _build_request(self, prompt: str) -> tuple[str, dict[str, str], dict[str, Any]]:
        url = f"https://generativelanguage.googleapis.com/v1beta/models/{self.model}:generateContent"
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key or "",
        }
        return url, headers, {"contents": [{"parts": [{"text": prompt}]}]}

    def _extract_text(self, data: Any) -> str:
        return data["candidates"][0]["content"]["parts"][0]["text"]


class OpenAIProvider(LLMProvider):
    """OpenAI (ChatGPT) provider."""

    name = "OpenAI"
    env_var = "OPENAI_API_KEY"
    base_url = "https://api.openai.com/v1"

    def __init__(self, api_key: str | None = None, model: str = "gpt-4o-mini", **kwargs: Any):
        super().__init__(api_key or os.getenv("OPENAI_API_KEY"), model, **kwargs)

    def _build_request(self, prompt: str) -> tuple[str, dict[str, str], dict[str, Any]]:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        body = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": 1000,
            "temperature": 0.2,
        }
        return f"{self.base_url}/chat/completions", headers, body

    def _extract_text(self, data: Any) -> str:
        return data["choices"][0]["message"]["content"]


class AnthropicProvider(LLMProvider):
    """Anthropic (Claude) provider."""

    name = "Anthropic"
    env_var = "ANTHROPIC_API_KEY"
    base_url = "https://api.anthropic.com/v1"

    def __init__(self, api_key: str | None = None, model: str = "claude-3-5-haiku-20241022", **kwargs: Any):
        super().__init__(api_key or os.getenv("ANTHROPIC_API_KEY"), model, **kwargs)

    def _build_request(self, prompt: str) -> tuple[str, dict[str, str], dict[str, Any]]:
        headers = {
            "x-api-key": self.api_key or "",
            "anthropic-version": "2023-06-01",
            "Content-Type": "application/json",
        }
        body = {
            "model": self.model,
            "max_tokens": 1000,
            "messages": [{"role": "user", "content": prompt}],
        }
        return f"{self.base_url}/messages", headers, body

    def _extract_text(self, data: Any) -> str:
        return data["content"][0]["text"]


PROVIDERS: dict[str, type[LLMProvider]] = {
    "google": GoogleProvider,
    "openai": OpenAIProvider,
    "anthropic": AnthropicProvider,
}


def get_provider(name: str = "google", **kwargs: Any) -> LLMProvider:
    """Instantiate a provider by name (google, openai, anthropic)."""
    try:
        provider_cls = PROVIDERS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown provider {name!r}; choose from {', '.join(PROVIDERS)}")
    return provider_cls(**kwargs)
