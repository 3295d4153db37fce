"""Abstract base class for LLM providers and shared response parsing."""

import json
import os
import re
from abc import ABC, abstractmethod
from typing import Any


def strip_code_fence(raw_text: str) -> str:
    """Remove a surrounding markdown fence (```json ... ```) if present."""
    cleaned = re.sub(r"^```(?:json)?\s*\n?", "", raw_text.strip())
    return re.sub(r"\n?```\s*$", "", cleaned)


def parse_json_response(raw_text: str) -> Any:
    """Parse an LLM response as JSON.

    Handles markdown-wrapped JSON and prose around a single JSON array/object.
    """
    cleaned = strip_code_fence(raw_text)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        match = re.search(r"(\[.*\]|\{.*\})", cleaned, re.DOTALL)
        if match is None:
            msg = f"Failed to parse LLM response as JSON: {e}"
            raise ValueError(msg) from e
        try:
            return json.loads(match.group(1))
        except json.JSONDecodeError as inner:
            msg = f"Failed to parse LLM response as JSON: {inner}"
            raise ValueError(msg) from inner


class LLMProvider(ABC):
    """Base class that every LLM provider must implement."""

    @property
    @abstractmethod
    def provider_id(self) -> str:
        """Unique identifier for this provider (e.g. 'groq')."""

    @property
    @abstractmethod
    def default_model(self) -> str:
        """The default model ID used when no override is specified."""

    @property
    @abstractmethod
    def env_var(self) -> str | None:
        """Environment variable name for the API key, or None if not needed."""

    @abstractmethod
    def complete(
        self,
        prompt: str,
        model: str | None = None,
        *,
        system: str | None = None,
        max_tokens: int = 1024,
        timeout: float | None = None,
    ) -> str:
        """Send a prompt to the LLM and return the raw response text.

        Args:
            prompt: The user message.
            model: Override the provider's default model. None uses default.
            system: Optional system prompt.
            max_tokens: Upper bound on the completion length.
            timeout: Per-request timeout in seconds passed to the SDK client.

        Raises:
            ValueError: If the API key is not set.
            ImportError: If the provider SDK is not installed.
        """

    def api_key(self) -> str | None:
        if self.env_var is None:
            return None
        return os.environ.get(self.env_var) or None

    def is_configured(self) -> bool:
        """True when the provider's credential is present (always for keyless ones)."""
        return self.env_var is None or self.api_key() is not None

    def require_api_key(self) -> str:
        key = self.api_key()
        if not key:
            msg = f"{self.env_var} environment variable is required"
            raise ValueError(msg)
        return key
