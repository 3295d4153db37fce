"""OpenAI LLM provider, plus the OpenAI-compatible Groq endpoint."""

import logging

from jobhunt.llm.base import LLMProvider

logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    """LLM provider using the OpenAI chat completions API."""

    base_url: str | None = None
    temperature: float = 0.3

    @property
    def provider_id(self) -> str:
        return "openai"

    @property
    def default_model(self) -> str:
        return "gpt-4o-mini"

    @property
    def env_var(self) -> str | None:
        return "OPENAI_API_KEY"

    def _client_api_key(self) -> str:
        return self.require_api_key()

    def complete(
        self,
        prompt: str,
        model: str | None = None,
        *,
        system: str | None = None,
        max_tokens: int = 1024,
        timeout: float | None = None,
    ) -> str:
        api_key = self._client_api_key()

        try:
            import openai
        except ImportError:
            msg = (
                "openai is required for this LLM provider. "
                "Install with: pip install openai"
            )
            raise ImportError(msg) from None

        client = openai.OpenAI(api_key=api_key, base_url=self.base_url, timeout=timeout)
        use_model = model or self.default_model

        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        logger.debug("Sending prompt to %s (%s)...", self.provider_id, use_model)
        response = client.chat.completions.create(
            model=use_model,
            messages=messages,
            max_tokens=max_tokens,
            temperature=self.temperature,
        )

        return (response.choices[0].message.content or "").strip()


class GroqProvider(OpenAIProvider):
    """Groq's OpenAI-compatible API."""

    base_url = "https://api.groq.com/openai/v1"

    @property
    def provider_id(self) -> str:
        return "groq"

    @property
    def default_model(self) -> str:
        return "llama-3.1-8b-instant"

    @property
    def env_var(self) -> str | None:
        return "GROQ_API_KEY"
