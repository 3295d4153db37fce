"""Ollama local LLM provider (OpenAI-compatible API)."""

from jobhunt.llm.openai import OpenAIProvider

_OLLAMA_BASE_URL = "http://localhost:11434/v1"


class OllamaProvider(OpenAIProvider):
    """LLM provider using a local Ollama instance. Needs no credential."""

    base_url = _OLLAMA_BASE_URL

    @property
    def provider_id(self) -> str:
        return "ollama"

    @property
    def default_model(self) -> str:
        return "llama3"

    @property
    def env_var(self) -> None:
        return None

    def _client_api_key(self) -> str:
        return "ollama"
