"""LLM provider registry with lazy loading.

Usage:
    from jobhunt.llm import get_provider

    provider = get_provider("groq")
    if provider.is_configured():
        text = provider.complete(prompt, system=system_prompt)
"""

from jobhunt.llm.base import LLMProvider, parse_json_response

__all__ = ["LLMProvider", "available_providers", "get_provider", "parse_json_response"]

# Lazy registry: maps provider name → (module_path, class_name)
_REGISTRY: dict[str, tuple[str, str]] = {
    "anthropic": ("jobhunt.llm.anthropic", "AnthropicProvider"),
    "gemini": ("jobhunt.llm.gemini", "GeminiProvider"),
    "groq": ("jobhunt.llm.openai", "GroqProvider"),
    "ollama": ("jobhunt.llm.ollama", "OllamaProvider"),
    "openai": ("jobhunt.llm.openai", "OpenAIProvider"),
}


def get_provider(name: str) -> LLMProvider:
    """Instantiate and return an LLM provider by name.

    Raises:
        ValueError: If the provider name is unknown.
    """
    if name not in _REGISTRY:
        valid = ", ".join(sorted(_REGISTRY))
        msg = f"Unknown LLM provider '{name}'. Available: {valid}"
        raise ValueError(msg)

    module_path, class_name = _REGISTRY[name]

    import importlib

    module = importlib.import_module(module_path)
    cls = getattr(module, class_name)
    return cls()  # type: ignore[no-any-return]


def available_providers() -> list[str]:
    """Return sorted list of registered provider names."""
    return sorted(_REGISTRY)
