"""LLM provider factory with key-based auto-detection."""

import os

from .base import LLMError, LLMProvider

_PROVIDER_ENV_KEYS = {
    "gemini": "GOOGLE_API_KEY",
    "claude": "ANTHROPIC_API_KEY",
}

# Gemini first: the companion prompts were tuned on it.
_AUTO_DETECT_ORDER = ["gemini", "claude"]

_FAST_MODELS = {
    "gemini": "gemini-2.0-flash",
    "claude": "claude-3-5-haiku-latest",
}


def create_fast_provider(
    provider: str | None = None,
    api_key: str | None = None,
    client=None,
) -> LLMProvider:
    """Cheaper, lower-latency model for short generations such as greetings."""
    resolved = provider or "auto"
    if resolved == "auto":
        resolved = _auto_detect_provider(api_key)
    return create_llm_provider(
        provider=resolved, api_key=api_key, model=_FAST_MODELS.get(resolved), client=client
    )


def create_llm_provider(
    provider: str | None = None,
    api_key: str | None = None,
    model: str | None = None,
    client=None,
) -> LLMProvider:
    """Create an LLM provider instance.

    Args:
        provider: "gemini", "claude", "auto", or None (auto-detect)
        api_key: Explicit API key (overrides env var)
        model: Model name (None = provider default)
        client: Pre-built SDK client for testing/DI

    Raises:
        LLMError: unknown provider or no key available for auto-detection.
    """
    resolved = provider or "auto"

    if resolved == "auto":
        resolved = _auto_detect_provider(api_key)

    if not api_key and not client:
        env_var = _PROVIDER_ENV_KEYS.get(resolved)
        if env_var:
            api_key = os.getenv(env_var)

    if resolved == "gemini":
        from .providers.gemini import GeminiProvider

        return GeminiProvider(api_key=api_key, model=model, client=client)
    if resolved == "claude":
        from .providers.claude import ClaudeProvider

        return ClaudeProvider(api_key=api_key, model=model, client=client)
    raise LLMError(f"Unknown provider: {resolved}. Use: gemini, claude")


def _detect_provider_from_key(api_key: str) -> str | None:
    if api_key.startswith("sk-ant-"):
        return "claude"
    if api_key.startswith("AI"):
        return "gemini"
    return None


def _auto_detect_provider(api_key: str | None = None) -> str:
    """Detect provider from an explicit key prefix, then env vars."""
    if api_key:
        inferred = _detect_provider_from_key(api_key)
        if inferred:
            return inferred

    for name in _AUTO_DETECT_ORDER:
        if os.getenv(_PROVIDER_ENV_KEYS[name]):
            return name
    raise LLMError("No LLM API key found. Set one of: GOOGLE_API_KEY, ANTHROPIC_API_KEY")
