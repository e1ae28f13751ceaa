"""LLM provider layer used by the chat companion."""

from .base import (
    GenerateResponse,
    LLMAuthError,
    LLMError,
    LLMProvider,
    LLMRateLimitError,
    ToolCall,
    ToolDefinition,
    ToolResult,
)
from .factory import create_fast_provider, create_llm_provider

__all__ = [
    "LLMProvider",
    "create_llm_provider",
    "create_fast_provider",
    "LLMError",
    "LLMRateLimitError",
    "LLMAuthError",
    "ToolDefinition",
    "ToolCall",
    "ToolResult",
    "GenerateResponse",
]
