"""Provider-neutral LLM interface with tool calling."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


class LLMError(Exception):
    """Base LLM error."""


class LLMRateLimitError(LLMError):
    """Rate limit or quota exhausted."""


class LLMAuthError(LLMError):
    """Missing or rejected API key."""


@dataclass
class ToolDefinition:
    """A callable tool offered to the model."""

    name: str
    description: str
    input_schema: dict  # JSON Schema


@dataclass
class ToolCall:
    """A tool invocation requested by the model."""

    id: str
    name: str
    arguments: dict

    def to_message(self) -> dict:
        return {"id": self.id, "name": self.name, "arguments": self.arguments}


@dataclass
class ToolResult:
    """Output of running a ToolCall, fed back to the model."""

    tool_call_id: str
    name: str
    content: str
    is_error: bool = False

    def to_message(self) -> dict:
        return {
            "role": "tool",
            "tool_call_id": self.tool_call_id,
            "name": self.name,
            "content": self.content,
            "is_error": self.is_error,
        }


@dataclass
class GenerateResponse:
    """One model turn: text, tool calls, or both."""

    content: str | None
    tool_calls: list[ToolCall] = field(default_factory=list)
    finish_reason: str = "stop"  # "stop" | "tool_calls" | "max_tokens"


class LLMProvider(ABC):
    """Abstract LLM provider.

    Messages use a provider-neutral shape: `{"role": "user"|"assistant", "content": str}`,
    assistant turns may carry `tool_calls`, and tool outputs use `role="tool"`
    (see ToolResult.to_message). Each provider converts to its SDK format.
    """

    provider_name: str = "base"

    @abstractmethod
    def generate(
        self, messages: list[dict], system: str | None = None, max_tokens: int = 1500
    ) -> str:
        """Plain text completion."""
        ...

    @abstractmethod
    def generate_with_tools(
        self,
        messages: list[dict],
        tools: list[ToolDefinition],
        system: str | None = None,
        max_tokens: int = 1500,
        tool_choice: str = "auto",
    ) -> GenerateResponse:
        """Completion that may request tool calls.

        Args:
            messages: Conversation so far, including earlier tool results
            tools: Tools the model may call
            system: Optional system prompt
            max_tokens: Max response tokens
            tool_choice: "auto" or "required"
        """
        ...
