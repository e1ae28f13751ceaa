"""Anthropic Claude provider."""

from ..base import (
    GenerateResponse,
    LLMAuthError,
    LLMError,
    LLMProvider,
    LLMRateLimitError,
    ToolCall,
    ToolDefinition,
)

_STOP_REASONS = {"tool_use": "tool_calls", "max_tokens": "max_tokens"}


class ClaudeProvider(LLMProvider):
    """Anthropic Claude provider."""

    provider_name = "claude"

    def __init__(self, api_key: str | None = None, model: str | None = None, client=None):
        self.model = model or "claude-sonnet-4-20250514"

        if client:
            self.client = client
            return

        try:
            from anthropic import Anthropic
        except ImportError:
            raise LLMError("anthropic package not installed. Run: pip install anthropic")

        self.client = Anthropic(api_key=api_key)

    def _handle_error(self, e: Exception):
        try:
            from anthropic import APIError, AuthenticationError, RateLimitError
        except ImportError:
            raise LLMError(f"Claude error: {e}") from e

        if isinstance(e, AuthenticationError):
            raise LLMAuthError(f"Claude auth failed: {e}") from e
        if isinstance(e, RateLimitError):
            raise LLMRateLimitError(f"Claude rate limit: {e}") from e
        if isinstance(e, APIError):
            raise LLMError(f"Claude API error: {e}") from e
        raise LLMError(f"Claude error: {e}") from e

    def _create(self, messages: list[dict], system: str | None, max_tokens: int, **extra):
        kwargs = {
            "model": self.model,
            "max_tokens": max_tokens,
            "messages": self._convert_messages(messages),
            **extra,
        }
        if system:
            kwargs["system"] = system
        return self.client.messages.create(**kwargs)

    def generate(
        self, messages: list[dict], system: str | None = None, max_tokens: int = 1500
    ) -> str:
        try:
            response = self._create(messages, system, max_tokens)
            return "".join(b.text for b in response.content if getattr(b, "type", "text") == "text")
        except Exception as e:
            self._handle_error(e)

    def generate_with_tools(
        self,
        messages: list[dict],
        tools: list[ToolDefinition],
        system: str | None = None,
        max_tokens: int = 1500,
        tool_choice: str = "auto",
    ) -> GenerateResponse:
        try:
            response = self._create(
                messages,
                system,
                max_tokens,
                tools=[
                    {"name": t.name, "description": t.description, "input_schema": t.input_schema}
                    for t in tools
                ],
                tool_choice={"type": "any"} if tool_choice == "required" else {"type": "auto"},
            )

            text_parts = []
            tool_calls = []
            for block in response.content:
                if block.type == "text":
                    text_parts.append(block.text)
                elif block.type == "tool_use":
                    tool_calls.append(ToolCall(id=block.id, name=block.name, arguments=block.input))

            return GenerateResponse(
                content="\n".join(text_parts) if text_parts else None,
                tool_calls=tool_calls,
                finish_reason=_STOP_REASONS.get(response.stop_reason, "stop"),
            )
        except Exception as e:
            self._handle_error(e)

    @staticmethod
    def _convert_messages(messages: list[dict]) -> list[dict]:
        """Neutral messages -> Anthropic content blocks.

        Assistant tool calls become `tool_use` blocks; consecutive `tool`
        messages are merged into one user turn of `tool_result` blocks.
        """
        api_messages: list[dict] = []
        for msg in messages:
            role = msg.get("role")

            if role == "assistant" and msg.get("tool_calls"):
                content = []
                if msg.get("content"):
                    content.append({"type": "text", "text": msg["content"]})
                content.extend(
                    {"type": "tool_use", "id": tc["id"], "name": tc["name"], "input": tc["arguments"]}
                    for tc in msg["tool_calls"]
                )
                api_messages.append({"role": "assistant", "content": content})
            elif role == "tool":
                block = {
                    "type": "tool_result",
                    "tool_use_id": msg["tool_call_id"],
                    "content": msg["content"],
                }
                if msg.get("is_error"):
                    block["is_error"] = True
                prev = api_messages[-1] if api_messages else None
                if prev and prev["role"] == "user" and isinstance(prev["content"], list):
                    prev["content"].append(block)
                else:
                    api_messages.append({"role": "user", "content": [block]})
            else:
                api_messages.append({"role": role, "content": msg["content"]})

        return api_messages
