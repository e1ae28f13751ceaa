"""Chat companion: tool-calling loop around an LLM provider."""

from collections.abc import Callable

import structlog

from llm.base import LLMProvider
from observability import metrics

from .prompts import PromptTemplates
from .tools import MoodToolRegistry

logger = structlog.get_logger()

MAX_HISTORY_CHARS = 32_000


class ChatError(Exception):
    """The model produced no usable reply."""


def trim_history(messages: list[dict], max_chars: int = MAX_HISTORY_CHARS) -> list[dict]:
    """Keep the most recent messages that fit within max_chars."""
    total = 0
    trimmed = []
    for msg in reversed(messages):
        total += len(msg.get("content") or "")
        if total > max_chars:
            break
        trimmed.append(msg)
    trimmed.reverse()
    return trimmed


class ChatCompanion:
    """Answers one user message, letting the model call mood tools until it replies."""

    def __init__(
        self,
        llm: LLMProvider,
        registry: MoodToolRegistry,
        user_name: str | None = None,
        max_iterations: int = 5,
        max_tokens: int = 1500,
    ):
        self.llm = llm
        self.registry = registry
        self.user_name = user_name
        self.max_iterations = max_iterations
        self.max_tokens = max_tokens

    @property
    def system_prompt(self) -> str:
        return PromptTemplates.companion_system(self.registry.user_id, self.user_name)

    def respond(
        self,
        message: str,
        session_history: list[dict] | None = None,
        event_callback: Callable[[dict], None] | None = None,
    ) -> str:
        """Reply to `message` given prior turns (oldest first, current message excluded).

        Raises:
            ChatError: if the model returns no text.
            LLMError: on provider failures.
        """
        messages = trim_history(list(session_history or []))
        messages.append({"role": "user", "content": message})
        # Anonymous users get no tools: the prompt already says history is unavailable
        if not self.registry.user_id:
            text = self.llm.generate(messages, system=self.system_prompt, max_tokens=self.max_tokens)
            return self._finish(text, 1, event_callback)

        tools = self.registry.get_definitions()
        response = None
        for iteration in range(self.max_iterations):
            response = self.llm.generate_with_tools(
                messages=messages,
                tools=tools,
                system=self.system_prompt,
                max_tokens=self.max_tokens,
            )
            logger.debug(
                "companion_iteration",
                iteration=iteration,
                finish_reason=response.finish_reason,
                tool_call_count=len(response.tool_calls),
            )

            if not response.tool_calls:
                return self._finish(response.content, iteration + 1, event_callback)

            assistant_msg = {
                "role": "assistant",
                "tool_calls": [tc.to_message() for tc in response.tool_calls],
            }
            if response.content:
                assistant_msg["content"] = response.content
            messages.append(assistant_msg)

            for call in response.tool_calls:
                logger.info("tool_call", tool=call.name, args=sorted(call.arguments))
                if event_callback:
                    event_callback({"type": "tool_start", "tool": call.name})
                result = self.registry.execute(call)
                logger.info("tool_result", tool=call.name, chars=len(result.content), is_error=result.is_error)
                if event_callback:
                    event_callback({"type": "tool_done", "tool": call.name, "is_error": result.is_error})
                messages.append(result.to_message())

        logger.warning("companion_max_iterations", max=self.max_iterations)
        if response is not None and response.content:
            return self._finish(response.content, self.max_iterations, event_callback)
        return "I wasn't able to finish that within the allowed steps. Could you ask again?"

    def _finish(self, text: str | None, iterations: int, event_callback) -> str:
        text = (text or "").strip()
        if not text:
            raise ChatError("The AI model returned an empty response.")
        metrics.counter("chat.replies")
        logger.info("companion_complete", iterations=iterations)
        if event_callback:
            event_callback({"type": "answer", "content": text})
        return text
