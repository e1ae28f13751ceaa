"""Personalised chat greeting, referencing the last conversation when there is one."""

import structlog

from llm.base import LLMError, LLMProvider

from .history import ChatHistoryStore
from .prompts import PromptTemplates

logger = structlog.get_logger()


def fallback_greeting(user_name: str | None) -> str:
    name_part = f", {user_name}" if user_name else ""
    return f"Hello{name_part}! I'm here to listen. How can I help you today?"


def generate_greeting(
    llm: LLMProvider,
    history: ChatHistoryStore,
    user_id: str,
    user_name: str | None = None,
    history_count: int = 3,
) -> str:
    """Short welcome message. Never raises: falls back to a fixed greeting."""
    last_messages = []
    if user_id and history_count > 0:
        last_messages = [m.to_prompt() for m in history.fetch(user_id, history_count)]

    prompt = PromptTemplates.greeting_prompt(user_name, last_messages)
    try:
        greeting = llm.generate(
            [{"role": "user", "content": prompt}],
            system=PromptTemplates.GREETING,
            max_tokens=200,
        )
    except LLMError as e:
        logger.warning("greeting.llm_failed", user_id=user_id, error=str(e))
        return fallback_greeting(user_name)

    greeting = (greeting or "").strip()
    if not greeting:
        logger.warning("greeting.empty_response", user_id=user_id)
        return fallback_greeting(user_name)
    return greeting
