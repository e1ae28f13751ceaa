"""Chat companion: transcript storage, mood tools, greeting."""

from .companion import ChatCompanion, ChatError
from .greeting import generate_greeting
from .history import ChatHistoryStore, ChatMessage
from .tools import MoodToolRegistry

__all__ = [
    "ChatCompanion",
    "ChatError",
    "ChatHistoryStore",
    "ChatMessage",
    "MoodToolRegistry",
    "generate_greeting",
]
