"""Tools the companion can call, bound to the authenticated user."""

import json
from datetime import date
from typing import Callable

import structlog

from llm.base import ToolCall, ToolDefinition, ToolResult
from moods.storage import MoodStore
from moods.trends import analyze_mood_trends
from shared_types import TrendRange

logger = structlog.get_logger()

# Max chars returned per tool result to manage context window
TOOL_RESULT_MAX_CHARS = 4000

MOOD_ANALYSIS_TOOL = "get_user_mood_analysis"


class MoodToolRegistry:
    """Registry of companion tools for one user.

    The user id comes from the authenticated request, never from the model,
    so a tool call can only read the caller's own moods.
    """

    def __init__(self, store: MoodStore, user_id: str | None, today: date | None = None):
        self.store = store
        self.user_id = user_id
        self.today = today
        self._tools: dict[str, tuple[ToolDefinition, Callable[[dict], dict]]] = {}
        self._register_mood_tools()

    def get_definitions(self) -> list[ToolDefinition]:
        return [defn for defn, _ in self._tools.values()]

    def execute(self, call: ToolCall) -> ToolResult:
        if call.name not in self._tools:
            return ToolResult(
                tool_call_id=call.id,
                name=call.name,
                content=json.dumps({"error": f"Unknown tool: {call.name}"}),
                is_error=True,
            )

        _, handler = self._tools[call.name]
        try:
            result = handler(call.arguments or {})
        except Exception as e:
            logger.error("tool_execution_failed", tool=call.name, error=str(e))
            return ToolResult(
                tool_call_id=call.id,
                name=call.name,
                content=json.dumps({"error": str(e)}),
                is_error=True,
            )

        text = json.dumps(result, default=str)
        if len(text) > TOOL_RESULT_MAX_CHARS:
            text = text[:TOOL_RESULT_MAX_CHARS] + "... (truncated)"
        return ToolResult(
            tool_call_id=call.id,
            name=call.name,
            content=text,
            is_error="error" in result,
        )

    def _register(self, name: str, description: str, schema: dict, handler: Callable):
        self._tools[name] = (ToolDefinition(name=name, description=description, input_schema=schema), handler)

    def _register_mood_tools(self):
        def mood_analysis(args: dict) -> dict:
            if not self.user_id:
                return {
                    "is_empty": True,
                    "summary": "Cannot analyze moods without user identification.",
                }
            raw_range = args.get("time_range") or TrendRange.LAST_7_DAYS.value
            try:
                time_range = TrendRange(raw_range)
            except ValueError:
                return {"error": f"Invalid time_range: {raw_range}. Use last7days or last30days."}
            analysis = analyze_mood_trends(self.store, self.user_id, time_range, today=self.today)
            return analysis.to_dict()

        self._register(
            MOOD_ANALYSIS_TOOL,
            "Fetch and analyze the user's logged moods for the last 7 or 30 days: "
            "average score (1-5), count per mood, and a short summary. Use it when the "
            "user asks how they have been feeling or about their mood patterns.",
            {
                "type": "object",
                "properties": {
                    "time_range": {
                        "type": "string",
                        "enum": [r.value for r in TrendRange],
                        "description": "Trailing window ending today",
                    },
                },
                "required": ["time_range"],
            },
            mood_analysis,
        )
