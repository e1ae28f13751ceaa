"""Google Gemini provider (google-genai SDK)."""

import uuid

from ..base import (
    GenerateResponse,
    LLMAuthError,
    LLMError,
    LLMProvider,
    LLMRateLimitError,
    ToolCall,
    ToolDefinition,
)

# Companion conversations touch on distress; only block clearly harmful output.
SAFETY_THRESHOLDS = {
    "HARM_CATEGORY_HATE_SPEECH": "BLOCK_ONLY_HIGH",
    "HARM_CATEGORY_DANGEROUS_CONTENT": "BLOCK_NONE",
    "HARM_CATEGORY_HARASSMENT": "BLOCK_MEDIUM_AND_ABOVE",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT": "BLOCK_LOW_AND_ABOVE",
}


def _handle_gemini_error(e: Exception):
    err_str = str(e).lower()
    if "api key" in err_str or "authentication" in err_str or "permission" in err_str:
        raise LLMAuthError(f"Gemini auth failed: {e}") from e
    if ("resource" in err_str and "exhausted" in err_str) or "rate" in err_str:
        raise LLMRateLimitError(f"Gemini rate limit: {e}") from e
    raise LLMError(f"Gemini API error: {e}") from e


class GeminiProvider(LLMProvider):
    """Google Gemini provider."""

    provider_name = "gemini"

    def __init__(self, api_key: str | None = None, model: str | None = None, client=None):
        self.model = model or "gemini-2.5-flash"

        if client:
            self.client = client
            return

        try:
            from google import genai
        except ImportError:
            raise LLMError("google-genai package not installed. Run: pip install google-genai")

        self.client = genai.Client(api_key=api_key)

    def _config(self, types, system: str | None, max_tokens: int, **extra):
        safety = [
            types.SafetySetting(category=category, threshold=threshold)
            for category, threshold in SAFETY_THRESHOLDS.items()
        ]
        return types.GenerateContentConfig(
            system_instruction=system,
            max_output_tokens=max_tokens,
            safety_settings=safety,
            **extra,
        )

    def generate(
        self, messages: list[dict], system: str | None = None, max_tokens: int = 1500
    ) -> str:
        try:
            from google.genai import types
        except ImportError:
            raise LLMError("google-genai package not installed")

        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=self._convert_messages(messages),
                config=self._config(types, system, max_tokens),
            )
            return response.text or ""
        except Exception as e:
            _handle_gemini_error(e)

    def generate_with_tools(
        self,
        messages: list[dict],
        tools: list[ToolDefinition],
        system: str | None = None,
        max_tokens: int = 1500,
        tool_choice: str = "auto",
    ) -> GenerateResponse:
        try:
            from google.genai import types
        except ImportError:
            raise LLMError("google-genai package not installed")

        try:
            declarations = []
            for t in tools:
                # Gemini rejects JSON Schema keys outside this subset
                schema = {
                    k: v for k, v in t.input_schema.items() if k in ("type", "properties", "required")
                }
                declarations.append(
                    types.FunctionDeclaration(
                        name=t.name,
                        description=t.description,
                        parameters=schema if schema.get("properties") else None,
                    )
                )

            mode = "ANY" if tool_choice == "required" else "AUTO"
            response = self.client.models.generate_content(
                model=self.model,
                contents=self._convert_messages(messages),
                config=self._config(
                    types,
                    system,
                    max_tokens,
                    tools=[types.Tool(function_declarations=declarations)],
                    tool_config=types.ToolConfig(
                        function_calling_config=types.FunctionCallingConfig(mode=mode)
                    ),
                ),
            )

            text_parts = []
            tool_calls = []
            if response.candidates:
                for part in response.candidates[0].content.parts or []:
                    if part.function_call and part.function_call.name:
                        fc = part.function_call
                        tool_calls.append(
                            ToolCall(
                                id=f"call_{uuid.uuid4().hex[:8]}",
                                name=fc.name,
                                arguments=dict(fc.args) if fc.args else {},
                            )
                        )
                    elif part.text:
                        text_parts.append(part.text)

            return GenerateResponse(
                content="\n".join(text_parts) if text_parts else None,
                tool_calls=tool_calls,
                finish_reason="tool_calls" if tool_calls else "stop",
            )
        except Exception as e:
            _handle_gemini_error(e)

    def _convert_messages(self, messages: list[dict]) -> list:
        """Neutral messages -> Gemini Content list ("assistant" is "model")."""
        from google.genai import types

        contents = []
        for msg in messages:
            role = msg.get("role")

            if role == "user":
                contents.append(
                    types.Content(role="user", parts=[types.Part.from_text(text=msg["content"])])
                )
            elif role == "assistant":
                parts = []
                if msg.get("content"):
                    parts.append(types.Part.from_text(text=msg["content"]))
                for tc in msg.get("tool_calls") or []:
                    parts.append(types.Part.from_function_call(name=tc["name"], args=tc["arguments"]))
                if parts:
                    contents.append(types.Content(role="model", parts=parts))
            elif role == "tool":
                contents.append(
                    types.Content(
                        role="user",
                        parts=[
                            types.Part.from_function_response(
                                name=msg.get("name", "tool"),
                                response={"result": msg["content"]},
                            )
                        ],
                    )
                )

        return contents
