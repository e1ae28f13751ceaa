"""SDK-specific LLMProvider implementations."""
