"""Pydantic configuration models for Mindful Chat."""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

VALID_LLM_PROVIDERS = {"auto", "claude", "gemini"}
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def default_home() -> Path:
    return Path(os.environ.get("MINDFUL_HOME", Path.home() / "mindful"))


class LLMConfig(BaseModel):
    """LLM provider configuration."""

    provider: str = "auto"
    model: Optional[str] = None  # None = provider default
    api_key: Optional[str] = None

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v: str) -> str:
        if v not in VALID_LLM_PROVIDERS:
            raise ValueError(f"Invalid LLM provider: {v}. Must be one of {VALID_LLM_PROVIDERS}")
        return v

    @model_validator(mode="after")
    def expand_env_key(self):
        """Resolve `${VAR}` api keys from the environment."""
        key = self.api_key
        if key and key.startswith("${") and key.endswith("}"):
            self.api_key = os.getenv(key[2:-1], "") or None
        return self


class PathsConfig(BaseModel):
    """Storage locations."""

    db_path: Path = Field(default_factory=lambda: default_home() / "mindful.db")

    @model_validator(mode="after")
    def expand_paths(self):
        self.db_path = Path(self.db_path).expanduser()
        return self


class ChatConfig(BaseModel):
    """Companion chat settings."""

    history_limit: int = Field(20, ge=1, le=200)
    greeting_history: int = Field(3, ge=0, le=20)
    max_iterations: int = Field(5, ge=1, le=20)
    max_tokens: int = Field(1500, ge=100)


class MoodsConfig(BaseModel):
    """Mood logging limits."""

    notes_max_chars: int = Field(2000, ge=0)
    history_limit: int = Field(50, ge=1, le=500)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    json_mode: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {VALID_LOG_LEVELS}")
        return v_upper


class AppConfig(BaseModel):
    """Main configuration model."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    chat: ChatConfig = Field(default_factory=ChatConfig)
    moods: MoodsConfig = Field(default_factory=MoodsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: dict) -> "AppConfig":
        """Create config from a raw YAML dict."""
        data = dict(data)
        # Older files used a flat `db_path` key at the root.
        if "db_path" in data:
            data.setdefault("paths", {})["db_path"] = data.pop("db_path")
        return cls.model_validate(data)

    def to_dict(self) -> dict:
        return self.model_dump(mode="python")
