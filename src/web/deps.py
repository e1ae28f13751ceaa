"""Dependency injection for FastAPI routes."""

from functools import lru_cache
from pathlib import Path

import structlog
from fastapi import HTTPException, status

from chat.history import ChatHistoryStore
from core.config import load_config
from core.config_models import AppConfig
from llm import LLMError, LLMProvider, create_fast_provider, create_llm_provider
from moods.storage import MoodStore

logger = structlog.get_logger()


@lru_cache
def get_config() -> AppConfig:
    """Load shared config (config.yaml or defaults)."""
    return load_config()


def get_db_path() -> Path:
    return get_config().paths.db_path


def get_mood_store() -> MoodStore:
    return MoodStore(get_db_path())


def get_chat_store() -> ChatHistoryStore:
    return ChatHistoryStore(get_db_path())


def _api_key() -> str | None:
    """Configured key only; without one the factory reads the env var of the resolved provider."""
    return get_config().llm.api_key


def get_llm() -> LLMProvider:
    """Main chat model. 503 when no provider is configured."""
    config = get_config()
    try:
        return create_llm_provider(
            provider=config.llm.provider, api_key=_api_key(), model=config.llm.model
        )
    except LLMError as e:
        logger.error("llm.unavailable", error=str(e))
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


def get_fast_llm() -> LLMProvider:
    config = get_config()
    try:
        return create_fast_provider(provider=config.llm.provider, api_key=_api_key())
    except LLMError as e:
        logger.error("llm.unavailable", error=str(e))
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
