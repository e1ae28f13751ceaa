"""Tests for LLM dependency key resolution."""

from unittest.mock import patch

import pytest

from core.config_models import AppConfig
from web import deps


@pytest.fixture
def both_keys(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "AIzaGOOGLEKEY")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-REALKEY")


def _use_config(data):
    deps.get_config.cache_clear()
    return patch("web.deps.load_config", return_value=AppConfig.from_dict(data))


@pytest.fixture(autouse=True)
def _clear_config_cache():
    yield
    deps.get_config.cache_clear()


def test_explicit_claude_uses_anthropic_key(both_keys):
    with _use_config({"llm": {"provider": "claude"}}), patch("anthropic.Anthropic") as anthropic_cls:
        provider = deps.get_llm()
    assert provider.provider_name == "claude"
    anthropic_cls.assert_called_once_with(api_key="sk-ant-REALKEY")


def test_explicit_gemini_uses_google_key(both_keys):
    with _use_config({"llm": {"provider": "gemini"}}), patch("google.genai.Client") as client_cls:
        provider = deps.get_fast_llm()
    assert provider.provider_name == "gemini"
    client_cls.assert_called_once_with(api_key="AIzaGOOGLEKEY")


def test_configured_key_wins(both_keys):
    with _use_config({"llm": {"provider": "claude", "api_key": "sk-ant-CONFIGKEY"}}), patch(
        "anthropic.Anthropic"
    ) as anthropic_cls:
        deps.get_llm()
    anthropic_cls.assert_called_once_with(api_key="sk-ant-CONFIGKEY")


def test_no_key_is_503(monkeypatch):
    from fastapi import HTTPException

    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    with _use_config({}), pytest.raises(HTTPException) as exc:
        deps.get_llm()
    assert exc.value.status_code == 503
