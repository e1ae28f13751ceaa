"""Shared fixtures for web API tests."""

import os
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from core.config_models import AppConfig
from web.user_store import init_db


@pytest.fixture
def jwt_secret():
    return "test-nextauth-secret"


def _make_auth_token(jwt_secret, user_id, email="u@test.com", name="U"):
    return jwt.encode(
        {"sub": user_id, "email": email, "name": name},
        jwt_secret,
        algorithm="HS256",
    )


@pytest.fixture
def auth_headers(jwt_secret):
    token = _make_auth_token(jwt_secret, "user-123", "test@example.com", "Test")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers_b(jwt_secret):
    """Second user for isolation tests."""
    token = _make_auth_token(jwt_secret, "user-456", "b@test.com", "UserB")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def app_config(tmp_path):
    return AppConfig.from_dict({"paths": {"db_path": str(tmp_path / "mindful.db")}})


@pytest.fixture
def client(jwt_secret, app_config, mock_llm):
    """Test client backed by a fresh database and a mocked LLM."""
    from web import deps
    from web.app import app

    init_db(app_config.paths.db_path)
    deps.get_config.cache_clear()

    patches = [
        patch.dict(os.environ, {"NEXTAUTH_SECRET": jwt_secret}),
        patch("web.deps.load_config", return_value=app_config),
    ]
    for p in patches:
        p.start()
    app.dependency_overrides[deps.get_llm] = lambda: mock_llm
    app.dependency_overrides[deps.get_fast_llm] = lambda: mock_llm

    yield TestClient(app)

    app.dependency_overrides.clear()
    for p in reversed(patches):
        p.stop()
    deps.get_config.cache_clear()
