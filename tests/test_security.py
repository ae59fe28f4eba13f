"""Tests for bearer token helpers and settings."""

import pytest
from jose import jwt
from pydantic import ValidationError

from threadvote.core.security import InvalidTokenError, create_access_token, decode_username
from threadvote.core.settings import Settings, settings


def test_token_round_trip() -> None:
    assert decode_username(create_access_token("alice")) == "alice"


def test_token_with_wrong_secret_is_rejected() -> None:
    token = jwt.encode({"preferred_username": "mallory"}, "other-secret", algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        decode_username(token)


def test_token_without_username_is_rejected() -> None:
    token = jwt.encode({"scope": "read"}, settings.secret_key, algorithm=settings.jwt_algorithm)
    with pytest.raises(InvalidTokenError):
        decode_username(token)


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("DEFAULT_PAGE_SIZE", "25")
    monkeypatch.setenv("USE_TEST_DATABASE", "true")
    monkeypatch.setenv("TEST_DATABASE_URL", "sqlite:///./test.db")

    configured = Settings()

    assert configured.default_page_size == 25
    assert configured.effective_database_url == "sqlite:///./test.db"


def test_settings_require_secret_key(monkeypatch) -> None:
    monkeypatch.delenv("SECRET_KEY", raising=False)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)
