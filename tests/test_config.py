"""Settings tests — the signing secret is mandatory."""

import pydantic
import pytest

from linkedcommunity.config import Settings
from linkedcommunity.main import create_app


def test_missing_secret_fails_fast(monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)
    with pytest.raises(pydantic.ValidationError):
        Settings(_env_file=None)


def test_create_app_refuses_to_start_without_secret(monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)
    with pytest.raises(pydantic.ValidationError):
        create_app()


@pytest.mark.parametrize("secret", ["", "   ", "fallback-secret"])
def test_insecure_secrets_rejected(secret):
    with pytest.raises(pydantic.ValidationError):
        Settings(_env_file=None, jwt_secret=secret)


def test_secret_from_environment(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "from-env-secret-value-0123456789abcdef")
    monkeypatch.setenv("PORT", "8123")
    s = Settings(_env_file=None)
    assert s.jwt_secret == "from-env-secret-value-0123456789abcdef"
    assert s.port == 8123
    assert s.token_expire_days == 7


@pytest.mark.parametrize(
    "url",
    [
        "postgres://u:p@db:5432/app",
        "postgresql://u:p@db:5432/app",
        "postgresql+asyncpg://u:p@db:5432/app",
    ],
)
def test_database_url_uses_asyncpg(url):
    s = Settings(_env_file=None, jwt_secret="x" * 40, database_url=url)
    assert s.database_url == "postgresql+asyncpg://u:p@db:5432/app"


def test_cors_origins_follow_frontend_url():
    s = Settings(_env_file=None, jwt_secret="x" * 40, frontend_url="https://app.example.com")
    assert s.cors_origins == ["https://app.example.com"]
