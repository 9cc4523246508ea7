"""Settings must refuse to start without a signing secret."""

import pytest
from pydantic import ValidationError

from tenantauth.core.config import Settings


def test_missing_secret_fails(monkeypatch):
    monkeypatch.delenv("JWT_SECRET_KEY", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_short_secret_fails():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, jwt_secret_key="too-short")


def test_defaults(monkeypatch):
    monkeypatch.delenv("JWT_EXPIRE_MINUTES", raising=False)
    settings = Settings(_env_file=None, jwt_secret_key="x" * 32)
    assert settings.jwt_expire_minutes == 1440
    assert settings.jwt_algorithm == "HS256"
    assert settings.reject_inactive_users is False
    assert "x" * 32 not in repr(settings)
