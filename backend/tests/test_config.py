"""
Tests for settings validation.
"""

import pytest
from pydantic import ValidationError

from core.config import DEFAULT_JWT_SECRET, Settings


class TestProductionSecret:
    """The development signing secret must never reach production."""

    def test_default_secret_rejected_in_production(self, monkeypatch):
        monkeypatch.delenv("JWT_SECRET_KEY", raising=False)

        with pytest.raises(ValidationError, match="JWT_SECRET_KEY"):
            Settings(_env_file=None, environment="production")

    def test_empty_secret_rejected_in_production(self):
        with pytest.raises(ValidationError, match="JWT_SECRET_KEY"):
            Settings(_env_file=None, environment="production", jwt_secret_key="")

    def test_secret_from_environment_accepted_in_production(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("JWT_SECRET_KEY", "a-long-random-production-secret")

        settings = Settings(_env_file=None)

        assert settings.is_production
        assert settings.jwt_secret_key == "a-long-random-production-secret"

    def test_default_secret_allowed_in_development(self, monkeypatch):
        monkeypatch.delenv("JWT_SECRET_KEY", raising=False)

        settings = Settings(_env_file=None, environment="development")
        assert settings.jwt_secret_key == DEFAULT_JWT_SECRET


class TestSettingsParsing:

    def test_defaults(self, monkeypatch):
        for name in ("DATABASE_URL", "JWT_EXPIRE_HOURS", "ENVIRONMENT"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.jwt_expire_hours == 24
        assert settings.jwt_algorithm == "HS256"
        assert settings.is_sqlite

    def test_cors_origins_from_comma_separated_env(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", "http://localhost:5173, https://shop.example.com")

        settings = Settings(_env_file=None)

        assert settings.cors_origins == ["http://localhost:5173", "https://shop.example.com"]

    def test_unknown_environment_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, environment="qa")

    def test_bcrypt_rounds_bounds(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, bcrypt_rounds=3)
