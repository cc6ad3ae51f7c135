# =============================================================================
# tests/test_config.py - Settings Tests
# =============================================================================
# Defaults, derived values and immutability of the Settings object.
# =============================================================================

from datetime import timedelta

import pytest
from pydantic import ValidationError

from app.config import Settings

REQUIRED = {
    "SUPABASE_URL": "https://test-project.supabase.co",
    "SUPABASE_SERVICE_KEY": "test-service-key",
    "OPENAI_API_KEY": "test-openai-key",
    "JWT_SECRET": "test-jwt-secret-0123456789",
}


def make_settings(**overrides) -> Settings:
    return Settings(_env_file=None, **{**REQUIRED, **overrides})


class TestSettingsDefaults:
    """Tests for default values."""

    def test_frontend_url_defaults_to_vite_dev_server(self, monkeypatch):
        monkeypatch.delenv("FRONTEND_URL", raising=False)
        settings = make_settings()
        assert settings.FRONTEND_URL == "http://localhost:5173"
        assert settings.cors_origins_list == ["http://localhost:5173"]

    def test_port_default(self, monkeypatch):
        monkeypatch.delenv("PORT", raising=False)
        assert make_settings().PORT == 8000

    def test_port_from_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "9123")
        assert make_settings().PORT == 9123

    def test_empty_env_var_uses_default(self, monkeypatch):
        """An empty FRONTEND_URL is treated as unset."""
        monkeypatch.setenv("FRONTEND_URL", "")
        assert make_settings().FRONTEND_URL == "http://localhost:5173"

    def test_retry_and_timeout_defaults(self, monkeypatch):
        for name in ("DB_CONNECT_ATTEMPTS", "DB_CONNECT_BACKOFF_SECONDS", "AI_TIMEOUT_SECONDS", "AI_MAX_RETRIES"):
            monkeypatch.delenv(name, raising=False)
        settings = make_settings()
        assert settings.DB_CONNECT_ATTEMPTS == 5
        assert settings.DB_CONNECT_BACKOFF_SECONDS == 1.0
        assert settings.AI_TIMEOUT_SECONDS == 30.0
        assert settings.AI_MAX_RETRIES == 2


class TestSettingsDerived:
    """Tests for computed properties."""

    def test_cors_origins_list_splits_and_strips(self):
        settings = make_settings(FRONTEND_URL="http://localhost:5173, https://app.example.com/ ,")
        assert settings.cors_origins_list == ["http://localhost:5173", "https://app.example.com"]

    def test_jwt_expire_delta(self):
        assert make_settings(JWT_EXPIRE_DAYS=3).jwt_expire_delta == timedelta(days=3)

    def test_cookie_secure_follows_environment(self):
        assert make_settings(ENVIRONMENT="production").cookie_secure is True
        assert make_settings(ENVIRONMENT="development").cookie_secure is False

    def test_cookie_secure_override(self):
        assert make_settings(ENVIRONMENT="production", COOKIE_SECURE=False).cookie_secure is False
        assert make_settings(ENVIRONMENT="development", COOKIE_SECURE=True).cookie_secure is True


class TestSettingsValidation:
    """Tests for rejected configuration."""

    def test_settings_are_immutable(self):
        settings = make_settings()
        with pytest.raises(ValidationError):
            settings.PORT = 1234

    def test_short_jwt_secret_rejected(self):
        with pytest.raises(ValidationError):
            make_settings(JWT_SECRET="short")

    def test_invalid_port_rejected(self):
        with pytest.raises(ValidationError):
            make_settings(PORT=70000)

    def test_unknown_environment_rejected(self):
        with pytest.raises(ValidationError):
            make_settings(ENVIRONMENT="qa")

    def test_secrets_are_masked(self):
        settings = make_settings()
        assert "test-openai-key" not in repr(settings)
        assert settings.OPENAI_API_KEY.get_secret_value() == "test-openai-key"
