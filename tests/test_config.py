# tests/test_config.py
"""
Tests for application settings.
"""

import pytest
from pydantic import ValidationError

from konvata.config import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Settings below are built from explicit values only."""
    for name in ("ENVIRONMENT", "COINLAYER_API_KEY", "RATE_LIMIT_ENABLED", "PROVIDER_CACHE_TTL_SECONDS"):
        monkeypatch.delenv(name, raising=False)


class TestSettingsDefaults:
    """Tests for default values."""

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.environment == "development"
        assert settings.coinlayer_base_url == "https://api.coinlayer.com/api"
        assert settings.provider_cache_ttl_seconds == 30
        assert settings.rate_limit_enabled is True
        assert settings.cors_allow_methods == ["GET"]
        assert not settings.is_provider_configured

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("COINLAYER_API_KEY", "from-env")
        monkeypatch.setenv("PROVIDER_CACHE_TTL_SECONDS", "0")

        settings = Settings(_env_file=None)

        assert settings.coinlayer_api_key == "from-env"
        assert settings.is_provider_configured
        assert settings.provider_cache_ttl_seconds == 0


class TestSettingsValidation:
    """Tests for environment-dependent validation."""

    def test_test_environment_disables_rate_limiting(self):
        settings = Settings(_env_file=None, environment="test", rate_limit_enabled=True)

        assert settings.is_test
        assert settings.rate_limit_enabled is False

    def test_production_requires_api_key(self):
        with pytest.raises(ValidationError, match="COINLAYER_API_KEY is required"):
            Settings(_env_file=None, environment="production")

    def test_production_with_api_key(self):
        settings = Settings(_env_file=None, environment="production", coinlayer_api_key="live-key")

        assert settings.is_production

    def test_development_tolerates_missing_key(self):
        settings = Settings(_env_file=None, environment="development")

        assert settings.coinlayer_api_key is None

    @pytest.mark.parametrize("ttl", [-1, 3601])
    def test_cache_ttl_bounds(self, ttl):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, provider_cache_ttl_seconds=ttl)

    def test_invalid_log_format(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_format="xml")
