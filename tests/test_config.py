"""Tests for settings and backend configuration."""

import pytest

from proposal_digest.config import (
    DEFAULT_SNAPSHOT_GRAPHQL_URL,
    LLMConfig,
    Settings,
)
from proposal_digest.exceptions import ConfigurationError


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch):
        """Test defaults when nothing is configured."""
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        settings = Settings(_env_file=None)

        assert settings.openai_api_key == ""
        assert settings.snapshot_graphql_url == DEFAULT_SNAPSHOT_GRAPHQL_URL
        assert settings.request_timeout_seconds == 30.0
        assert not settings.llm_configured

    def test_reads_environment(self, monkeypatch):
        """Test values are read from environment variables."""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
        monkeypatch.setenv("ANALYSIS_MODEL", "gpt-4o")
        monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "12.5")

        settings = Settings(_env_file=None)

        assert settings.llm_configured
        assert settings.analysis_model == "gpt-4o"
        assert settings.request_timeout_seconds == 12.5

    def test_llm_config(self, test_settings):
        """Test the backend configuration handed to the orchestrator."""
        config = test_settings.llm_config()

        assert isinstance(config, LLMConfig)
        assert config.api_key == "test-key"
        assert config.model == "gpt-4o-mini"
        assert config.temperature == 0.25
        assert config.timeout == 5.0

    def test_llm_config_without_key(self, monkeypatch):
        """Test a missing credential raises ConfigurationError."""
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)

        with pytest.raises(ConfigurationError, match="OPENAI_API_KEY"):
            Settings(_env_file=None).llm_config()


class TestCorsOrigins:
    """Tests for CORS origin resolution."""

    def test_explicit_origins(self):
        """Test a comma-separated list is split and trimmed."""
        settings = Settings(
            _env_file=None, allowed_origins="https://a.test, https://b.test ,"
        )
        assert settings.cors_origins() == ["https://a.test", "https://b.test"]

    def test_production_without_origins(self):
        """Test production allows no origins unless configured."""
        settings = Settings(_env_file=None, environment="production", allowed_origins="")
        assert settings.cors_origins() == []

    def test_development_defaults(self):
        """Test development allows localhost."""
        settings = Settings(_env_file=None, environment="development", allowed_origins="")
        assert "http://localhost:3000" in settings.cors_origins()
