"""Configuration management for proposal-digest.

Settings are read from environment variables (and an optional `.env` file)
once, then handed to the components that need them. The analysis
orchestrator never reads process state itself: it receives an `LLMConfig`
at construction, which is what lets tests swap in a fake backend.
"""

from dataclasses import dataclass
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from proposal_digest.exceptions import ConfigurationError

DEFAULT_OPENAI_BASE_URL = "https://api.openai.com/v1"
DEFAULT_SNAPSHOT_GRAPHQL_URL = "https://hub.snapshot.org/graphql"


@dataclass(frozen=True)
class LLMConfig:
    """Generative backend configuration injected into the orchestrator.

    Attributes:
        api_key: Bearer credential for the chat completions endpoint
        base_url: API base URL (OpenAI or any compatible gateway)
        model: Fixed model identifier
        temperature: Sampling temperature (kept low for repeatable output)
        timeout: Deadline for the single outbound call, in seconds
    """

    api_key: str
    base_url: str = DEFAULT_OPENAI_BASE_URL
    model: str = "gpt-4o-mini"
    temperature: float = 0.25
    timeout: float = 30.0


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Attributes:
        openai_api_key: Generative backend credential (OPENAI_API_KEY)
        openai_base_url: Generative backend base URL
        analysis_model: Model used for proposal analysis
        analysis_temperature: Sampling temperature for analysis
        snapshot_graphql_url: Snapshot hub GraphQL endpoint
        request_timeout_seconds: Deadline applied to every outbound call
        log_level: Root log level
        environment: Deployment environment (development/production)
        allowed_origins: Comma-separated CORS origins
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Generative backend
    openai_api_key: str = ""
    openai_base_url: str = DEFAULT_OPENAI_BASE_URL
    analysis_model: str = "gpt-4o-mini"
    analysis_temperature: float = 0.25

    # Governance backend
    snapshot_graphql_url: str = DEFAULT_SNAPSHOT_GRAPHQL_URL

    # Outbound calls
    request_timeout_seconds: float = 30.0

    # Application
    log_level: str = "INFO"
    environment: str = "development"
    allowed_origins: str = ""

    @property
    def llm_configured(self) -> bool:
        """Whether a generative backend credential is present."""
        return bool(self.openai_api_key)

    def llm_config(self) -> LLMConfig:
        """Build the orchestrator's backend configuration.

        Raises:
            ConfigurationError: If OPENAI_API_KEY is not set
        """
        if not self.openai_api_key:
            raise ConfigurationError(
                "OPENAI_API_KEY is not set", service="analysis"
            )
        return LLMConfig(
            api_key=self.openai_api_key,
            base_url=self.openai_base_url,
            model=self.analysis_model,
            temperature=self.analysis_temperature,
            timeout=self.request_timeout_seconds,
        )

    def cors_origins(self) -> list[str]:
        """Resolve CORS origins for the current environment."""
        if self.allowed_origins:
            return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]
        if self.environment == "production":
            return []
        return [
            "http://localhost:3000",
            "http://localhost:8000",
            "http://127.0.0.1:8000",
        ]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Application settings

    Example:
        >>> settings = get_settings()
        >>> print(settings.snapshot_graphql_url)
    """
    return Settings()
