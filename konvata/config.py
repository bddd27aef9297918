# konvata/config.py
"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables with validation:
- ENVIRONMENT: Runtime mode (development, test, production)
- COINLAYER_API_KEY: Access credential for the upstream rate provider
- PROVIDER_*: Timeout and response cache settings for provider calls

Environment-specific behavior:
- test: Rate limiting is disabled so test clients never hit 429s
- development: Missing COINLAYER_API_KEY only fails on first provider call
- production: COINLAYER_API_KEY is required at startup

Configuration is validated on application startup. Invalid configuration
will raise a ValueError with a descriptive message.

Usage:
    from konvata.config import settings

    client = RateProviderClient(api_key=settings.coinlayer_api_key)
"""
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Environment variables:
        - ENVIRONMENT: Runtime environment (development, test, production)
        - APP_NAME: Application name (default: "Konvata")
        - DEBUG: Enable debug mode (default: False)
        - LOG_LEVEL: Logging level (default: "INFO")
        - LOG_FORMAT: "text" or "json" (default: "text")

    Provider settings:
        - COINLAYER_API_KEY: Provider access key (required in production)
        - COINLAYER_BASE_URL: Provider API root
        - PROVIDER_TIMEOUT_SECONDS: HTTP timeout for provider calls
        - PROVIDER_CACHE_TTL_SECONDS: Response cache lifetime (0 disables)
        - PROVIDER_CACHE_MAX_ENTRIES: Response cache capacity
    """

    # Environment mode - determines validation strictness
    environment: Literal["development", "test", "production"] = Field(
        default="development",
        description="Runtime environment (development, test, production)"
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_format: Literal["text", "json"] = Field(
        default="text",
        description="Log output format"
    )

    app_name: str = "Konvata"
    debug: bool = False

    # =========================================================================
    # RATE PROVIDER (coinlayer)
    # =========================================================================
    coinlayer_api_key: str | None = Field(
        default=None,
        description="Access key for the coinlayer API"
    )
    coinlayer_base_url: str = Field(
        default="https://api.coinlayer.com/api",
        description="Root URL of the coinlayer API"
    )
    provider_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="HTTP timeout for provider requests"
    )
    provider_cache_ttl_seconds: int = Field(
        default=30,
        ge=0,
        le=3600,
        description="Seconds a successful provider response is reused (0 = no cache)"
    )
    provider_cache_max_entries: int = Field(
        default=256,
        ge=1,
        description="Maximum cached provider responses"
    )

    # =========================================================================
    # RATE LIMITING
    # =========================================================================
    rate_limit_enabled: bool = Field(
        default=True,
        description="Enable per-client request rate limiting"
    )
    trust_proxy_headers: bool = Field(
        default=False,
        description="Trust X-Forwarded-For from any client (only behind a load balancer)"
    )
    trusted_proxy_ips: list[str] = Field(
        default=[],
        description="Proxy IPs whose X-Forwarded-For headers are trusted"
    )

    # =========================================================================
    # CORS
    # =========================================================================
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://127.0.0.1:3000"],
        description="Allowed CORS origins"
    )
    cors_allow_credentials: bool = Field(
        default=True,
        description="Allow credentials in CORS requests"
    )
    cors_allow_methods: list[str] = Field(
        default=["GET"],
        description="Allowed HTTP methods for CORS"
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        description="Allowed HTTP headers for CORS"
    )

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE) if _ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @model_validator(mode="after")
    def validate_provider_config(self) -> "Settings":
        """
        Validate provider configuration based on environment.

        Rules:
        - test: rate limiting off
        - development: missing API key is tolerated until first use
        - production: API key required
        """
        if self.environment == "test":
            object.__setattr__(self, "rate_limit_enabled", False)
            return self

        if self.environment == "production" and not self.coinlayer_api_key:
            raise ValueError(
                "COINLAYER_API_KEY is required in production environment. "
                "Set COINLAYER_API_KEY to your coinlayer access key."
            )

        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_test(self) -> bool:
        """Check if running in test environment."""
        return self.environment == "test"

    @property
    def is_provider_configured(self) -> bool:
        """Check if the rate provider credential is set."""
        return bool(self.coinlayer_api_key)


# Create single instance
settings = Settings()
