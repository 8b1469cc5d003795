"""Configuration management using pydantic-settings."""

from dataclasses import dataclass
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from storefront_drip.exceptions import DripConfigurationError

DEFAULT_API_URL = "https://api.getdrip.com"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Drip account
    drip_api_key: str = Field(
        default="",
        description="Drip API token (sent as the Basic auth user name)",
    )
    drip_account_id: str = Field(
        default="",
        description="Drip account id events are recorded under",
    )
    drip_api_url: str = Field(
        default=DEFAULT_API_URL,
        description="Drip REST API base URL",
    )
    drip_provider: str = Field(
        default="solidus",
        description="Provider tag attached to every shopper activity event",
    )
    drip_timeout: float = Field(
        default=30.0,
        description="HTTP timeout for Drip requests in seconds",
    )
    drip_mirror_shipping_name: bool = Field(
        default=False,
        description="Report the shipping recipient's name on both addresses",
    )

    # Storefront
    storefront_url: str = Field(
        default="",
        description="Storefront base URL used for cart, order and product links",
    )
    address_combined_name: bool = Field(
        default=False,
        description="Addresses store a single full-name field instead of first/last names",
    )

    # Observability
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_json: bool = Field(
        default=True,
        description="Enable JSON structured logging",
    )
    enable_tracing: bool = Field(
        default=True,
        description="Wrap Drip requests in OpenTelemetry spans",
    )
    enable_metrics: bool = Field(
        default=True,
        description="Record OpenTelemetry metrics for Drip requests",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@dataclass(frozen=True)
class DripConfig:
    """Explicit configuration handed to the Drip client and dispatcher."""

    api_key: str
    account_id: str
    api_url: str = DEFAULT_API_URL
    provider: str = "solidus"
    timeout: float = 30.0
    storefront_url: str | None = None
    combined_name: bool = False
    mirror_shipping_name: bool = False
    enable_tracing: bool = True
    enable_metrics: bool = True

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "DripConfig":
        """Build a config from environment settings."""
        settings = settings or get_settings()
        return cls(
            api_key=settings.drip_api_key,
            account_id=settings.drip_account_id,
            api_url=settings.drip_api_url,
            provider=settings.drip_provider,
            timeout=settings.drip_timeout,
            storefront_url=settings.storefront_url or None,
            combined_name=settings.address_combined_name,
            mirror_shipping_name=settings.drip_mirror_shipping_name,
            enable_tracing=settings.enable_tracing,
            enable_metrics=settings.enable_metrics,
        )

    def validate(self) -> None:
        """Raise DripConfigurationError when credentials are missing."""
        missing = [
            name
            for name, value in (("api_key", self.api_key), ("account_id", self.account_id))
            if not value
        ]
        if missing:
            raise DripConfigurationError(
                f"Drip configuration incomplete, missing: {', '.join(missing)}"
            )
