"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

ANY_API_VERSION = "*"


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current broker release string.
        debug: Enable debug mode. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        rate_limit_enabled: Toggle slowapi rate limiting. Off by default:
            platforms call from a few controller addresses and OSB has no
            meaning for 429.
        rate_limit_default: Default rate limit for all endpoints.
        broker_api_version: Required X-Broker-API-Version header value,
            or "*" to accept any version.
        catalog_path: JSON file holding the service catalog. An empty
            catalog is served when unset.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "Open Service Broker"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    rate_limit_enabled: bool = False
    rate_limit_default: str = "120/minute"
    broker_api_version: str = ANY_API_VERSION
    catalog_path: Optional[str] = None

    @property
    def accepts_any_api_version(self) -> bool:
        """Return True when no X-Broker-API-Version check is configured."""
        return self.broker_api_version.strip() in ("", ANY_API_VERSION)


settings = Settings()
