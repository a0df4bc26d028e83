"""
Client settings using pydantic-settings.

Environment variables are prefixed with SATUSEHAT_.
"""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from satusehat.config.environment import Environment
from satusehat.constants import REQUEST_TIMEOUT_SECONDS

load_dotenv()


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SATUSEHAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Credentials
    client_id: str | None = None
    client_secret: SecretStr | None = None
    environment: Environment = Environment.DEVELOPMENT

    # Request settings
    request_timeout: float = REQUEST_TIMEOUT_SECONDS

    # Logging
    log_level: str = "INFO"
    log_json: bool = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def reset_settings() -> None:
    """Clear the cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()
