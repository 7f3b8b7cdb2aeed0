"""
Configuration Management Module

This module handles loading, validating, and providing access to client configuration
from environment variables (.env file).

Uses Pydantic Settings for automatic validation and type conversion.

Key Features:
- Loads Intrinio credentials and base URL from .env file
- Keeps the password wrapped in a SecretStr so it never shows up in logs or reprs
- Leaves the request timeout unset by default (the transport default applies)

Usage:
    from core.config import settings

    # Access configuration values
    print(settings.intrinio_base_url)
    credentials = settings.get_credentials()
"""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, ConfigDict, Field, SecretStr

from core.logging import logger


class Credentials(BaseModel):
    """
    Immutable username/password pair used for HTTP Basic Authentication.

    The password is stored as a SecretStr; call `password.get_secret_value()`
    only where the Authorization header is built.
    """

    username: str
    password: SecretStr

    model_config = ConfigDict(frozen=True)


class Settings(BaseSettings):
    """
    Client Settings

    Values are automatically loaded from environment variables or .env file.

    Attributes:
        intrinio_base_url: HTTPS origin every request is sent to
        intrinio_username: API username (Basic Auth)
        intrinio_password: API password (Basic Auth)
        request_timeout: Total timeout per request in seconds (None = transport default)
        debug: Force DEBUG logging regardless of log_level
        log_level: Logging level name
    """

    # ============================================
    # Intrinio API Configuration
    # ============================================

    intrinio_base_url: str = Field(
        default="https://api.intrinio.com",
        description="Intrinio API base URL"
    )

    intrinio_username: str = Field(
        default="",
        description="Intrinio API username"
    )

    intrinio_password: SecretStr = Field(
        default=SecretStr(""),
        description="Intrinio API password"
    )

    request_timeout: Optional[float] = Field(
        default=None,
        description="HTTP request timeout in seconds (unset = no client-imposed timeout)"
    )

    # ============================================
    # Application Configuration
    # ============================================

    debug: bool = Field(
        default=False,
        description="Force DEBUG logging regardless of LOG_LEVEL"
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False
    )

    @property
    def has_credentials(self) -> bool:
        """True when both username and password are configured."""
        return bool(self.intrinio_username) and bool(self.intrinio_password.get_secret_value())

    def get_credentials(self) -> Credentials:
        """
        Build the Credentials value used by the API client.

        Returns:
            Credentials with the configured username and password

        Raises:
            ValueError: If username or password is missing
        """
        if not self.has_credentials:
            raise ValueError(
                "INTRINIO_USERNAME and INTRINIO_PASSWORD must both be set"
            )
        return Credentials(
            username=self.intrinio_username,
            password=self.intrinio_password
        )


# ============================================
# Global Settings Instance
# ============================================

settings = Settings()


# ============================================
# Configuration Validation
# ============================================

def validate_configuration() -> None:
    """
    Validate critical configuration settings.

    Raises:
        ValueError: If configuration is invalid
    """
    if not settings.intrinio_base_url.startswith("https://"):
        raise ValueError(
            f"INTRINIO_BASE_URL must be an https:// origin, got '{settings.intrinio_base_url}'"
        )

    if settings.request_timeout is not None and settings.request_timeout <= 0:
        raise ValueError(
            f"Invalid REQUEST_TIMEOUT: {settings.request_timeout}. Must be positive"
        )

    valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if settings.log_level.upper() not in valid_log_levels:
        raise ValueError(
            f"Invalid LOG_LEVEL: '{settings.log_level}'. "
            f"Must be one of: {', '.join(valid_log_levels)}"
        )

    logger.info("Configuration validated successfully")
    logger.info(f"Intrinio API: {settings.intrinio_base_url}")
    logger.info(f"Credentials configured: {'yes' if settings.has_credentials else 'no'}")
    logger.info(f"Request timeout: {settings.request_timeout or 'transport default'}")
    logger.info(f"Log level: {'DEBUG (debug mode)' if settings.debug else settings.log_level.upper()}")
