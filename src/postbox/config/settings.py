"""Application settings loaded from environment variables."""

import typing as t
from enum import Enum

from pydantic import EmailStr, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.retry import RetryConfig


class Environment(Enum):
    """Runtime environment for the application."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Log levels understood by loguru."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    SUCCESS = "SUCCESS"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Runtime configuration used across the project.

    Every field can be set through a ``POSTBOX_``-prefixed environment
    variable or a ``.env`` file, e.g. ``POSTBOX_RESEND_API_KEY``.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="POSTBOX_", extra="ignore"
    )

    environment: Environment = Environment.PRODUCTION
    log_level: LogLevel = LogLevel.INFO
    dry_run: bool = False  # Route mail to the in-memory transport

    resend_api_key: SecretStr | None = Field(default=None, min_length=32)
    resend_base_url: str = "https://api.resend.com"
    email_from: EmailStr = "noreply@example.com"
    email_from_name: str = Field(default="Postbox", min_length=1)
    request_timeout: float = Field(default=30.0, gt=0)

    retry_max_attempts: int = Field(default=3, ge=1)
    retry_initial_delay: float = Field(default=1.0, ge=0)
    retry_max_delay: float = Field(default=10.0, ge=0)
    retry_backoff_multiplier: float = Field(default=2.0, ge=1)

    @property
    def sender(self) -> str:
        """RFC 5322 sender, e.g. ``Postbox <noreply@example.com>``."""
        return f"{self.email_from_name} <{self.email_from}>"

    def retry_config(self) -> RetryConfig:
        """Build the default RetryConfig for outbound provider calls."""
        return RetryConfig(
            max_attempts=self.retry_max_attempts,
            initial_delay=self.retry_initial_delay,
            max_delay=self.retry_max_delay,
            backoff_multiplier=self.retry_backoff_multiplier,
        )


def build_settings(**overrides: t.Any) -> Settings:
    """Create Settings, ignoring overrides that are None.

    Lets CLI options that were not supplied fall through to the
    environment and defaults.
    """
    filtered = {k: v for k, v in overrides.items() if v is not None}
    return Settings(**filtered)
