"""Settings for the Etsy OAuth client.

Values are loaded from environment variables prefixed with ``ETSY_``
(e.g. ``ETSY_CONSUMER_KEY``) or from a local ``.env`` file.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from etsy_access.core.config.enums import Environment

DEFAULT_API_BASE_URL = "https://openapi.etsy.com"


class Settings(BaseSettings):
    """Settings consumed by the signing and credential-exchange layer.

    Only the consumer credentials affect signing. ``RETRY_ATTEMPTS`` and
    ``API_BASE_URL`` drive the credential exchange.
    """

    model_config = SettingsConfigDict(
        env_prefix="ETSY_",
        env_file=".env",
        extra="ignore",
    )

    CONSUMER_KEY: str = Field("", description="Application key (keystring)")
    CONSUMER_SECRET: str = Field("", description="Application shared secret")
    RETRY_ATTEMPTS: int = Field(
        3, ge=0, description="Retries after the first failed exchange attempt"
    )
    API_BASE_URL: str = Field(DEFAULT_API_BASE_URL, description="Scheme and host of the API")

    ENVIRONMENT: Environment = Environment.LOCAL
    LOG_LEVEL: str = "INFO"

    @field_validator("API_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        """Endpoint paths start with '/', so the base must not end with one."""
        return value.rstrip("/")

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        """Accept lowercase level names from the environment."""
        return value.upper()
