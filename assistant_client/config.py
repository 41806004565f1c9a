"""Client configuration loaded from environment variables."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_BETA_HEADER = "assistants=v2"


class ClientConfig(BaseSettings):
    """Settings for the transport and the run lifecycle engine."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra environment variables
        populate_by_name=True,  # Allow both field names and validation aliases
    )

    api_key: str = Field(
        default="",
        description="Static bearer token sent with every request",
        validation_alias="OPENAI_API_KEY",
    )
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Base URL of the API, without a trailing slash",
        validation_alias="OPENAI_BASE_URL",
    )
    beta_header: str = Field(
        default=DEFAULT_BETA_HEADER,
        description="Value of the OpenAI-Beta header",
        validation_alias="OPENAI_BETA_HEADER",
    )
    request_timeout: float = Field(
        default=60.0,
        gt=0,
        description="HTTP timeout in seconds for a single request",
        validation_alias="REQUEST_TIMEOUT",
    )
    run_poll_interval: float = Field(
        default=1.0,
        gt=0,
        description="Default seconds between run polls while waiting for a run to settle",
        validation_alias="RUN_POLL_INTERVAL",
    )
    run_settle_timeout: float = Field(
        default=60.0,
        gt=0,
        description="Default seconds to wait for a run to settle before giving up",
        validation_alias="RUN_SETTLE_TIMEOUT",
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)
