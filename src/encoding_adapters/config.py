"""Runtime configuration for the encoding adapters."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the encoding adapters."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Provider used by `python -m encoding_adapters`
    transcoding_provider: str = Field(default="bitmovin", alias="TRANSCODING_PROVIDER")

    # Bitmovin API
    bitmovin_api_key: str | None = Field(default=None, alias="BITMOVIN_API_KEY")
    bitmovin_endpoint: str = Field(default="https://api.bitmovin.com/v1/", alias="BITMOVIN_ENDPOINT")
    bitmovin_timeout: int = Field(default=5, alias="BITMOVIN_TIMEOUT", ge=1)  # seconds per request

    # S3 credentials handed to Bitmovin for reading sources and writing outputs
    bitmovin_aws_access_key_id: str | None = Field(default=None, alias="BITMOVIN_AWS_ACCESS_KEY_ID")
    bitmovin_aws_secret_access_key: str | None = Field(default=None, alias="BITMOVIN_AWS_SECRET_ACCESS_KEY")
    # S3 URL prefix for outputs, e.g. https://s3.amazonaws.com/my-bucket/encodes/
    bitmovin_destination: str | None = Field(default=None, alias="BITMOVIN_DESTINATION")

    bitmovin_encoding_region: str = Field(default="AWS_US_EAST_1", alias="BITMOVIN_ENCODING_REGION")
    bitmovin_encoding_version: str = Field(default="STABLE", alias="BITMOVIN_ENCODING_VERSION")

    # Manifest generation runs after the encode finishes; job_status waits for it
    manifest_poll_interval_seconds: float = Field(default=1.0, alias="MANIFEST_POLL_INTERVAL_SECONDS", ge=0)
    manifest_wait_timeout_seconds: float = Field(default=30.0, alias="MANIFEST_WAIT_TIMEOUT_SECONDS", ge=0)

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
