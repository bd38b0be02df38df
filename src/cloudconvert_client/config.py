"""Runtime configuration for the CloudConvert client."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_BASE = "https://api.cloudconvert.com/"


class Settings(BaseSettings):
    """Runtime configuration for the CloudConvert client."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    cloudconvert_api_key: str | None = Field(default=None, alias="CLOUDCONVERT_API_KEY")
    cloudconvert_api_base: str = Field(default=DEFAULT_API_BASE, alias="CLOUDCONVERT_API_BASE")
    # None keeps the transport's own default timeout
    cloudconvert_timeout_seconds: float | None = Field(
        default=None, alias="CLOUDCONVERT_TIMEOUT_SECONDS", gt=0
    )

    @property
    def api_base(self) -> str:
        """API base URL, always ending with a slash."""
        base = self.cloudconvert_api_base.strip()
        return base if base.endswith("/") else f"{base}/"


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
