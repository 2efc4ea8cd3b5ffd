from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseModel):
    """Application-specific configuration values."""

    name: str = "ctxdocs"
    env: str = "development"
    debug: bool = False
    port: int = 8000
    log_level: str = "INFO"
    # Transport settings for FastMCP: "stdio" (default), "http", or "sse"
    transport: Literal["stdio", "http", "sse"] = "stdio"
    host: str = "127.0.0.1"


class ProviderSettings(BaseModel):
    """Settings for the docs provider.

    Frozen so equal settings hash equally and can key the provider cache.
    """

    model_config = ConfigDict(frozen=True)

    # Locator of the corpus index, e.g. "file:///srv/docs/index.json" or an https URL
    index: Optional[str] = None
    timeout: float = 30.0
    search_limit: int = 20


class Settings(BaseSettings):
    """Top-level settings loaded from environment variables and .env only."""

    model_config = SettingsConfigDict(
        env_prefix="CTXDOCS_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    app: AppConfig = AppConfig()
    docs: ProviderSettings = ProviderSettings()


def load_settings() -> Settings:
    """Load settings from environment variables and .env only."""
    return Settings()  # type: ignore[call-arg]
